# finances/services/capital.py

from django.db import transaction

from accounts.constants import UserRole
from core.exceptions import AuthorizationError, ValidationError
from finances.models import Transaction, TypeTransaction
from finances.services.ledger import calculer_solde, enregistrer_transaction
from tenants.models import Boutique


def _verifier_admin(utilisateur):
    if utilisateur.role != UserRole.ADMIN:
        raise AuthorizationError("Seul un administrateur peut gérer le capital.")


@transaction.atomic
def injecter_capital(utilisateur, boutique, montant, description=""):
    _verifier_admin(utilisateur)

    return enregistrer_transaction(
        boutique=boutique,
        utilisateur=utilisateur,
        type_transaction=TypeTransaction.INJECTION_CAPITAL,
        montant=montant,
        description=description or "Injection de capital",
    )


@transaction.atomic
def retirer_capital(utilisateur, boutique, montant, description=""):
    """
    Retrait de fonds, plafonné à la trésorerie disponible.
    """
    _verifier_admin(utilisateur)

    # un retrait à la fois par boutique
    boutique = Boutique.objects.select_for_update().get(pk=boutique.pk)

    solde = calculer_solde(boutique)
    if montant > solde:
        raise ValidationError(
            f"Trésorerie insuffisante. Disponible: {solde} | Demandé: {montant}",
            details={"disponible": str(solde), "demande": str(montant)},
        )

    return enregistrer_transaction(
        boutique=boutique,
        utilisateur=utilisateur,
        type_transaction=TypeTransaction.RETRAIT,
        montant=montant,
        description=description or "Retrait de capital",
    )


def injections_capital(boutique=None):
    qs = Transaction.objects.filter(
        type=TypeTransaction.INJECTION_CAPITAL
    ).select_related("boutique", "utilisateur")

    if boutique is not None:
        qs = qs.filter(boutique=boutique)

    return qs
