# commerce/services/paiement.py

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum

from commerce.constants import MethodePaiement, StatutPaiement
from commerce.models_vente import Paiement, Vente
from core.exceptions import OverpaymentError, SaleNotFoundError, ValidationError
from core.permissions import verifier_acces_boutique
from finances.models import TypeTransaction
from finances.services.ledger import (
    enregistrer_transaction,
    supprimer_ecriture_paiement,
    synchroniser_ecriture_paiement,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


# ============================================================
# STATUT DE PAIEMENT (FONCTION UNIQUE)
# ============================================================

def calculer_statut(montant_paye, montant_total):
    """
    PAYE : plus rien à payer.
    IMPAYE : rien n'a été payé.
    PARTIEL : entre les deux.
    """

    if montant_total - montant_paye <= 0:
        return StatutPaiement.PAYE

    if montant_paye <= 0:
        return StatutPaiement.IMPAYE

    return StatutPaiement.PARTIEL


def _montant_positif(montant):
    montant = Decimal(montant)
    if montant <= 0:
        raise ValidationError("Le montant doit être positif.")
    return montant


# ============================================================
# RAPPROCHEMENT VENTE / PAIEMENTS
# ============================================================

def total_paiements(vente, exclure=None):
    qs = Paiement.objects.filter(vente=vente)
    if exclure is not None:
        qs = qs.exclude(pk=exclure.pk)
    return qs.aggregate(total=Sum("montant"))["total"] or ZERO


def rapprocher_vente(vente):
    """
    Recalcule payé / restant / statut à partir des paiements.
    """

    montant_paye = total_paiements(vente)

    vente.montant_paye = montant_paye
    vente.montant_restant = vente.montant_total - montant_paye
    vente.statut = calculer_statut(montant_paye, vente.montant_total)
    vente.save(update_fields=["montant_paye", "montant_restant", "statut", "updated_at"])

    return vente


def _verrouiller_vente(boutique, vente_id):
    try:
        return Vente.objects.select_for_update().get(pk=vente_id, boutique=boutique)
    except Vente.DoesNotExist:
        raise SaleNotFoundError(details={"vente_id": vente_id})


def creer_paiement(vente, utilisateur, montant, methode_paiement=MethodePaiement.ESPECES, reference="", notes=""):
    """
    Paiement + écriture RECETTE liée. L'appelant a déjà contrôlé le plafond.
    """

    paiement = Paiement.objects.create(
        boutique_id=vente.boutique_id,
        vente=vente,
        montant=montant,
        methode_paiement=methode_paiement,
        reference=reference or "",
        notes=notes or "",
        utilisateur=utilisateur,
    )

    enregistrer_transaction(
        boutique=vente.boutique,
        utilisateur=utilisateur,
        type_transaction=TypeTransaction.RECETTE,
        montant=montant,
        description=f"Paiement vente #{vente.numero_vente}",
        vente=vente,
        paiement=paiement,
    )

    return paiement


# ============================================================
# PAIEMENTS
# ============================================================

@transaction.atomic
def ajouter_paiement(
    utilisateur,
    boutique,
    vente_id,
    montant,
    methode_paiement=MethodePaiement.ESPECES,
    reference="",
    notes="",
):
    verifier_acces_boutique(utilisateur, boutique.pk)

    montant = _montant_positif(montant)
    vente = _verrouiller_vente(boutique, vente_id)

    restant = vente.montant_total - total_paiements(vente)
    if montant > restant:
        raise OverpaymentError(montant, restant)

    paiement = creer_paiement(vente, utilisateur, montant, methode_paiement, reference, notes)
    rapprocher_vente(vente)

    logger.info(
        "Paiement %s enregistré sur vente %s boutique=%s (statut %s)",
        montant, vente.numero_vente, boutique.pk, vente.statut,
    )

    return paiement


@transaction.atomic
def modifier_paiement(utilisateur, paiement, montant=None, methode_paiement=None, reference=None, notes=None):
    verifier_acces_boutique(utilisateur, paiement.boutique_id)

    vente = Vente.objects.select_for_update().get(pk=paiement.vente_id)

    if montant is not None:
        montant = _montant_positif(montant)
        restant = vente.montant_total - total_paiements(vente, exclure=paiement)
        if montant > restant:
            raise OverpaymentError(montant, restant)
        paiement.montant = montant

    if methode_paiement is not None:
        paiement.methode_paiement = methode_paiement
    if reference is not None:
        paiement.reference = reference
    if notes is not None:
        paiement.notes = notes

    paiement.save()
    synchroniser_ecriture_paiement(paiement)
    rapprocher_vente(vente)

    return paiement


@transaction.atomic
def supprimer_paiement(utilisateur, paiement):
    verifier_acces_boutique(utilisateur, paiement.boutique_id)

    vente = Vente.objects.select_for_update().get(pk=paiement.vente_id)

    supprimer_ecriture_paiement(paiement)
    paiement.delete()
    rapprocher_vente(vente)

    logger.info(
        "Paiement supprimé sur vente %s boutique=%s (statut %s)",
        vente.numero_vente, vente.boutique_id, vente.statut,
    )

    return vente
