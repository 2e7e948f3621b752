# commerce/services/stock.py

import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from commerce.models_stock import MouvementStock, Stock
from core.exceptions import InsufficientStockError, NotFoundError, ValidationError
from core.permissions import verifier_acces_boutique

logger = logging.getLogger(__name__)


# ============================================================
# ACCÈS AUX LIGNES DE STOCK
# ============================================================

def obtenir_ou_creer_stock(produit, verrouiller=False):
    """
    Ligne de stock du produit, créée à zéro si elle manque.
    """

    stock, _ = Stock.objects.get_or_create(
        produit=produit,
        defaults={"boutique_id": produit.boutique_id},
    )

    if verrouiller:
        stock = Stock.objects.select_for_update().get(pk=stock.pk)

    return stock


def verrouiller_stocks(produit_ids):
    """
    {produit_id: Stock} verrouillés, dans l'ordre des clés primaires.
    """

    stocks = (
        Stock.objects
        .select_for_update()
        .filter(produit_id__in=list(produit_ids))
        .order_by("pk")
    )
    return {stock.produit_id: stock for stock in stocks}


# ============================================================
# AJUSTEMENT (SEULE ÉCRITURE DE Stock.quantite)
# ============================================================

@transaction.atomic
def ajuster_stock(stock, quantite, type_mouvement, motif="", vente=None, utilisateur=None):
    """
    Applique une entrée ou une sortie et enregistre le mouvement.

    La sortie est un UPDATE conditionnel (quantite >= demandé) :
    le stock ne peut pas devenir négatif même en cas d'accès concurrent.
    """

    quantite = int(quantite)

    if quantite <= 0:
        raise ValidationError("La quantité doit être strictement positive.")

    maintenant = timezone.now()

    if type_mouvement == MouvementStock.MOUVEMENT_SORTIE:
        modifies = (
            Stock.objects
            .filter(pk=stock.pk, quantite__gte=quantite)
            .update(
                quantite=F("quantite") - quantite,
                derniere_sortie=maintenant,
                updated_at=maintenant,
            )
        )

        if not modifies:
            disponible = (
                Stock.objects
                .filter(pk=stock.pk)
                .values_list("quantite", flat=True)
                .first()
            )
            if disponible is None:
                raise NotFoundError("Stock introuvable.")
            raise InsufficientStockError(stock.produit.nom, disponible, quantite)

    elif type_mouvement == MouvementStock.MOUVEMENT_ENTREE:
        modifies = (
            Stock.objects
            .filter(pk=stock.pk)
            .update(
                quantite=F("quantite") + quantite,
                derniere_entree=maintenant,
                updated_at=maintenant,
            )
        )

        if not modifies:
            raise NotFoundError("Stock introuvable.")

    else:
        raise ValidationError(f"Type de mouvement invalide : {type_mouvement}")

    mouvement = MouvementStock.objects.create(
        boutique_id=stock.boutique_id,
        stock=stock,
        type_mouvement=type_mouvement,
        quantite=quantite,
        motif=motif,
        vente=vente,
        utilisateur=utilisateur,
        date_mouvement=maintenant,
    )

    stock.refresh_from_db(
        fields=["quantite", "derniere_entree", "derniere_sortie", "updated_at"]
    )

    return mouvement


# ============================================================
# MOUVEMENT MANUEL (INVENTAIRE, CASSE, ...)
# ============================================================

@transaction.atomic
def enregistrer_mouvement_manuel(utilisateur, stock, type_mouvement, quantite, motif=""):
    verifier_acces_boutique(utilisateur, stock.boutique_id)

    stock = Stock.objects.select_for_update().get(pk=stock.pk)

    mouvement = ajuster_stock(
        stock,
        quantite,
        type_mouvement,
        motif=motif or "Ajustement manuel",
        utilisateur=utilisateur,
    )

    logger.info(
        "Mouvement manuel %s %s sur stock=%s boutique=%s",
        type_mouvement, quantite, stock.pk, stock.boutique_id,
    )

    return mouvement
