# commerce/services/vente.py

import logging
from collections import defaultdict
from decimal import Decimal

from django.db import transaction

from commerce.constants import MethodePaiement
from commerce.models_stock import MouvementStock
from commerce.models_vente import LigneVente, Vente
from commerce.services.catalogue import charger_produits
from commerce.services.paiement import calculer_statut, creer_paiement
from commerce.services.stock import ajuster_stock, obtenir_ou_creer_stock, verrouiller_stocks
from core.exceptions import (
    InsufficientStockError,
    NotFoundError,
    OverpaymentError,
    SaleNotFoundError,
    ValidationError,
)
from core.models import TypeDocument
from core.permissions import verifier_acces_boutique
from core.services.numerotation import prochain_numero
from finances.services.ledger import supprimer_ecritures_vente

logger = logging.getLogger(__name__)

CENTIMES = Decimal("0.01")


def _valider_lignes(lignes):
    if not lignes:
        raise ValidationError("Une vente doit contenir au moins une ligne.")

    for ligne in lignes:
        if int(ligne["quantite"]) <= 0:
            raise ValidationError(
                "La quantité doit être strictement positive.",
                details={"produit_id": ligne["produit_id"]},
            )
        if Decimal(ligne["prix_unitaire"]) < 0:
            raise ValidationError(
                "Le prix unitaire ne peut pas être négatif.",
                details={"produit_id": ligne["produit_id"]},
            )


# ============================================================
# CRÉATION DE VENTE
# ============================================================

@transaction.atomic
def creer_vente(
    utilisateur,
    boutique,
    lignes,
    client=None,
    montant_paye=None,
    methode_paiement=MethodePaiement.ESPECES,
    date_echeance=None,
):
    """
    Enregistre une vente complète ou rien.

    lignes : [{"produit_id", "quantite", "prix_unitaire"}, ...]
    montant_paye : total de la vente s'il n'est pas fourni.
    """

    verifier_acces_boutique(utilisateur, boutique.pk)
    _valider_lignes(lignes)

    if client is not None and client.boutique_id != boutique.pk:
        raise NotFoundError("Client introuvable.")

    # ============================================
    # 1️⃣ PRODUITS DE LA BOUTIQUE
    # ============================================

    produits = charger_produits(boutique, [ligne["produit_id"] for ligne in lignes])

    # ============================================
    # 2️⃣ DISPONIBILITÉ (AVANT TOUTE ÉCRITURE)
    # ============================================

    demandes = defaultdict(int)
    for ligne in lignes:
        demandes[ligne["produit_id"]] += int(ligne["quantite"])

    stocks = verrouiller_stocks(demandes.keys())

    for produit_id, demande in demandes.items():
        stock = stocks.get(produit_id)
        disponible = stock.quantite if stock else 0
        if disponible < demande:
            raise InsufficientStockError(produits[produit_id].nom, disponible, demande)

    # ============================================
    # 3️⃣ MONTANTS
    # ============================================

    montant_total = sum(
        (
            (Decimal(ligne["quantite"]) * Decimal(ligne["prix_unitaire"])).quantize(CENTIMES)
            for ligne in lignes
        ),
        Decimal("0.00"),
    )

    montant_paye = montant_total if montant_paye is None else Decimal(montant_paye)

    if montant_paye < 0:
        raise ValidationError("Le montant payé ne peut pas être négatif.")
    if montant_paye > montant_total:
        raise OverpaymentError(montant_paye, montant_total)

    # ============================================
    # 4️⃣ ÉCRITURES
    # ============================================

    numero = prochain_numero(
        boutique,
        TypeDocument.VENTE,
        existants=Vente.objects.filter(boutique=boutique).values_list("numero_vente", flat=True),
    )

    vente = Vente.objects.create(
        boutique=boutique,
        numero_vente=numero,
        client=client,
        utilisateur=utilisateur,
        montant_total=montant_total,
        montant_paye=montant_paye,
        montant_restant=montant_total - montant_paye,
        statut=calculer_statut(montant_paye, montant_total),
        date_echeance=date_echeance,
    )

    LigneVente.objects.bulk_create([
        LigneVente(
            vente=vente,
            produit=produits[ligne["produit_id"]],
            quantite=int(ligne["quantite"]),
            prix_unitaire=Decimal(ligne["prix_unitaire"]),
            sous_total=(Decimal(ligne["quantite"]) * Decimal(ligne["prix_unitaire"])).quantize(CENTIMES),
        )
        for ligne in lignes
    ])

    for ligne in lignes:
        ajuster_stock(
            stocks[ligne["produit_id"]],
            ligne["quantite"],
            MouvementStock.MOUVEMENT_SORTIE,
            motif=f"Vente {numero}",
            vente=vente,
            utilisateur=utilisateur,
        )

    # Le paiement comptant initial est un paiement comme les autres
    if montant_paye > 0:
        creer_paiement(vente, utilisateur, montant_paye, methode_paiement)

    logger.info(
        "Vente %s créée boutique=%s total=%s payé=%s statut=%s",
        numero, boutique.pk, montant_total, montant_paye, vente.statut,
    )

    return (
        Vente.objects
        .select_related("client", "utilisateur")
        .prefetch_related("lignes__produit", "paiements", "mouvements_stock__stock__produit")
        .get(pk=vente.pk)
    )


# ============================================================
# ANNULATION DE VENTE
# ============================================================

@transaction.atomic
def annuler_vente(utilisateur, boutique, vente_id):
    """
    Remet en stock chaque ligne puis supprime la vente,
    ses mouvements de sortie, ses paiements et leurs écritures.
    """

    verifier_acces_boutique(utilisateur, boutique.pk)

    try:
        vente = Vente.objects.select_for_update().get(pk=vente_id, boutique=boutique)
    except Vente.DoesNotExist:
        raise SaleNotFoundError(details={"vente_id": vente_id})

    numero = vente.numero_vente

    lignes = list(vente.lignes.select_related("produit").order_by("id"))

    for ligne in lignes:
        obtenir_ou_creer_stock(ligne.produit)

    # même ordre de verrouillage que creer_vente
    stocks = verrouiller_stocks(ligne.produit_id for ligne in lignes)

    for ligne in lignes:
        ajuster_stock(
            stocks[ligne.produit_id],
            ligne.quantite,
            MouvementStock.MOUVEMENT_ENTREE,
            motif=f"Annulation vente {numero}",
            utilisateur=utilisateur,
        )

    supprimer_ecritures_vente(vente)
    vente.mouvements_stock.all().delete()
    vente.paiements.all().delete()
    vente.delete()

    logger.info(
        "Vente %s annulée boutique=%s par %s",
        numero, boutique.pk, utilisateur.username,
    )

    return numero
