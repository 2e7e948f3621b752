# commerce/services/reception.py

import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from commerce.constants import STATUTS_COMMANDE_CLOTURES, StatutCommande
from commerce.models import Fournisseur
from commerce.models_commande import Commande, LigneCommande
from commerce.models_stock import MouvementStock
from commerce.services.catalogue import charger_produits
from commerce.services.stock import ajuster_stock, obtenir_ou_creer_stock
from core.exceptions import (
    ConflictError,
    LineNotFoundError,
    NotFoundError,
    OrderAlreadyClosedError,
    OrderNotFoundError,
    OverpaymentError,
    OverReceiptError,
    ValidationError,
)
from core.models import TypeDocument
from core.permissions import verifier_acces_boutique
from core.services.numerotation import prochain_numero
from finances.models import CategorieDepense, TypeTransaction
from finances.services.ledger import enregistrer_transaction

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def _verrouiller_commande(boutique, commande_id):
    try:
        return Commande.objects.select_for_update().get(pk=commande_id, boutique=boutique)
    except Commande.DoesNotExist:
        raise OrderNotFoundError(details={"commande_id": commande_id})


def _verifier_ouverte(commande):
    if commande.statut in STATUTS_COMMANDE_CLOTURES:
        raise OrderAlreadyClosedError(
            f"La commande {commande.numero_commande} est déjà "
            f"{commande.get_statut_display().lower()}."
        )


# ============================================================
# CRÉATION DE COMMANDE
# ============================================================

@transaction.atomic
def creer_commande(
    utilisateur,
    boutique,
    fournisseur_id,
    lignes,
    date_echeance=None,
    notes="",
):
    """
    lignes : [{"produit_id", "quantite", "prix_unitaire"}, ...]
    """

    verifier_acces_boutique(utilisateur, boutique.pk)

    if not lignes:
        raise ValidationError("Une commande doit contenir au moins une ligne.")

    try:
        fournisseur = Fournisseur.objects.get(pk=fournisseur_id, boutique=boutique)
    except Fournisseur.DoesNotExist:
        raise NotFoundError("Fournisseur introuvable.")

    produits = charger_produits(boutique, [ligne["produit_id"] for ligne in lignes])

    a_creer = []
    for ligne in lignes:
        quantite = int(ligne["quantite"])
        prix = Decimal(ligne["prix_unitaire"])

        if quantite <= 0:
            raise ValidationError("La quantité commandée doit être strictement positive.")
        if prix < 0:
            raise ValidationError("Le prix unitaire ne peut pas être négatif.")

        a_creer.append(
            LigneCommande(
                produit=produits[ligne["produit_id"]],
                quantite=quantite,
                prix_unitaire=prix,
                sous_total=quantite * prix,
            )
        )

    montant_total = sum((ligne.sous_total for ligne in a_creer), ZERO)

    numero = prochain_numero(
        boutique,
        TypeDocument.COMMANDE,
        existants=Commande.objects.filter(boutique=boutique).values_list("numero_commande", flat=True),
    )

    commande = Commande.objects.create(
        boutique=boutique,
        numero_commande=numero,
        fournisseur=fournisseur,
        utilisateur=utilisateur,
        montant_total=montant_total,
        montant_paye=ZERO,
        montant_restant=montant_total,
        date_echeance=date_echeance,
        notes=notes or "",
    )

    for ligne in a_creer:
        ligne.commande = commande
    LigneCommande.objects.bulk_create(a_creer)

    logger.info("Commande %s créée boutique=%s total=%s", numero, boutique.pk, montant_total)

    return commande


# ============================================================
# PAIEMENT FOURNISSEUR
# ============================================================

def _appliquer_paiement(commande, utilisateur, montant):
    montant = Decimal(montant)

    if montant <= 0:
        raise ValidationError("Le montant doit être positif.")

    if montant > commande.montant_restant:
        raise OverpaymentError(montant, commande.montant_restant)

    commande.montant_paye += montant
    commande.montant_restant = commande.montant_total - commande.montant_paye

    nature = "final" if commande.montant_restant == 0 else "partiel"

    enregistrer_transaction(
        boutique=commande.boutique,
        utilisateur=utilisateur,
        type_transaction=TypeTransaction.ACHAT,
        montant=montant,
        description=f"Paiement {nature} commande #{commande.numero_commande}",
        commande=commande,
        categorie_depense=CategorieDepense.MARCHANDISES,
    )


@transaction.atomic
def payer_commande(utilisateur, boutique, commande_id, montant):
    verifier_acces_boutique(utilisateur, boutique.pk)

    commande = _verrouiller_commande(boutique, commande_id)

    if commande.statut == StatutCommande.ANNULEE:
        raise OrderAlreadyClosedError("Impossible de payer une commande annulée.")

    _appliquer_paiement(commande, utilisateur, montant)
    commande.save(update_fields=["montant_paye", "montant_restant", "updated_at"])

    return commande


# ============================================================
# RÉCEPTION
# ============================================================

@transaction.atomic
def recevoir_commande(
    utilisateur,
    boutique,
    commande_id,
    lignes_recues,
    montant_paye=None,
    annuler_reste=False,
    notes=None,
):
    """
    Réception partielle ou totale d'une commande fournisseur.

    lignes_recues : [{"ligne_id", "quantite_recue"}, ...] où
    quantite_recue est la quantité reçue lors de CETTE réception.
    annuler_reste : ramène chaque ligne à sa quantité déjà reçue
    (le reliquat ne sera jamais livré) et recalcule le total.
    """

    verifier_acces_boutique(utilisateur, boutique.pk)

    commande = _verrouiller_commande(boutique, commande_id)
    _verifier_ouverte(commande)

    lignes = {
        ligne.pk: ligne
        for ligne in (
            LigneCommande.objects
            .select_for_update(of=("self",))
            .select_related("produit")
            .filter(commande=commande)
        )
    }

    # ============================================
    # 1️⃣ QUANTITÉS REÇUES + ENTRÉES DE STOCK
    # ============================================

    montant_total_recu = ZERO
    lignes_traitees = []

    for entree in lignes_recues:
        ligne = lignes.get(int(entree["ligne_id"]))

        if ligne is None:
            raise LineNotFoundError(details={"ligne_id": entree["ligne_id"]})

        delta = int(entree["quantite_recue"])

        if delta < 0:
            raise ValidationError("La quantité reçue ne peut pas être négative.")

        nouvelle = ligne.quantite_recue + delta

        if nouvelle > ligne.quantite:
            raise OverReceiptError(ligne.produit.nom, ligne.quantite, nouvelle)

        if delta == 0:
            continue

        ligne.quantite_recue = nouvelle
        ligne.save(update_fields=["quantite_recue"])

        stock = obtenir_ou_creer_stock(ligne.produit, verrouiller=True)
        ajuster_stock(
            stock,
            delta,
            MouvementStock.MOUVEMENT_ENTREE,
            motif=f"Réception commande {commande.numero_commande} - {ligne.produit.nom}",
            utilisateur=utilisateur,
        )

        montant_total_recu += delta * ligne.prix_unitaire
        lignes_traitees.append({
            "ligne_id": ligne.pk,
            "produit": ligne.produit.nom,
            "quantite_recue": delta,
            "total_recu": nouvelle,
            "quantite_commandee": ligne.quantite,
        })

    # ============================================
    # 2️⃣ ANNULATION DU RELIQUAT
    # ============================================

    if annuler_reste:
        for ligne in lignes.values():
            if ligne.quantite_recue < ligne.quantite:
                ligne.quantite = ligne.quantite_recue
                ligne.sous_total = ligne.quantite * ligne.prix_unitaire
                ligne.save(update_fields=["quantite", "sous_total"])

        commande.montant_total = sum((ligne.sous_total for ligne in lignes.values()), ZERO)

        if commande.montant_paye > commande.montant_total:
            raise OverpaymentError(commande.montant_paye, commande.montant_total)

    commande.montant_restant = commande.montant_total - commande.montant_paye

    # ============================================
    # 3️⃣ STATUT
    # ============================================

    if all(ligne.quantite_recue >= ligne.quantite for ligne in lignes.values()):
        commande.statut = StatutCommande.RECUE
        commande.date_reception = timezone.now()
    else:
        commande.statut = StatutCommande.EN_COURS

    if notes:
        commande.notes = notes

    # ============================================
    # 4️⃣ PAIEMENT ÉVENTUEL
    # ============================================

    if montant_paye:
        _appliquer_paiement(commande, utilisateur, montant_paye)

    commande.save()

    logger.info(
        "Réception commande %s boutique=%s : %s ligne(s), statut %s",
        commande.numero_commande, boutique.pk, len(lignes_traitees), commande.statut,
    )

    return {
        "commande": commande,
        "montant_total_recu": montant_total_recu,
        "lignes_traitees": lignes_traitees,
        "statut_final": commande.statut,
    }


@transaction.atomic
def recevoir_tout(utilisateur, boutique, commande_id, montant_paye=None, notes=None):
    """
    Réceptionne toutes les quantités encore attendues.
    """

    verifier_acces_boutique(utilisateur, boutique.pk)

    commande = _verrouiller_commande(boutique, commande_id)
    _verifier_ouverte(commande)

    lignes_recues = [
        {"ligne_id": ligne.pk, "quantite_recue": ligne.quantite - ligne.quantite_recue}
        for ligne in commande.lignes.all()
        if ligne.quantite_recue < ligne.quantite
    ]

    return recevoir_commande(
        utilisateur,
        boutique,
        commande_id,
        lignes_recues,
        montant_paye=montant_paye,
        notes=notes,
    )


# ============================================================
# ANNULATION / SUPPRESSION
# ============================================================

@transaction.atomic
def annuler_commande(utilisateur, boutique, commande_id):
    verifier_acces_boutique(utilisateur, boutique.pk)

    commande = _verrouiller_commande(boutique, commande_id)
    _verifier_ouverte(commande)

    if commande.lignes.filter(quantite_recue__gt=0).exists():
        raise ConflictError(
            "Des marchandises ont déjà été reçues : utilisez l'annulation du reliquat."
        )

    commande.statut = StatutCommande.ANNULEE
    commande.save(update_fields=["statut", "updated_at"])

    logger.info("Commande %s annulée boutique=%s", commande.numero_commande, boutique.pk)

    return commande


@transaction.atomic
def supprimer_commande(utilisateur, boutique, commande_id):
    verifier_acces_boutique(utilisateur, boutique.pk)

    commande = _verrouiller_commande(boutique, commande_id)

    if commande.statut == StatutCommande.RECUE:
        raise ConflictError("Impossible de supprimer une commande déjà reçue.")

    if commande.montant_paye > 0 or commande.lignes.filter(quantite_recue__gt=0).exists():
        raise ConflictError(
            "Impossible de supprimer une commande partiellement reçue ou payée."
        )

    numero = commande.numero_commande
    commande.delete()

    logger.info("Commande %s supprimée boutique=%s", numero, boutique.pk)

    return numero
