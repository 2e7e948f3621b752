# finances/services/ledger.py

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Q, Sum
from django.utils import timezone

from core.exceptions import ConflictError, ValidationError
from core.permissions import verifier_acces_boutique
from finances.models import CategorieDepense, Transaction, TypeTransaction

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")

# Types saisissables à la main (hors flux vente / commande / capital)
TYPES_MANUELS = (TypeTransaction.RECETTE, TypeTransaction.DEPENSE)

# Entrées d'argent : comptées dans les recettes
TYPES_RECETTES = (TypeTransaction.RECETTE, TypeTransaction.VENTE)

# Sorties stockées en positif : à soustraire de la trésorerie
TYPES_SORTIES_POSITIVES = (TypeTransaction.ACHAT, TypeTransaction.RETRAIT)


# ============================================================
# SIGNE DES MONTANTS
# ============================================================

def normaliser_montant(type_transaction, montant):
    """
    DEPENSE : négatif. Tous les autres types : positif.
    """

    montant = abs(Decimal(montant))

    if montant == 0:
        raise ValidationError("Le montant doit être différent de zéro.")

    if type_transaction == TypeTransaction.DEPENSE:
        return -montant
    return montant


# ============================================================
# ÉCRITURES
# ============================================================

@transaction.atomic
def enregistrer_transaction(
    boutique,
    utilisateur,
    type_transaction,
    montant,
    description,
    vente=None,
    paiement=None,
    commande=None,
    categorie_depense="",
    date_transaction=None,
):
    verifier_acces_boutique(utilisateur, boutique.pk)

    if type_transaction not in TypeTransaction.values:
        raise ValidationError(f"Type de transaction invalide : {type_transaction}")

    if type_transaction == TypeTransaction.DEPENSE and not categorie_depense:
        raise ValidationError(
            "La catégorie de dépense est requise.",
            details={"categorie_depense": CategorieDepense.values},
        )

    champs = {}
    if date_transaction is not None:
        champs["date_transaction"] = date_transaction

    ecriture = Transaction.objects.create(
        boutique=boutique,
        utilisateur=utilisateur,
        type=type_transaction,
        montant=normaliser_montant(type_transaction, montant),
        description=description,
        categorie_depense=categorie_depense or "",
        vente=vente,
        paiement=paiement,
        commande=commande,
        **champs,
    )

    logger.info(
        "Transaction %s %s enregistrée boutique=%s id=%s",
        ecriture.type, ecriture.montant, boutique.pk, ecriture.pk,
    )

    return ecriture


def _verifier_manuelle(ecriture):
    if not ecriture.est_manuelle or ecriture.type not in TYPES_MANUELS:
        raise ConflictError(
            "Cette transaction est générée par un paiement, une commande ou "
            "un mouvement de capital et ne peut pas être modifiée ici."
        )


@transaction.atomic
def modifier_transaction(utilisateur, ecriture, **champs):
    verifier_acces_boutique(utilisateur, ecriture.boutique_id)
    _verifier_manuelle(ecriture)

    type_transaction = champs.get("type", ecriture.type)
    if type_transaction not in TYPES_MANUELS:
        raise ValidationError("Seules les recettes et dépenses peuvent être saisies manuellement.")

    montant = champs.get("montant", abs(ecriture.montant))
    categorie = champs.get("categorie_depense", ecriture.categorie_depense)

    if type_transaction == TypeTransaction.DEPENSE and not categorie:
        raise ValidationError("La catégorie de dépense est requise.")

    ecriture.type = type_transaction
    ecriture.montant = normaliser_montant(type_transaction, montant)
    ecriture.categorie_depense = categorie if type_transaction == TypeTransaction.DEPENSE else ""
    ecriture.description = champs.get("description", ecriture.description)
    ecriture.date_transaction = champs.get("date_transaction", ecriture.date_transaction)
    ecriture.save()

    return ecriture


@transaction.atomic
def supprimer_transaction(utilisateur, ecriture):
    verifier_acces_boutique(utilisateur, ecriture.boutique_id)
    _verifier_manuelle(ecriture)

    logger.info("Suppression transaction id=%s boutique=%s", ecriture.pk, ecriture.boutique_id)
    ecriture.delete()


# ============================================================
# AGRÉGATIONS (LECTURE)
# ============================================================

def totaux_par_type(qs):
    """
    {type: somme des montants tels que stockés}
    """

    totaux = {choix: ZERO for choix in TypeTransaction.values}
    for ligne in qs.values("type").annotate(total=Sum("montant")):
        totaux[ligne["type"]] = ligne["total"] or ZERO
    return totaux


def resume_financier(qs):
    """
    Recettes, dépenses et bénéfice d'un ensemble d'écritures.
    Les dépenses sont renvoyées en valeur positive.
    """

    totaux = totaux_par_type(qs)

    recettes = sum((totaux[t] for t in TYPES_RECETTES), ZERO)
    depenses = abs(totaux[TypeTransaction.DEPENSE]) + totaux[TypeTransaction.ACHAT]

    return {
        "recettes": recettes,
        "depenses": depenses,
        "benefice": recettes - depenses,
        "capital_injecte": totaux[TypeTransaction.INJECTION_CAPITAL],
        "retraits": totaux[TypeTransaction.RETRAIT],
        "par_type": totaux,
    }


def calculer_solde(boutique):
    """
    Trésorerie : capital initial + somme des écritures,
    achats et retraits venant en déduction.
    """

    totaux = totaux_par_type(Transaction.objects.filter(boutique=boutique))

    solde = boutique.capital_initial
    for type_transaction, total in totaux.items():
        if type_transaction in TYPES_SORTIES_POSITIVES:
            solde -= total
        else:
            solde += total
    return solde


def resume_mensuel(boutique, annee):
    """
    Recettes / dépenses par mois (champ `mois` = AAAA-MM).
    """

    lignes = (
        Transaction.objects
        .filter(boutique=boutique, mois__startswith=f"{annee}-")
        .values("mois")
        .annotate(
            recettes=Sum("montant", filter=Q(type__in=TYPES_RECETTES)),
            depenses=Sum("montant", filter=Q(type=TypeTransaction.DEPENSE)),
            achats=Sum("montant", filter=Q(type=TypeTransaction.ACHAT)),
        )
        .order_by("mois")
    )

    return [
        {
            "mois": ligne["mois"],
            "recettes": ligne["recettes"] or ZERO,
            "depenses": abs(ligne["depenses"] or ZERO) + (ligne["achats"] or ZERO),
        }
        for ligne in lignes
    ]


# ============================================================
# ÉCRITURES LIÉES AUX PAIEMENTS DE VENTE
# ============================================================

def synchroniser_ecriture_paiement(paiement):
    """
    Reporte le montant d'un paiement modifié sur son écriture RECETTE.
    """

    return Transaction.objects.filter(paiement=paiement).update(
        montant=normaliser_montant(TypeTransaction.RECETTE, paiement.montant),
        updated_at=timezone.now(),
    )


def supprimer_ecriture_paiement(paiement):
    return Transaction.objects.filter(paiement=paiement).delete()


def supprimer_ecritures_vente(vente):
    return Transaction.objects.filter(vente=vente).delete()
