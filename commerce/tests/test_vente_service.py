from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from commerce.constants import MethodePaiement, StatutPaiement
from commerce.models import Vente
from commerce.models_stock import MouvementStock
from commerce.models_vente import Paiement
from commerce.services.catalogue import creer_produit
from commerce.services.paiement import ajouter_paiement
from commerce.services.vente import annuler_vente, creer_vente
from core.exceptions import (
    AuthorizationError,
    InsufficientStockError,
    OverpaymentError,
    ProductNotFoundError,
    SaleNotFoundError,
    ValidationError,
)
from finances.models import Transaction, TypeTransaction


def _ligne(produit, quantite, prix="1000"):
    return {"produit_id": produit.id, "quantite": quantite, "prix_unitaire": Decimal(prix)}


@pytest.fixture
def produit_rare(gestionnaire, boutique, categorie):
    return creer_produit(
        gestionnaire,
        boutique,
        categorie,
        quantite_initiale=1,
        nom="Foulard soie",
        prix_achat=Decimal("3000"),
        prix_vente=Decimal("7500"),
    )


# ============================================================
# VENTE COMPTANT
# ============================================================

def test_vente_payee_comptant(gestionnaire, boutique, produit):
    vente = creer_vente(gestionnaire, boutique, [_ligne(produit, 3)])

    assert vente.numero_vente == "V001"
    assert vente.montant_total == Decimal("3000.00")
    assert vente.montant_paye == Decimal("3000.00")
    assert vente.montant_restant == Decimal("0.00")
    assert vente.statut == StatutPaiement.PAYE

    produit.stock.refresh_from_db()
    assert produit.stock.quantite == 7

    sortie = MouvementStock.objects.get(vente=vente)
    assert sortie.type_mouvement == MouvementStock.MOUVEMENT_SORTIE
    assert sortie.quantite == 3
    assert sortie.motif == "Vente V001"

    paiement = vente.paiements.get()
    assert paiement.montant == Decimal("3000.00")
    assert paiement.methode_paiement == MethodePaiement.ESPECES

    ecriture = Transaction.objects.get(paiement=paiement)
    assert ecriture.type == TypeTransaction.RECETTE
    assert ecriture.montant == Decimal("3000.00")
    assert ecriture.vente == vente
    assert ecriture.description == "Paiement vente #V001"


def test_vente_a_credit(gestionnaire, boutique, produit, client_boutique):
    vente = creer_vente(
        gestionnaire,
        boutique,
        [_ligne(produit, 2)],
        client=client_boutique,
        montant_paye=0,
    )

    assert vente.statut == StatutPaiement.IMPAYE
    assert vente.montant_restant == Decimal("2000.00")
    assert not vente.paiements.exists()
    assert not Transaction.objects.filter(vente=vente).exists()


def test_vente_partiellement_payee(gestionnaire, boutique, produit):
    vente = creer_vente(
        gestionnaire,
        boutique,
        [_ligne(produit, 3)],
        montant_paye=Decimal("1000"),
        methode_paiement=MethodePaiement.MOBILE,
    )

    assert vente.statut == StatutPaiement.PARTIEL
    assert vente.montant_paye == Decimal("1000")
    assert vente.montant_restant == Decimal("2000.00")
    assert vente.paiements.get().methode_paiement == MethodePaiement.MOBILE


def test_vente_gratuite_est_payee(gestionnaire, boutique, produit):
    vente = creer_vente(gestionnaire, boutique, [_ligne(produit, 1, prix="0")])

    assert vente.montant_total == Decimal("0.00")
    assert vente.statut == StatutPaiement.PAYE
    assert not vente.paiements.exists()


def test_numeros_de_vente_sequentiels(gestionnaire, boutique, produit):
    numeros = [
        creer_vente(gestionnaire, boutique, [_ligne(produit, 1)]).numero_vente
        for _ in range(3)
    ]
    assert numeros == ["V001", "V002", "V003"]


def test_numero_de_vente_unique_par_boutique(gestionnaire, gestionnaire_b, boutique, autre_boutique, produit):
    creer_vente(gestionnaire, boutique, [_ligne(produit, 1)])

    with pytest.raises(IntegrityError):
        with transaction.atomic():
            Vente.objects.create(
                boutique=boutique,
                numero_vente="V001",
                utilisateur=gestionnaire,
                montant_total=Decimal("500"),
            )

    # même numéro accepté dans une autre boutique
    Vente.objects.create(
        boutique=autre_boutique,
        numero_vente="V001",
        utilisateur=gestionnaire_b,
        montant_total=Decimal("500"),
    )

    assert Vente.objects.filter(boutique=boutique, numero_vente="V001").count() == 1
    assert Vente.objects.filter(numero_vente="V001").count() == 2


# ============================================================
# REFUS (RIEN N'EST ÉCRIT)
# ============================================================

def test_stock_insuffisant_ne_laisse_aucune_trace(gestionnaire, boutique, produit, produit_rare):
    with pytest.raises(InsufficientStockError) as exc:
        creer_vente(
            gestionnaire,
            boutique,
            [_ligne(produit, 2), _ligne(produit_rare, 5, prix="7500")],
        )

    assert exc.value.details == {"produit": "Foulard soie", "disponible": 1, "demande": 5}

    assert Vente.objects.count() == 0
    assert Paiement.objects.count() == 0
    assert not MouvementStock.objects.filter(type_mouvement=MouvementStock.MOUVEMENT_SORTIE).exists()
    assert not Transaction.objects.exists()

    produit.stock.refresh_from_db()
    produit_rare.stock.refresh_from_db()
    assert produit.stock.quantite == 10
    assert produit_rare.stock.quantite == 1


def test_lignes_du_meme_produit_cumulees(gestionnaire, boutique, produit):
    with pytest.raises(InsufficientStockError) as exc:
        creer_vente(gestionnaire, boutique, [_ligne(produit, 6), _ligne(produit, 6)])

    assert exc.value.demande == 12
    produit.stock.refresh_from_db()
    assert produit.stock.quantite == 10


def test_produit_inconnu(gestionnaire, boutique, produit):
    with pytest.raises(ProductNotFoundError):
        creer_vente(
            gestionnaire,
            boutique,
            [_ligne(produit, 1), {"produit_id": 999999, "quantite": 1, "prix_unitaire": 10}],
        )

    assert Vente.objects.count() == 0


def test_montant_paye_superieur_au_total(gestionnaire, boutique, produit):
    with pytest.raises(OverpaymentError):
        creer_vente(gestionnaire, boutique, [_ligne(produit, 1)], montant_paye=Decimal("1500"))

    produit.stock.refresh_from_db()
    assert produit.stock.quantite == 10


@pytest.mark.parametrize("lignes", [
    [],
    [{"quantite": 0}],
])
def test_lignes_invalides(gestionnaire, boutique, produit, lignes):
    lignes = [{"produit_id": produit.id, "prix_unitaire": 1000, **ligne} for ligne in lignes]

    with pytest.raises(ValidationError):
        creer_vente(gestionnaire, boutique, lignes)


def test_vente_dans_une_autre_boutique(gestionnaire_b, boutique, produit):
    with pytest.raises(AuthorizationError):
        creer_vente(gestionnaire_b, boutique, [_ligne(produit, 1)])


# ============================================================
# ANNULATION
# ============================================================

def test_annulation_remet_le_stock_et_efface_la_vente(gestionnaire, boutique, produit):
    vente = creer_vente(gestionnaire, boutique, [_ligne(produit, 3)], montant_paye=Decimal("1000"))
    ajouter_paiement(gestionnaire, boutique, vente.id, Decimal("500"))

    numero = annuler_vente(gestionnaire, boutique, vente.id)

    assert numero == "V001"
    assert not Vente.objects.filter(pk=vente.pk).exists()
    assert not Paiement.objects.exists()
    assert not Transaction.objects.exists()

    produit.stock.refresh_from_db()
    assert produit.stock.quantite == 10

    retour = MouvementStock.objects.get(motif="Annulation vente V001")
    assert retour.type_mouvement == MouvementStock.MOUVEMENT_ENTREE
    assert retour.quantite == 3
    assert not MouvementStock.objects.filter(type_mouvement=MouvementStock.MOUVEMENT_SORTIE).exists()


def test_annulation_vente_inconnue(gestionnaire, boutique):
    with pytest.raises(SaleNotFoundError):
        annuler_vente(gestionnaire, boutique, 424242)


def test_numero_non_reutilise_apres_annulation(gestionnaire, boutique, produit):
    vente = creer_vente(gestionnaire, boutique, [_ligne(produit, 1)])
    annuler_vente(gestionnaire, boutique, vente.id)

    assert creer_vente(gestionnaire, boutique, [_ligne(produit, 1)]).numero_vente == "V002"


def test_annulation_plusieurs_produits(gestionnaire, boutique, produit, produit_rare):
    vente = creer_vente(
        gestionnaire,
        boutique,
        [_ligne(produit_rare, 1, "7500"), _ligne(produit, 4)],
    )

    annuler_vente(gestionnaire, boutique, vente.id)

    produit.stock.refresh_from_db()
    produit_rare.stock.refresh_from_db()
    assert produit.stock.quantite == 10
    assert produit_rare.stock.quantite == 1
    assert MouvementStock.objects.filter(motif="Annulation vente V001").count() == 2
