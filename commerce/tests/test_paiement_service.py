from decimal import Decimal

import pytest

from commerce.constants import MethodePaiement, StatutPaiement
from commerce.services.paiement import (
    ajouter_paiement,
    calculer_statut,
    modifier_paiement,
    supprimer_paiement,
)
from commerce.services.vente import creer_vente
from core.exceptions import OverpaymentError, SaleNotFoundError, ValidationError
from finances.models import Transaction, TypeTransaction


@pytest.fixture
def vente_a_credit(gestionnaire, boutique, produit):
    return creer_vente(
        gestionnaire,
        boutique,
        [{"produit_id": produit.id, "quantite": 3, "prix_unitaire": Decimal("1000")}],
        montant_paye=0,
    )


@pytest.mark.parametrize("paye,total,statut", [
    (Decimal("0"), Decimal("3000"), StatutPaiement.IMPAYE),
    (Decimal("1000"), Decimal("3000"), StatutPaiement.PARTIEL),
    (Decimal("3000"), Decimal("3000"), StatutPaiement.PAYE),
    (Decimal("0"), Decimal("0"), StatutPaiement.PAYE),
])
def test_calculer_statut(paye, total, statut):
    assert calculer_statut(paye, total) == statut


def test_paiements_successifs(gestionnaire, boutique, vente_a_credit):
    vente = vente_a_credit

    ajouter_paiement(gestionnaire, boutique, vente.id, Decimal("1000"))
    vente.refresh_from_db()
    assert vente.statut == StatutPaiement.PARTIEL
    assert vente.montant_restant == Decimal("2000.00")

    paiement = ajouter_paiement(
        gestionnaire,
        boutique,
        vente.id,
        Decimal("2000"),
        methode_paiement=MethodePaiement.VIREMENT,
        reference="VIR-01",
    )
    vente.refresh_from_db()
    assert vente.statut == StatutPaiement.PAYE
    assert vente.montant_paye == Decimal("3000.00")
    assert vente.montant_restant == Decimal("0.00")
    assert paiement.reference == "VIR-01"

    ecritures = Transaction.objects.filter(vente=vente, type=TypeTransaction.RECETTE)
    assert ecritures.count() == 2

    with pytest.raises(OverpaymentError):
        ajouter_paiement(gestionnaire, boutique, vente.id, Decimal("1"))


def test_paiement_superieur_au_restant(gestionnaire, boutique, vente_a_credit):
    with pytest.raises(OverpaymentError) as exc:
        ajouter_paiement(gestionnaire, boutique, vente_a_credit.id, Decimal("3500"))

    assert exc.value.details["restant"] == "3000.00"
    assert not vente_a_credit.paiements.exists()


def test_paiement_negatif_refuse(gestionnaire, boutique, vente_a_credit):
    with pytest.raises(ValidationError):
        ajouter_paiement(gestionnaire, boutique, vente_a_credit.id, Decimal("0"))


def test_paiement_vente_autre_boutique(gestionnaire_b, autre_boutique, vente_a_credit):
    with pytest.raises(SaleNotFoundError):
        ajouter_paiement(gestionnaire_b, autre_boutique, vente_a_credit.id, Decimal("100"))


def test_modification_resynchronise_vente_et_ecriture(gestionnaire, boutique, vente_a_credit):
    paiement = ajouter_paiement(gestionnaire, boutique, vente_a_credit.id, Decimal("1000"))

    modifier_paiement(gestionnaire, paiement, montant=Decimal("3000"), notes="Solde")

    vente_a_credit.refresh_from_db()
    assert vente_a_credit.statut == StatutPaiement.PAYE
    assert Transaction.objects.get(paiement=paiement).montant == Decimal("3000.00")

    with pytest.raises(OverpaymentError):
        modifier_paiement(gestionnaire, paiement, montant=Decimal("3001"))


def test_suppression_recalcule_le_statut(gestionnaire, boutique, vente_a_credit):
    paiement = ajouter_paiement(gestionnaire, boutique, vente_a_credit.id, Decimal("3000"))

    vente = supprimer_paiement(gestionnaire, paiement)

    assert vente.statut == StatutPaiement.IMPAYE
    assert vente.montant_paye == Decimal("0")
    assert vente.montant_restant == Decimal("3000.00")
    assert not Transaction.objects.filter(vente=vente).exists()
