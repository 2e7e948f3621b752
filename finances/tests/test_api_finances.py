from decimal import Decimal

import pytest
from django.utils import timezone

from commerce.services.vente import creer_vente
from finances.models import TypeTransaction


@pytest.fixture
def api(api_client, gestionnaire):
    api_client.force_authenticate(user=gestionnaire)
    return api_client


def test_saisie_depense(api):
    resp = api.post(
        "/api/v1/transactions/",
        {
            "type": "DEPENSE",
            "montant": "2500",
            "description": "Loyer",
            "categorie_depense": "EXPLOITATION",
        },
        format="json",
    )

    assert resp.status_code == 201
    assert resp.data["montant"] == "-2500.00"
    assert resp.data["est_manuelle"] is True


def test_saisie_type_non_manuel_refusee(api):
    resp = api.post(
        "/api/v1/transactions/",
        {"type": "INJECTION_CAPITAL", "montant": "2500", "description": "Apport"},
        format="json",
    )
    assert resp.status_code == 400


def test_ecriture_de_vente_non_supprimable(api, gestionnaire, boutique, produit):
    vente = creer_vente(
        gestionnaire,
        boutique,
        [{"produit_id": produit.id, "quantite": 1, "prix_unitaire": Decimal("1000")}],
    )
    ecriture_id = vente.transactions.get().id

    resp = api.delete(f"/api/v1/transactions/{ecriture_id}/")
    assert resp.status_code == 409


def test_solde_et_stats(api, gestionnaire, boutique, produit):
    creer_vente(
        gestionnaire,
        boutique,
        [{"produit_id": produit.id, "quantite": 2, "prix_unitaire": Decimal("1000")}],
    )
    api.post(
        "/api/v1/transactions/",
        {"type": "DEPENSE", "montant": "500", "description": "Sacs", "categorie_depense": "AUTRE"},
        format="json",
    )

    resp = api.get("/api/v1/transactions/solde/")
    assert resp.status_code == 200
    assert resp.data["solde"] == Decimal("101500.00")

    resp = api.get(f"/api/v1/transactions/stats/?annee={timezone.localdate().year}")
    assert resp.status_code == 200
    assert resp.data["resume"]["recettes"] == Decimal("2000.00")
    assert resp.data["resume"]["depenses"] == Decimal("500.00")
    assert len(resp.data["par_mois"]) == 1

    resp = api.get("/api/v1/transactions/?type=RECETTE")
    assert resp.data["count"] == 1
    assert resp.data["results"][0]["type"] == TypeTransaction.RECETTE


def test_capital_interdit_au_gestionnaire(api, boutique):
    resp = api.post(
        "/api/v1/capital/",
        {"boutique_id": str(boutique.pk), "montant": "1000"},
        format="json",
    )
    assert resp.status_code == 403


def test_capital_admin(api_client, admin, boutique):
    api_client.force_authenticate(user=admin)

    resp = api_client.post(
        "/api/v1/capital/",
        {"boutique_id": str(boutique.pk), "montant": "25000", "description": "Apport"},
        format="json",
    )
    assert resp.status_code == 201
    assert resp.data["type"] == TypeTransaction.INJECTION_CAPITAL

    resp = api_client.get(f"/api/v1/capital/?boutique_id={boutique.pk}")
    assert resp.data["count"] == 1

    resp = api_client.post(
        "/api/v1/capital/retirer/",
        {"boutique_id": str(boutique.pk), "montant": "500000"},
        format="json",
    )
    assert resp.status_code == 400


def test_tableau_de_bord_financier(api_client, gestionnaire, boutique, produit):
    creer_vente(
        gestionnaire,
        boutique,
        [{"produit_id": produit.id, "quantite": 3, "prix_unitaire": Decimal("1000")}],
    )
    api_client.force_authenticate(user=gestionnaire)

    resp = api_client.get("/api/v1/finances/dashboard/")

    assert resp.status_code == 200
    assert resp.data["global"]["recettes"] == Decimal("3000.00")
    assert resp.data["par_boutique"][0]["boutique_nom"] == "Boutique A"
