from decimal import Decimal

import pytest

from commerce.models import Categorie
from commerce.services.catalogue import creer_produit
from commerce.services.vente import creer_vente


@pytest.fixture
def produit_b(gestionnaire_b, autre_boutique):
    categorie = Categorie.objects.create(boutique=autre_boutique, nom="Chaussures")
    return creer_produit(
        gestionnaire_b,
        autre_boutique,
        categorie,
        quantite_initiale=5,
        nom="Sandales",
        prix_achat=Decimal("2000"),
        prix_vente=Decimal("4500"),
    )


def _ids(resp):
    return {item["id"] for item in resp.data["results"]}


###############################
# Isolation des produits
###############################
def test_produit_isolation(api_client, gestionnaire, gestionnaire_b, produit, produit_b):
    api_client.force_authenticate(user=gestionnaire)
    ids = _ids(api_client.get("/api/v1/produits/"))
    assert produit.id in ids
    assert produit_b.id not in ids

    api_client.force_authenticate(user=gestionnaire_b)
    ids = _ids(api_client.get("/api/v1/produits/"))
    assert produit_b.id in ids
    assert produit.id not in ids


###############################
# Isolation des ventes
###############################
def test_vente_isolation(api_client, gestionnaire, gestionnaire_b, boutique, produit):
    vente = creer_vente(
        gestionnaire,
        boutique,
        [{"produit_id": produit.id, "quantite": 1, "prix_unitaire": Decimal("1000")}],
    )

    api_client.force_authenticate(user=gestionnaire_b)
    assert vente.id not in _ids(api_client.get("/api/v1/ventes/"))

    resp = api_client.get(f"/api/v1/ventes/{vente.id}/")
    assert resp.status_code == 404

    resp = api_client.delete(f"/api/v1/ventes/{vente.id}/")
    assert resp.status_code == 404


###############################
# Vente avec le produit d'une autre boutique
###############################
def test_vente_avec_produit_etranger(api_client, gestionnaire, produit_b):
    api_client.force_authenticate(user=gestionnaire)
    resp = api_client.post(
        "/api/v1/ventes/",
        {"lignes": [{"produit_id": produit_b.id, "quantite": 1, "prix_unitaire": "4500"}]},
        format="json",
    )

    assert resp.status_code == 404
    assert resp.data["code"] == "produit_introuvable"
    produit_b.stock.refresh_from_db()
    assert produit_b.stock.quantite == 5


###############################
# L'admin choisit la boutique
###############################
def test_admin_choisit_la_boutique(api_client, admin, produit, produit_b, autre_boutique):
    api_client.force_authenticate(user=admin)
    resp = api_client.get(f"/api/v1/produits/?boutique_id={autre_boutique.pk}")

    assert resp.status_code == 200
    assert _ids(resp) == {produit_b.id}
