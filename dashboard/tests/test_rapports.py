from decimal import Decimal

import pytest

from commerce.models import Categorie
from commerce.services.catalogue import creer_produit
from commerce.services.vente import creer_vente
from finances.models import CategorieDepense, TypeTransaction
from finances.services.ledger import enregistrer_transaction


@pytest.fixture
def api(api_client, gestionnaire):
    api_client.force_authenticate(user=gestionnaire)
    return api_client


@pytest.fixture
def ventes(gestionnaire, boutique, produit, client_boutique):
    categorie = Categorie.objects.create(boutique=boutique, nom="Accessoires")
    ceinture = creer_produit(
        gestionnaire,
        boutique,
        categorie,
        quantite_initiale=4,
        nom="Ceinture",
        prix_achat=Decimal("1000"),
        prix_vente=Decimal("2500"),
        seuil_alerte=5,
    )

    creer_vente(
        gestionnaire,
        boutique,
        [
            {"produit_id": produit.id, "quantite": 3, "prix_unitaire": Decimal("1000")},
            {"produit_id": ceinture.id, "quantite": 1, "prix_unitaire": Decimal("2500")},
        ],
        client=client_boutique,
        montant_paye=Decimal("3000"),
    )
    creer_vente(
        gestionnaire,
        boutique,
        [{"produit_id": produit.id, "quantite": 1, "prix_unitaire": Decimal("1000")}],
    )
    return ceinture


def _rapport(api, type_rapport, **params):
    query = "&".join(f"{cle}={valeur}" for cle, valeur in {"type": type_rapport, **params}.items())
    resp = api.get(f"/api/v1/rapports/?{query}")
    assert resp.status_code == 200, resp.data
    return resp.data


def test_rapport_ventes(api, ventes):
    data = _rapport(api, "ventes", periode="jour")

    resume = data["resume"]
    assert resume["nombre_ventes"] == 2
    assert resume["chiffre_affaires"] == Decimal("6500.00")
    assert resume["montant_encaisse"] == Decimal("4000.00")
    assert resume["montant_restant"] == Decimal("2500.00")
    assert resume["panier_moyen"] == Decimal("3250.00")
    assert len(data["par_jour"]) == 1
    assert data["par_statut"] == {"PARTIEL": 1, "PAYE": 1}


def test_rapport_produits(api, ventes, produit):
    data = _rapport(api, "produits", periode="mois", limit=1)

    assert len(data["top_produits"]) == 1
    top = data["top_produits"][0]
    assert top["produit_id"] == produit.id
    assert top["quantite_vendue"] == 4
    assert top["chiffre_affaires"] == Decimal("4000.00")
    assert top["nombre_ventes"] == 2


def test_rapport_clients(api, ventes):
    data = _rapport(api, "clients")

    assert data["top_clients"] == [{
        "client_id": data["top_clients"][0]["client_id"],
        "nom": "Awa Diop",
        "nombre_achats": 1,
        "total_achats": Decimal("5500.00"),
        "montant_restant": Decimal("2500.00"),
    }]


def test_rapport_stocks(api, ventes):
    data = _rapport(api, "stocks")

    # Robe wax : 6 x 1000, Ceinture : 3 x 2500
    assert data["resume"]["valeur_totale"] == Decimal("13500.00")
    assert data["resume"]["nombre_produits"] == 2
    assert [alerte["nom"] for alerte in data["alertes"]] == ["Ceinture"]


def test_rapport_financier(api, gestionnaire, boutique, ventes):
    enregistrer_transaction(
        boutique=boutique,
        utilisateur=gestionnaire,
        type_transaction=TypeTransaction.DEPENSE,
        montant=Decimal("800"),
        description="Électricité",
        categorie_depense=CategorieDepense.EXPLOITATION,
    )

    data = _rapport(api, "financier", periode="annee")

    assert data["resume"]["recettes"] == Decimal("4000.00")
    assert data["resume"]["depenses"] == Decimal("800.00")
    assert data["depenses_par_categorie"] == [
        {"categorie": CategorieDepense.EXPLOITATION, "montant": Decimal("800.00")},
    ]


def test_rapport_type_invalide(api):
    resp = api.get("/api/v1/rapports/?type=meteo")
    assert resp.status_code == 400


def test_rapport_hors_periode(api, ventes):
    data = _rapport(api, "ventes", date_debut="2000-01-01", date_fin="2000-12-31")
    assert data["resume"]["nombre_ventes"] == 0


def test_dashboard(api, ventes):
    resp = api.get("/api/v1/dashboard/")

    assert resp.status_code == 200
    kpis = resp.data["kpis"]
    assert kpis["ventes_jour"] == 2
    assert kpis["chiffre_affaires_jour"] == 6500.0
    assert kpis["creances"] == 2500.0
    assert kpis["produits_en_alerte"] == 1
    assert len(resp.data["ventes_recentes"]) == 2


def test_dashboard_admin(api_client, admin, gestionnaire, boutique, autre_boutique):
    api_client.force_authenticate(user=gestionnaire)
    assert api_client.get("/api/v1/dashboard/admin/").status_code == 403

    api_client.force_authenticate(user=admin)
    resp = api_client.get("/api/v1/dashboard/admin/")

    assert resp.status_code == 200
    assert resp.data["stats"]["boutiques_total"] == 2
    assert [b["nom"] for b in resp.data["boutiques"]] == ["Boutique A", "Boutique B"]
