from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from accounts.constants import UserRole
from accounts.models import Utilisateur
from commerce.models import Categorie, Client, Fournisseur
from commerce.services.catalogue import creer_produit
from tenants.models import Boutique


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def boutique(db):
    return Boutique.objects.create(nom="Boutique A", capital_initial=Decimal("100000"))


@pytest.fixture
def autre_boutique(db):
    return Boutique.objects.create(nom="Boutique B")


@pytest.fixture
def admin(db):
    return Utilisateur.objects.create_user(
        username="admin",
        email="admin@test.com",
        password="pass1234",
        role=UserRole.ADMIN,
    )


@pytest.fixture
def gestionnaire(db, boutique):
    return Utilisateur.objects.create_user(
        username="gestA",
        email="gesta@test.com",
        password="pass1234",
        role=UserRole.GESTIONNAIRE,
        boutique=boutique,
    )


@pytest.fixture
def gestionnaire_b(db, autre_boutique):
    return Utilisateur.objects.create_user(
        username="gestB",
        email="gestb@test.com",
        password="pass1234",
        role=UserRole.GESTIONNAIRE,
        boutique=autre_boutique,
    )


@pytest.fixture
def categorie(db, boutique):
    return Categorie.objects.create(boutique=boutique, nom="Robes")


@pytest.fixture
def produit(db, boutique, categorie, gestionnaire):
    """
    10 unités en stock, vendu 1000, acheté 500.
    """
    return creer_produit(
        gestionnaire,
        boutique,
        categorie,
        quantite_initiale=10,
        nom="Robe wax",
        prix_achat=Decimal("500"),
        prix_vente=Decimal("1000"),
        seuil_alerte=2,
    )


@pytest.fixture
def client_boutique(db, boutique):
    return Client.objects.create(boutique=boutique, nom="Diop", prenom="Awa", email="awa@test.com")


@pytest.fixture
def fournisseur(db, boutique):
    return Fournisseur.objects.create(boutique=boutique, nom="Tissus Dakar")
