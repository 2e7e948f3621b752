from accounts.constants import UserRole
from accounts.models import Utilisateur
from accounts.serializers.token import MyTokenObtainPairSerializer


def test_admin_cree_un_gestionnaire(api_client, admin, boutique):
    api_client.force_authenticate(user=admin)

    resp = api_client.post(
        "/api/v1/utilisateurs/",
        {
            "username": "fatou",
            "email": "fatou@test.com",
            "password": "motdepasse1",
            "role": UserRole.GESTIONNAIRE,
            "boutique_id": str(boutique.pk),
        },
        format="json",
    )

    assert resp.status_code == 201
    assert resp.data["boutique_nom"] == "Boutique A"
    assert "password" not in resp.data
    assert Utilisateur.objects.get(username="fatou").check_password("motdepasse1")


def test_gestionnaire_sans_boutique_refuse(api_client, admin):
    api_client.force_authenticate(user=admin)

    resp = api_client.post(
        "/api/v1/utilisateurs/",
        {"username": "sans", "email": "sans@test.com", "password": "motdepasse1"},
        format="json",
    )

    assert resp.status_code == 400
    assert "boutique_id" in resp.data["details"]


def test_email_en_double_409(api_client, admin, gestionnaire, boutique):
    api_client.force_authenticate(user=admin)

    resp = api_client.post(
        "/api/v1/utilisateurs/",
        {
            "username": "copie",
            "email": "GESTA@test.com",
            "password": "motdepasse1",
            "boutique_id": str(boutique.pk),
        },
        format="json",
    )

    assert resp.status_code == 409
    assert resp.data["code"] == "doublon"


def test_admin_ne_peut_pas_se_supprimer(api_client, admin):
    api_client.force_authenticate(user=admin)
    resp = api_client.delete(f"/api/v1/utilisateurs/{admin.pk}/")
    assert resp.status_code == 409


def test_me(api_client, gestionnaire):
    api_client.force_authenticate(user=gestionnaire)

    resp = api_client.get("/api/v1/me/")

    assert resp.status_code == 200
    assert resp.data["role"] == UserRole.GESTIONNAIRE
    assert resp.data["boutique_id"] == gestionnaire.boutique_id


def test_token_contient_role_et_boutique(gestionnaire, boutique):
    token = MyTokenObtainPairSerializer.get_token(gestionnaire)

    assert token["role"] == UserRole.GESTIONNAIRE
    assert token["boutique_id"] == str(boutique.pk)


def test_superuser_est_admin(db):
    user = Utilisateur.objects.create_superuser(
        username="root",
        email="root@test.com",
        password="pass1234",
    )
    assert user.role == UserRole.ADMIN
    assert user.est_admin
