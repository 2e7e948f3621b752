from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction
from django.test import TestCase
from django.utils import timezone

from accounts.constants import UserRole
from accounts.models import Utilisateur
from core.exceptions import AuthorizationError, ConflictError, ValidationError
from finances.models import CategorieDepense, Transaction, TypeTransaction
from finances.services.capital import injecter_capital, injections_capital, retirer_capital
from finances.services.ledger import (
    calculer_solde,
    enregistrer_transaction,
    modifier_transaction,
    normaliser_montant,
    resume_financier,
    resume_mensuel,
    supprimer_transaction,
)
from tenants.models import Boutique


class LedgerTestCase(TestCase):

    def setUp(self):
        self.boutique = Boutique.objects.create(nom="Boutique Test", capital_initial=Decimal("50000"))
        self.gestionnaire = Utilisateur.objects.create_user(
            username="gest",
            email="gest@test.com",
            password="pass1234",
            role=UserRole.GESTIONNAIRE,
            boutique=self.boutique,
        )
        self.admin = Utilisateur.objects.create_user(
            username="admin",
            email="admin@test.com",
            password="pass1234",
            role=UserRole.ADMIN,
        )

    def _ecriture(self, type_transaction, montant, **extra):
        return enregistrer_transaction(
            boutique=self.boutique,
            utilisateur=self.gestionnaire,
            type_transaction=type_transaction,
            montant=Decimal(montant),
            description=f"{type_transaction} test",
            **extra,
        )

    def test_signe_selon_le_type(self):
        self.assertEqual(normaliser_montant(TypeTransaction.DEPENSE, Decimal("100")), Decimal("-100"))
        self.assertEqual(normaliser_montant(TypeTransaction.DEPENSE, Decimal("-100")), Decimal("-100"))
        self.assertEqual(normaliser_montant(TypeTransaction.RECETTE, Decimal("-100")), Decimal("100"))

        with self.assertRaises(ValidationError):
            normaliser_montant(TypeTransaction.RECETTE, 0)

    def test_depense_stockee_en_negatif(self):
        depense = self._ecriture(
            TypeTransaction.DEPENSE, "2000", categorie_depense=CategorieDepense.TRANSPORT
        )
        depense.refresh_from_db()

        self.assertEqual(depense.montant, Decimal("-2000.00"))
        self.assertEqual(depense.mois, timezone.localtime(depense.date_transaction).strftime("%Y-%m"))

    def test_depense_sans_categorie_refusee(self):
        with self.assertRaises(ValidationError):
            self._ecriture(TypeTransaction.DEPENSE, "2000")

    def test_contrainte_de_signe_en_base(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Transaction.objects.create(
                    boutique=self.boutique,
                    utilisateur=self.gestionnaire,
                    type=TypeTransaction.DEPENSE,
                    montant=Decimal("100"),
                    description="Signe incorrect",
                    categorie_depense=CategorieDepense.AUTRE,
                )

    def test_gestionnaire_limite_a_sa_boutique(self):
        autre = Boutique.objects.create(nom="Autre")

        with self.assertRaises(AuthorizationError):
            enregistrer_transaction(
                boutique=autre,
                utilisateur=self.gestionnaire,
                type_transaction=TypeTransaction.RECETTE,
                montant=Decimal("10"),
                description="Intrusion",
            )

    def test_solde_et_resume(self):
        self._ecriture(TypeTransaction.RECETTE, "10000")
        self._ecriture(TypeTransaction.DEPENSE, "3000", categorie_depense=CategorieDepense.EXPLOITATION)
        self._ecriture(TypeTransaction.ACHAT, "4000", categorie_depense=CategorieDepense.MARCHANDISES)
        injecter_capital(self.admin, self.boutique, Decimal("20000"))
        retirer_capital(self.admin, self.boutique, Decimal("5000"))

        # 50000 + 10000 - 3000 - 4000 + 20000 - 5000
        self.assertEqual(calculer_solde(self.boutique), Decimal("68000.00"))

        resume = resume_financier(Transaction.objects.filter(boutique=self.boutique))
        self.assertEqual(resume["recettes"], Decimal("10000.00"))
        self.assertEqual(resume["depenses"], Decimal("7000.00"))
        self.assertEqual(resume["benefice"], Decimal("3000.00"))
        self.assertEqual(resume["capital_injecte"], Decimal("20000.00"))
        self.assertEqual(resume["retraits"], Decimal("5000.00"))

    def test_resume_mensuel(self):
        self._ecriture(TypeTransaction.RECETTE, "1500")
        self._ecriture(TypeTransaction.DEPENSE, "500", categorie_depense=CategorieDepense.MARKETING)

        maintenant = timezone.localtime()
        lignes = resume_mensuel(self.boutique, maintenant.year)

        self.assertEqual(len(lignes), 1)
        self.assertEqual(lignes[0]["mois"], maintenant.strftime("%Y-%m"))
        self.assertEqual(lignes[0]["recettes"], Decimal("1500.00"))
        self.assertEqual(lignes[0]["depenses"], Decimal("500.00"))
        self.assertEqual(resume_mensuel(self.boutique, maintenant.year - 1), [])

    def test_modification_ecriture_manuelle(self):
        recette = self._ecriture(TypeTransaction.RECETTE, "1000")

        modifier_transaction(
            self.gestionnaire,
            recette,
            type=TypeTransaction.DEPENSE,
            montant=Decimal("400"),
            categorie_depense=CategorieDepense.AUTRE,
        )
        recette.refresh_from_db()

        self.assertEqual(recette.type, TypeTransaction.DEPENSE)
        self.assertEqual(recette.montant, Decimal("-400.00"))

        supprimer_transaction(self.gestionnaire, recette)
        self.assertFalse(Transaction.objects.exists())

    def test_ecriture_generee_non_modifiable(self):
        injection = injecter_capital(self.admin, self.boutique, Decimal("1000"))

        with self.assertRaises(ConflictError):
            modifier_transaction(self.admin, injection, montant=Decimal("10"))

        with self.assertRaises(ConflictError):
            supprimer_transaction(self.admin, injection)


# ============================================================
# CAPITAL
# ============================================================

def test_capital_reserve_a_l_admin(gestionnaire, boutique):
    with pytest.raises(AuthorizationError):
        injecter_capital(gestionnaire, boutique, Decimal("1000"))

    with pytest.raises(AuthorizationError):
        retirer_capital(gestionnaire, boutique, Decimal("1000"))


def test_retrait_plafonne_a_la_tresorerie(admin, boutique):
    # capital initial 100000
    with pytest.raises(ValidationError) as exc:
        retirer_capital(admin, boutique, Decimal("100000.01"))

    assert exc.value.details["disponible"] == "100000.00"

    retrait = retirer_capital(admin, boutique, Decimal("100000"))
    assert retrait.type == TypeTransaction.RETRAIT
    assert calculer_solde(boutique) == Decimal("0.00")


def test_retrait_relit_la_boutique_verrouillee(admin, boutique):
    # instance en mémoire périmée : capital ramené à 1000 en base
    Boutique.objects.filter(pk=boutique.pk).update(capital_initial=Decimal("1000"))

    with pytest.raises(ValidationError) as exc:
        retirer_capital(admin, boutique, Decimal("5000"))

    assert exc.value.details["disponible"] == "1000.00"
    assert not Transaction.objects.filter(type=TypeTransaction.RETRAIT).exists()


def test_injections_par_boutique(admin, boutique, autre_boutique):
    injecter_capital(admin, boutique, Decimal("1000"))
    injecter_capital(admin, autre_boutique, Decimal("2000"), description="Apport associé")

    assert injections_capital().count() == 2
    injection = injections_capital(autre_boutique).get()
    assert injection.description == "Apport associé"
    assert injection.montant == Decimal("2000.00")
