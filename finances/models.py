# finances/models.py
from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone


class TypeTransaction(models.TextChoices):
    VENTE = "VENTE", "Vente"
    ACHAT = "ACHAT", "Achat"
    DEPENSE = "DEPENSE", "Dépense"
    INJECTION_CAPITAL = "INJECTION_CAPITAL", "Injection de capital"
    RETRAIT = "RETRAIT", "Retrait"
    RECETTE = "RECETTE", "Recette"


class CategorieDepense(models.TextChoices):
    MARCHANDISES = "MARCHANDISES", "Marchandises"
    EXPLOITATION = "EXPLOITATION", "Exploitation"
    MARKETING = "MARKETING", "Marketing"
    TRANSPORT = "TRANSPORT", "Transport"
    ADMINISTRATION = "ADMINISTRATION", "Administration"
    AUTRE = "AUTRE", "Autre"


class Transaction(models.Model):
    """
    Écriture du journal financier d'une boutique.

    Le signe du montant dépend du type : DEPENSE est stockée en négatif,
    tous les autres types en positif.
    """

    boutique = models.ForeignKey(
        "tenants.Boutique", on_delete=models.CASCADE, related_name="transactions"
    )
    utilisateur = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="transactions",
    )

    type = models.CharField(max_length=20, choices=TypeTransaction.choices)
    montant = models.DecimalField(max_digits=14, decimal_places=2)
    description = models.CharField(max_length=255)
    categorie_depense = models.CharField(
        max_length=20, choices=CategorieDepense.choices, blank=True
    )

    # 🔗 Traçabilité : origine de l'écriture
    vente = models.ForeignKey(
        "commerce.Vente",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
    )
    paiement = models.OneToOneField(
        "commerce.Paiement",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transaction",
    )
    commande = models.ForeignKey(
        "commerce.Commande",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
    )

    date_transaction = models.DateTimeField(default=timezone.now)
    mois = models.CharField(max_length=7, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date_transaction", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    (Q(type="DEPENSE") & Q(montant__lt=0))
                    | (~Q(type="DEPENSE") & Q(montant__gt=0))
                ),
                name="transaction_signe_selon_type",
            ),
        ]

    @property
    def est_manuelle(self):
        """
        Écriture saisie à la main (ni paiement de vente, ni commande).
        """
        return self.paiement_id is None and self.commande_id is None

    def save(self, *args, **kwargs):
        self.mois = timezone.localtime(self.date_transaction).strftime("%Y-%m")
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.type} {self.montant} ({self.boutique})"
