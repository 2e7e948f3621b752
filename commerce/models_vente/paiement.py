from django.conf import settings
from django.db import models
from django.db.models import Q

from commerce.constants import MethodePaiement


class Paiement(models.Model):
    boutique = models.ForeignKey(
        "tenants.Boutique", on_delete=models.CASCADE, related_name="paiements"
    )
    vente = models.ForeignKey(
        "commerce.Vente", on_delete=models.PROTECT, related_name="paiements"
    )

    montant = models.DecimalField(max_digits=14, decimal_places=2)
    methode_paiement = models.CharField(
        max_length=10,
        choices=MethodePaiement.choices,
        default=MethodePaiement.ESPECES,
    )
    reference = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)

    utilisateur = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )

    date_creation = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date_creation", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(montant__gt=0),
                name="paiement_montant_positif",
            ),
        ]

    def __str__(self):
        return f"{self.vente} - {self.montant} ({self.methode_paiement})"
