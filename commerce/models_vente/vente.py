# commerce/models_vente/vente.py

from django.conf import settings
from django.db import models
from django.utils import timezone

from commerce.constants import StatutPaiement


class Vente(models.Model):
    boutique = models.ForeignKey(
        "tenants.Boutique", on_delete=models.CASCADE, related_name="ventes"
    )
    numero_vente = models.CharField(max_length=20)

    client = models.ForeignKey(
        "commerce.Client",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="ventes",
    )
    utilisateur = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="ventes",
    )

    montant_total = models.DecimalField(max_digits=14, decimal_places=2)
    montant_paye = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    montant_restant = models.DecimalField(max_digits=14, decimal_places=2, default=0)

    # Toujours dérivé de montant_paye / montant_total
    statut = models.CharField(
        max_length=10,
        choices=StatutPaiement.choices,
        default=StatutPaiement.IMPAYE,
    )

    date_vente = models.DateTimeField(default=timezone.now)
    date_echeance = models.DateField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date_vente", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["boutique", "numero_vente"],
                name="unique_numero_vente_par_boutique",
            ),
        ]

    def __str__(self):
        return self.numero_vente


class LigneVente(models.Model):
    vente = models.ForeignKey(
        Vente, on_delete=models.CASCADE, related_name="lignes"
    )
    produit = models.ForeignKey(
        "commerce.Produit", on_delete=models.PROTECT, related_name="lignes_vente"
    )

    quantite = models.PositiveIntegerField()
    prix_unitaire = models.DecimalField(max_digits=12, decimal_places=2)
    sous_total = models.DecimalField(max_digits=14, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.produit} x {self.quantite}"
