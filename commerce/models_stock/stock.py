# commerce/models_stock/stock.py

from django.db import models
from django.db.models import Q


class Stock(models.Model):
    """
    Quantité disponible d'un produit.

    `quantite` n'est modifiée que par commerce.services.stock.ajuster_stock,
    qui enregistre un MouvementStock pour chaque variation.
    """

    boutique = models.ForeignKey(
        "tenants.Boutique", on_delete=models.CASCADE, related_name="stocks"
    )
    produit = models.OneToOneField(
        "commerce.Produit", on_delete=models.CASCADE, related_name="stock"
    )

    quantite = models.PositiveIntegerField(default=0)
    derniere_entree = models.DateTimeField(null=True, blank=True)
    derniere_sortie = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=Q(quantite__gte=0),
                name="stock_quantite_non_negative",
            ),
        ]

    @property
    def en_alerte(self):
        """
        Indique si le stock est sous le seuil d'alerte du produit.
        """
        return self.quantite <= self.produit.seuil_alerte

    def __str__(self):
        return f"{self.produit} : {self.quantite}"
