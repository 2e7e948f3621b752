from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone


class MouvementStock(models.Model):
    MOUVEMENT_ENTREE = "ENTREE"
    MOUVEMENT_SORTIE = "SORTIE"

    TYPE_CHOICES = [
        (MOUVEMENT_ENTREE, "Entrée"),
        (MOUVEMENT_SORTIE, "Sortie"),
    ]

    boutique = models.ForeignKey(
        "tenants.Boutique", on_delete=models.CASCADE
    )
    stock = models.ForeignKey(
        "commerce.Stock", on_delete=models.CASCADE, related_name="mouvements"
    )

    type_mouvement = models.CharField(
        max_length=10, choices=TYPE_CHOICES
    )

    quantite = models.PositiveIntegerField()
    motif = models.CharField(max_length=255, blank=True)

    # Sortie liée à une vente (supprimée uniquement avec l'annulation de la vente)
    vente = models.ForeignKey(
        "commerce.Vente",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="mouvements_stock",
    )
    utilisateur = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )

    date_mouvement = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date_mouvement", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantite__gt=0),
                name="mouvement_quantite_positive",
            ),
        ]

    @property
    def quantite_signee(self):
        if self.type_mouvement == self.MOUVEMENT_SORTIE:
            return -self.quantite
        return self.quantite

    def __str__(self):
        return f"{self.type_mouvement} {self.quantite} ({self.motif})"
