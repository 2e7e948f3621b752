# commerce/models_commande/commande.py

from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from commerce.constants import StatutCommande


class Commande(models.Model):
    boutique = models.ForeignKey(
        "tenants.Boutique", on_delete=models.CASCADE, related_name="commandes"
    )
    numero_commande = models.CharField(max_length=20)

    fournisseur = models.ForeignKey(
        "commerce.Fournisseur", on_delete=models.PROTECT, related_name="commandes"
    )
    utilisateur = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="commandes",
    )

    montant_total = models.DecimalField(max_digits=14, decimal_places=2)
    montant_paye = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    montant_restant = models.DecimalField(max_digits=14, decimal_places=2, default=0)

    statut = models.CharField(
        max_length=12,
        choices=StatutCommande.choices,
        default=StatutCommande.EN_ATTENTE,
    )

    date_commande = models.DateTimeField(default=timezone.now)
    date_echeance = models.DateField(null=True, blank=True)
    date_reception = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date_commande", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["boutique", "numero_commande"],
                name="unique_numero_commande_par_boutique",
            ),
        ]

    def __str__(self):
        return self.numero_commande


class LigneCommande(models.Model):
    commande = models.ForeignKey(
        Commande, on_delete=models.CASCADE, related_name="lignes"
    )
    produit = models.ForeignKey(
        "commerce.Produit", on_delete=models.PROTECT, related_name="lignes_commande"
    )

    quantite = models.PositiveIntegerField()
    quantite_recue = models.PositiveIntegerField(default=0)
    prix_unitaire = models.DecimalField(max_digits=12, decimal_places=2)
    sous_total = models.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantite_recue__lte=F("quantite")),
                name="ligne_commande_reception_plafonnee",
            ),
        ]

    @property
    def quantite_restante(self):
        return self.quantite - self.quantite_recue

    def __str__(self):
        return f"{self.produit} : {self.quantite_recue}/{self.quantite}"
