from django.db import models
from django.db.models import Q


# ============================================================
# CATALOGUE
# ============================================================

class Categorie(models.Model):
    boutique = models.ForeignKey(
        "tenants.Boutique", on_delete=models.CASCADE, related_name="categories"
    )
    nom = models.CharField(max_length=100)
    description = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["nom"]
        constraints = [
            models.UniqueConstraint(
                fields=["boutique", "nom"],
                name="unique_categorie_nom_par_boutique",
            ),
        ]

    def __str__(self):
        return self.nom


class Produit(models.Model):
    boutique = models.ForeignKey(
        "tenants.Boutique", on_delete=models.CASCADE, related_name="produits"
    )
    categorie = models.ForeignKey(
        Categorie, on_delete=models.PROTECT, related_name="produits"
    )

    nom = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    prix_achat = models.DecimalField(max_digits=12, decimal_places=2)
    prix_vente = models.DecimalField(max_digits=12, decimal_places=2)
    seuil_alerte = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["nom"]
        constraints = [
            models.CheckConstraint(
                condition=Q(prix_achat__gt=0) & Q(prix_vente__gt=0),
                name="produit_prix_positifs",
            ),
        ]

    def __str__(self):
        return self.nom


# ============================================================
# TIERS
# ============================================================

class Client(models.Model):
    boutique = models.ForeignKey(
        "tenants.Boutique", on_delete=models.CASCADE, related_name="clients"
    )
    nom = models.CharField(max_length=100)
    prenom = models.CharField(max_length=100, blank=True)
    email = models.EmailField(blank=True)
    telephone = models.CharField(max_length=30, blank=True)
    adresse = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["nom", "prenom"]
        constraints = [
            models.UniqueConstraint(
                fields=["boutique", "email"],
                condition=~Q(email=""),
                name="unique_client_email_par_boutique",
            ),
        ]

    def __str__(self):
        return f"{self.prenom} {self.nom}".strip()


class Fournisseur(models.Model):
    boutique = models.ForeignKey(
        "tenants.Boutique", on_delete=models.CASCADE, related_name="fournisseurs"
    )
    nom = models.CharField(max_length=150)
    contact = models.CharField(max_length=100, blank=True)
    email = models.EmailField(blank=True)
    telephone = models.CharField(max_length=30, blank=True)
    adresse = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["nom"]

    def __str__(self):
        return self.nom


from commerce.models_stock import Stock, MouvementStock  # noqa: E402,F401
from commerce.models_vente import Vente, LigneVente, Paiement  # noqa: E402,F401
from commerce.models_commande import Commande, LigneCommande  # noqa: E402,F401
