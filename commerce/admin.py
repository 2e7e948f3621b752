from django.contrib import admin

from .models import (
    Categorie,
    Client,
    Commande,
    Fournisseur,
    LigneCommande,
    LigneVente,
    MouvementStock,
    Paiement,
    Produit,
    Stock,
    Vente,
)


@admin.register(Categorie)
class CategorieAdmin(admin.ModelAdmin):
    list_display = ("nom", "boutique")
    list_filter = ("boutique",)
    search_fields = ("nom",)


@admin.register(Produit)
class ProduitAdmin(admin.ModelAdmin):
    list_display = ("nom", "categorie", "prix_achat", "prix_vente", "seuil_alerte", "boutique")
    list_filter = ("boutique", "categorie")
    search_fields = ("nom",)


@admin.register(Stock)
class StockAdmin(admin.ModelAdmin):
    list_display = ("produit", "quantite", "derniere_entree", "derniere_sortie", "boutique")
    list_filter = ("boutique",)
    # Les quantités ne changent que par des mouvements
    readonly_fields = ("quantite", "derniere_entree", "derniere_sortie")


@admin.register(MouvementStock)
class MouvementStockAdmin(admin.ModelAdmin):
    list_display = ("stock", "type_mouvement", "quantite", "motif", "vente", "date_mouvement")
    list_filter = ("boutique", "type_mouvement")
    search_fields = ("motif",)

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("nom", "prenom", "telephone", "email", "boutique")
    list_filter = ("boutique",)
    search_fields = ("nom", "prenom", "email", "telephone")


@admin.register(Fournisseur)
class FournisseurAdmin(admin.ModelAdmin):
    list_display = ("nom", "contact", "telephone", "email", "boutique")
    list_filter = ("boutique",)
    search_fields = ("nom", "contact")


class LigneVenteInline(admin.TabularInline):
    model = LigneVente
    extra = 0
    readonly_fields = ("produit", "quantite", "prix_unitaire", "sous_total")
    can_delete = False


@admin.register(Vente)
class VenteAdmin(admin.ModelAdmin):
    list_display = ("numero_vente", "client", "montant_total", "montant_paye", "statut", "date_vente", "boutique")
    list_filter = ("boutique", "statut")
    search_fields = ("numero_vente",)
    readonly_fields = ("numero_vente", "montant_total", "montant_paye", "montant_restant", "statut")
    inlines = [LigneVenteInline]


@admin.register(Paiement)
class PaiementAdmin(admin.ModelAdmin):
    list_display = ("vente", "montant", "methode_paiement", "reference", "date_creation")
    list_filter = ("boutique", "methode_paiement")


class LigneCommandeInline(admin.TabularInline):
    model = LigneCommande
    extra = 0
    readonly_fields = ("quantite_recue",)


@admin.register(Commande)
class CommandeAdmin(admin.ModelAdmin):
    list_display = ("numero_commande", "fournisseur", "montant_total", "montant_paye", "statut", "date_commande", "boutique")
    list_filter = ("boutique", "statut")
    search_fields = ("numero_commande",)
    readonly_fields = ("numero_commande", "statut", "date_reception")
    inlines = [LigneCommandeInline]
