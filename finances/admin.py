from django.contrib import admin

from .models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ("id", "type", "montant", "description", "categorie_depense", "date_transaction", "boutique")
    list_filter = ("type", "categorie_depense", "boutique")
    search_fields = ("description",)
    readonly_fields = ("mois", "vente", "paiement", "commande")
