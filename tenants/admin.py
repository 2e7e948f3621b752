from django.contrib import admin

from .models import Boutique


@admin.register(Boutique)
class BoutiqueAdmin(admin.ModelAdmin):
    list_display = ('nom', 'telephone', 'capital_initial', 'devise', 'actif')
    list_filter = ('actif',)
    search_fields = ('nom', 'adresse')
