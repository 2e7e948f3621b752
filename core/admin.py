# core/admin.py
from django.contrib import admin

from .models import CompteurDocument


@admin.register(CompteurDocument)
class CompteurDocumentAdmin(admin.ModelAdmin):
    list_display = ('boutique', 'type_document', 'dernier_numero', 'updated_at')
    list_filter = ('type_document', 'boutique')
    readonly_fields = ('dernier_numero',)
