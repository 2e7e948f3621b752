from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import Utilisateur


@admin.register(Utilisateur)
class UtilisateurAdmin(UserAdmin):
    list_display = ('username', 'email', 'role', 'boutique', 'is_active')
    list_filter = ('role', 'boutique', 'is_active')
    fieldsets = UserAdmin.fieldsets + (
        ("Boutique", {"fields": ("role", "boutique")}),
    )
