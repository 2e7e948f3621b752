# core/permissions.py
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.permissions import BasePermission

from accounts.constants import UserRole
from core.exceptions import AuthorizationError, NotFoundError, ValidationError


class IsAdminRole(BasePermission):
    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and user.role == UserRole.ADMIN
        )


class IsBoutiqueActor(BasePermission):
    """
    ADMIN : toutes les boutiques.
    GESTIONNAIRE : doit être rattaché à une boutique.
    """

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if user.role == UserRole.ADMIN:
            return True
        return user.role == UserRole.GESTIONNAIRE and user.boutique_id is not None


class IsSameBoutiqueOrAdmin(BasePermission):
    def has_object_permission(self, request, view, obj):
        user = request.user
        if user.role == UserRole.ADMIN:
            return True
        return (
            hasattr(obj, "boutique_id")
            and user.boutique_id is not None
            and obj.boutique_id == user.boutique_id
        )


# ============================================================
# CONTRÔLE D'ACCÈS AU NIVEAU DES SERVICES
# ============================================================

def verifier_acces_boutique(utilisateur, boutique_id):
    """
    Lève AuthorizationError si l'utilisateur ne peut pas agir
    sur la boutique demandée.
    """

    if utilisateur.role == UserRole.ADMIN:
        return

    if (
        utilisateur.boutique_id is None
        or str(utilisateur.boutique_id) != str(boutique_id)
    ):
        raise AuthorizationError()


def resoudre_boutique(utilisateur, boutique_id=None):
    """
    Boutique ciblée par une requête.

    Sans identifiant explicite : la boutique de l'utilisateur.
    Un ADMIN peut viser n'importe quelle boutique ; un GESTIONNAIRE
    qui vise une autre boutique que la sienne est refusé.
    """
    from tenants.models import Boutique

    if boutique_id in (None, ""):
        if utilisateur.boutique_id is None:
            raise ValidationError("Boutique non spécifiée.")
        return utilisateur.boutique

    verifier_acces_boutique(utilisateur, boutique_id)

    try:
        return Boutique.objects.get(pk=boutique_id)
    except (Boutique.DoesNotExist, DjangoValidationError):
        raise NotFoundError("Boutique introuvable.")
