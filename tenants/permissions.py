from rest_framework.permissions import BasePermission

from accounts.constants import UserRole


class BoutiquePermission(BasePermission):
    """
    ADMIN : gestion complète des boutiques.
    GESTIONNAIRE : lecture de sa propre boutique.
    """

    def has_permission(self, request, view):
        user = request.user

        if not user.is_authenticated:
            return False

        if user.role == UserRole.ADMIN:
            return True

        return view.action in ("list", "retrieve")
