from rest_framework.permissions import BasePermission

from accounts.constants import UserRole


class CanManageUsers(BasePermission):
    """
    Gestion des utilisateurs : ADMIN uniquement.
    """

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False

        return request.user.role == UserRole.ADMIN
