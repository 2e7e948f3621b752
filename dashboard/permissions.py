from rest_framework.permissions import BasePermission

from accounts.constants import UserRole


class DashboardPermission(BasePermission):
    def has_permission(self, request, view):
        user = request.user

        return bool(user and user.is_authenticated) and user.role in [
            UserRole.ADMIN,
            UserRole.GESTIONNAIRE,
        ]
