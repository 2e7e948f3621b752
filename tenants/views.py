import logging

from rest_framework import viewsets

from accounts.constants import UserRole
from core.exceptions import ConflictError
from tenants.models import Boutique
from tenants.permissions import BoutiquePermission
from tenants.serializers import BoutiqueSerializer

logger = logging.getLogger(__name__)


class BoutiqueViewSet(viewsets.ModelViewSet):
    serializer_class = BoutiqueSerializer
    permission_classes = [BoutiquePermission]
    search_fields = ["nom", "adresse"]
    ordering_fields = ["nom", "created_at"]

    def get_queryset(self):
        user = self.request.user

        # ADMIN : accès global
        if user.role == UserRole.ADMIN:
            return Boutique.objects.all()

        # GESTIONNAIRE : sa propre boutique
        if user.boutique_id:
            return Boutique.objects.filter(id=user.boutique_id)

        return Boutique.objects.none()

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["include_stats"] = self.request.query_params.get("include_stats") in ("1", "true")
        return context

    def perform_destroy(self, instance):
        if instance.utilisateurs.exists():
            raise ConflictError(
                "Impossible de supprimer une boutique à laquelle des utilisateurs sont rattachés."
            )
        logger.info("Suppression de la boutique %s (%s)", instance.nom, instance.id)
        instance.delete()
