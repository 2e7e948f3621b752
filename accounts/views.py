# accounts/views.py
import logging

from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from accounts.models import Utilisateur
from accounts.permissions import CanManageUsers
from accounts.serializers.token import MyTokenObtainPairSerializer
from accounts.serializers.utilisateur import UtilisateurSerializer
from core.exceptions import ConflictError

logger = logging.getLogger(__name__)


class MyTokenObtainPairView(TokenObtainPairView):
    serializer_class = MyTokenObtainPairSerializer


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = UtilisateurSerializer(request.user, context={"request": request})
        return Response(serializer.data)


class UtilisateurViewSet(viewsets.ModelViewSet):
    serializer_class = UtilisateurSerializer
    permission_classes = [CanManageUsers]
    filterset_fields = ["role", "boutique", "is_active"]
    search_fields = ["username", "email", "first_name", "last_name"]
    ordering_fields = ["username", "date_joined"]

    def get_queryset(self):
        return Utilisateur.objects.select_related("boutique").order_by("username")

    def perform_destroy(self, instance):
        if instance.pk == self.request.user.pk:
            raise ConflictError("Vous ne pouvez pas supprimer votre propre compte.")

        if instance.ventes.exists() or instance.transactions.exists():
            raise ConflictError(
                "Impossible de supprimer un utilisateur ayant des ventes ou des transactions. "
                "Désactivez-le plutôt."
            )

        logger.info("Suppression de l'utilisateur %s par %s", instance.username, self.request.user.username)
        instance.delete()
