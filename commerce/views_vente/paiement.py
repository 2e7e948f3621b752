# commerce/views_vente/paiement.py

from rest_framework import status, viewsets
from rest_framework.response import Response

from commerce.filters import PaiementFilter
from commerce.models_vente import Paiement
from commerce.serializers_vente.paiement import (
    PaiementCreateSerializer,
    PaiementSerializer,
    PaiementUpdateSerializer,
)
from commerce.services.paiement import ajouter_paiement, modifier_paiement, supprimer_paiement
from core.mixins import BoutiqueScopedMixin


class PaiementViewSet(BoutiqueScopedMixin, viewsets.ModelViewSet):
    """
    Paiements des ventes. Chaque écriture met à jour le statut de la vente.
    """

    queryset = Paiement.objects.select_related("vente")
    serializer_class = PaiementSerializer
    filterset_class = PaiementFilter
    search_fields = ["reference", "vente__numero_vente"]
    ordering_fields = ["date_creation", "montant"]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def create(self, request, *args, **kwargs):
        serializer = PaiementCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        paiement = ajouter_paiement(
            request.user,
            self.get_boutique(),
            data["vente_id"],
            data["montant"],
            methode_paiement=data["methode_paiement"],
            reference=data["reference"],
            notes=data["notes"],
        )

        return Response(PaiementSerializer(paiement).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        paiement = self.get_object()

        serializer = PaiementUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        paiement = modifier_paiement(request.user, paiement, **serializer.validated_data)

        return Response(PaiementSerializer(paiement).data)

    def destroy(self, request, *args, **kwargs):
        supprimer_paiement(request.user, self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)
