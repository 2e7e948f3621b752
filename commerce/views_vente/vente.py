# commerce/views_vente/vente.py

from django.db.models import Count, Sum
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from commerce.constants import StatutPaiement
from commerce.filters import VenteFilter
from commerce.models import Client
from commerce.models_vente import Vente
from commerce.serializers_vente.vente import (
    CreanceSerializer,
    VenteCreateSerializer,
    VenteSerializer,
    VenteUpdateSerializer,
)
from commerce.services.vente import annuler_vente, creer_vente
from core.exceptions import NotFoundError
from core.mixins import BoutiqueScopedMixin


class VenteViewSet(BoutiqueScopedMixin, viewsets.ModelViewSet):
    """
    Ventes de la boutique.

    - POST : enregistre la vente (stock + paiement comptant)
    - PATCH : client / échéance uniquement
    - DELETE : annule la vente et remet les articles en stock
    """

    queryset = (
        Vente.objects
        .select_related("client", "utilisateur")
        .prefetch_related("lignes__produit", "paiements", "mouvements_stock__stock__produit")
    )
    serializer_class = VenteSerializer
    filterset_class = VenteFilter
    search_fields = ["numero_vente", "client__nom", "client__prenom"]
    ordering_fields = ["date_vente", "montant_total", "numero_vente"]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def _client(self, client_id):
        if not client_id:
            return None
        try:
            return Client.objects.get(pk=client_id, boutique=self.get_boutique())
        except Client.DoesNotExist:
            raise NotFoundError("Client introuvable.")

    def create(self, request, *args, **kwargs):
        serializer = VenteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        vente = creer_vente(
            request.user,
            self.get_boutique(),
            [dict(ligne) for ligne in data["lignes"]],
            client=self._client(data.get("client_id")),
            montant_paye=data.get("montant_paye"),
            methode_paiement=data["methode_paiement"],
            date_echeance=data.get("date_echeance"),
        )

        return Response(VenteSerializer(vente).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        vente = self.get_object()

        serializer = VenteUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        champs = ["updated_at"]
        if "client_id" in data:
            vente.client = self._client(data["client_id"])
            champs.append("client")
        if "date_echeance" in data:
            vente.date_echeance = data["date_echeance"]
            champs.append("date_echeance")
        vente.save(update_fields=champs)

        return Response(VenteSerializer(vente).data)

    def destroy(self, request, *args, **kwargs):
        vente = self.get_object()
        annuler_vente(request.user, self.get_boutique(), vente.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # =========================
    # CRÉANCES
    # =========================

    @action(detail=False, methods=["get"])
    def creances(self, request):
        qs = self.filter_queryset(self.get_queryset())

        if "statut" not in request.query_params:
            qs = qs.exclude(statut=StatutPaiement.PAYE)

        qs = qs.order_by("date_echeance", "date_vente")

        totaux = qs.aggregate(
            total=Sum("montant_total"),
            paye=Sum("montant_paye"),
            restant=Sum("montant_restant"),
        )
        par_statut = {
            ligne["statut"]: ligne["nombre"]
            for ligne in (
                qs.prefetch_related(None)
                .order_by()
                .values("statut")
                .annotate(nombre=Count("id"))
            )
        }

        return Response({
            "creances": CreanceSerializer(qs, many=True).data,
            "statistiques": {
                "nombre": qs.count(),
                "montant_total": totaux["total"] or 0,
                "montant_paye": totaux["paye"] or 0,
                "montant_restant": totaux["restant"] or 0,
                "par_statut": par_statut,
            },
        })
