# commerce/views_stock/stock.py

from rest_framework import mixins, status, viewsets
from rest_framework.response import Response

from commerce.filters import MouvementStockFilter, StockFilter
from commerce.models_stock import MouvementStock, Stock
from commerce.serializers_stock.stock import (
    MouvementManuelSerializer,
    MouvementStockSerializer,
    StockSerializer,
)
from commerce.services.stock import enregistrer_mouvement_manuel
from core.exceptions import NotFoundError
from core.mixins import BoutiqueScopedMixin


class StockViewSet(BoutiqueScopedMixin, viewsets.ReadOnlyModelViewSet):
    """
    Lecture seule : les quantités évoluent uniquement par mouvements.
    """

    queryset = Stock.objects.select_related("produit", "produit__categorie")
    serializer_class = StockSerializer
    filterset_class = StockFilter
    search_fields = ["produit__nom", "produit__categorie__nom"]
    ordering_fields = ["quantite", "produit__nom", "updated_at"]


class MouvementStockViewSet(
    BoutiqueScopedMixin,
    mixins.CreateModelMixin,
    viewsets.ReadOnlyModelViewSet,
):
    """
    Historique des mouvements + saisie d'entrées / sorties manuelles.
    """

    queryset = MouvementStock.objects.select_related("stock__produit", "vente")
    serializer_class = MouvementStockSerializer
    filterset_class = MouvementStockFilter
    search_fields = ["motif", "stock__produit__nom"]
    ordering_fields = ["date_mouvement", "quantite"]

    def create(self, request, *args, **kwargs):
        serializer = MouvementManuelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            stock = Stock.objects.get(pk=data["stock_id"], boutique=self.get_boutique())
        except Stock.DoesNotExist:
            raise NotFoundError("Stock introuvable.")

        mouvement = enregistrer_mouvement_manuel(
            request.user,
            stock,
            data["type_mouvement"],
            data["quantite"],
            motif=data["motif"],
        )

        return Response(
            MouvementStockSerializer(mouvement).data,
            status=status.HTTP_201_CREATED,
        )
