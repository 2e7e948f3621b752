# commerce/views.py
import logging

from rest_framework import viewsets

from commerce.filters import ProduitFilter
from commerce.models import Categorie, Client, Fournisseur, Produit
from commerce.serializers import (
    CategorieSerializer,
    ClientSerializer,
    FournisseurSerializer,
    ProduitSerializer,
)
from core.exceptions import ConflictError
from core.mixins import BoutiqueScopedMixin

logger = logging.getLogger(__name__)


class CategorieViewSet(BoutiqueScopedMixin, viewsets.ModelViewSet):
    queryset = Categorie.objects.all()
    serializer_class = CategorieSerializer
    search_fields = ["nom", "description"]
    ordering_fields = ["nom", "created_at"]

    def perform_destroy(self, instance):
        if instance.produits.exists():
            raise ConflictError(
                "Impossible de supprimer une catégorie qui contient des produits."
            )
        instance.delete()


class ProduitViewSet(BoutiqueScopedMixin, viewsets.ModelViewSet):
    """
    Catalogue produits.

    La création enregistre aussi la ligne de stock
    (et l'entrée « Stock initial » si quantite_initiale > 0).
    """

    queryset = Produit.objects.select_related("categorie", "stock")
    serializer_class = ProduitSerializer
    filterset_class = ProduitFilter
    search_fields = ["nom", "description", "categorie__nom"]
    ordering_fields = ["nom", "prix_vente", "created_at"]

    def perform_destroy(self, instance):
        if instance.lignes_vente.exists():
            raise ConflictError(
                "Impossible de supprimer un produit qui figure dans des ventes."
            )
        if instance.lignes_commande.exists():
            raise ConflictError(
                "Impossible de supprimer un produit qui figure dans des commandes."
            )

        logger.info("Suppression du produit %s boutique=%s", instance.nom, instance.boutique_id)
        # Stock et mouvements suivent en cascade
        instance.delete()


class ClientViewSet(BoutiqueScopedMixin, viewsets.ModelViewSet):
    queryset = Client.objects.all()
    serializer_class = ClientSerializer
    search_fields = ["nom", "prenom", "email", "telephone"]
    ordering_fields = ["nom", "created_at"]

    def perform_destroy(self, instance):
        if instance.ventes.exists():
            raise ConflictError(
                "Impossible de supprimer un client qui a des ventes."
            )
        instance.delete()


class FournisseurViewSet(BoutiqueScopedMixin, viewsets.ModelViewSet):
    queryset = Fournisseur.objects.all()
    serializer_class = FournisseurSerializer
    search_fields = ["nom", "contact", "email", "telephone"]
    ordering_fields = ["nom", "created_at"]

    def perform_destroy(self, instance):
        if instance.commandes.exists():
            raise ConflictError(
                "Impossible de supprimer un fournisseur qui a des commandes."
            )
        instance.delete()
