# commerce/views_commande/commande.py

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from commerce.filters import CommandeFilter
from commerce.models_commande import Commande
from commerce.serializers_commande.commande import (
    CommandeCreateSerializer,
    CommandeSerializer,
    PaiementCommandeSerializer,
    ReceptionSerializer,
    RecevoirToutSerializer,
)
from commerce.services.reception import (
    annuler_commande,
    creer_commande,
    payer_commande,
    recevoir_commande,
    recevoir_tout,
    supprimer_commande,
)
from core.mixins import BoutiqueScopedMixin


class CommandeViewSet(BoutiqueScopedMixin, viewsets.ModelViewSet):
    """
    Commandes fournisseurs

    - EN_ATTENTE : créée, aucune réception
    - EN_COURS : réception entamée
    - RECUE : tout reçu (ou reliquat annulé)
    - ANNULEE : abandonnée avant toute réception
    """

    queryset = (
        Commande.objects
        .select_related("fournisseur")
        .prefetch_related("lignes__produit")
    )
    serializer_class = CommandeSerializer
    filterset_class = CommandeFilter
    search_fields = ["numero_commande", "fournisseur__nom", "notes"]
    ordering_fields = ["date_commande", "montant_total", "numero_commande"]
    http_method_names = ["get", "post", "delete", "head", "options"]

    def _reponse(self, commande, **extra):
        commande = self.get_queryset().get(pk=commande.pk)
        data = CommandeSerializer(commande).data
        data.update(extra)
        return data

    def create(self, request, *args, **kwargs):
        serializer = CommandeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        commande = creer_commande(
            request.user,
            self.get_boutique(),
            data["fournisseur_id"],
            [dict(ligne) for ligne in data["lignes"]],
            date_echeance=data.get("date_echeance"),
            notes=data["notes"],
        )

        return Response(self._reponse(commande), status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        commande = self.get_object()
        supprimer_commande(request.user, self.get_boutique(), commande.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # =========================
    # TRANSITIONS
    # =========================

    @action(detail=True, methods=["post"])
    def recevoir(self, request, pk=None):
        commande = self.get_object()

        serializer = ReceptionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        resultat = recevoir_commande(
            request.user,
            self.get_boutique(),
            commande.pk,
            [dict(ligne) for ligne in data["lignes"]],
            montant_paye=data.get("montant_paye"),
            annuler_reste=data["annuler_reste"],
            notes=data.get("notes"),
        )

        return Response(self._reponse(
            resultat["commande"],
            montant_total_recu=resultat["montant_total_recu"],
            lignes_traitees=resultat["lignes_traitees"],
            statut_final=resultat["statut_final"],
        ))

    @action(detail=True, methods=["post"], url_path="recevoir-tout")
    def recevoir_tout(self, request, pk=None):
        commande = self.get_object()

        serializer = RecevoirToutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        resultat = recevoir_tout(
            request.user,
            self.get_boutique(),
            commande.pk,
            montant_paye=data.get("montant_paye"),
            notes=data.get("notes"),
        )

        return Response(self._reponse(
            resultat["commande"],
            montant_total_recu=resultat["montant_total_recu"],
            lignes_traitees=resultat["lignes_traitees"],
            statut_final=resultat["statut_final"],
        ))

    @action(detail=True, methods=["post"])
    def payer(self, request, pk=None):
        commande = self.get_object()

        serializer = PaiementCommandeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        commande = payer_commande(
            request.user,
            self.get_boutique(),
            commande.pk,
            serializer.validated_data["montant"],
        )

        return Response(self._reponse(commande))

    @action(detail=True, methods=["post"])
    def annuler(self, request, pk=None):
        commande = self.get_object()
        commande = annuler_commande(request.user, self.get_boutique(), commande.pk)
        return Response(self._reponse(commande))
