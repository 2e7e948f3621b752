# finances/views.py

from django.utils import timezone
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.exceptions import NotFoundError, ValidationError
from core.mixins import BoutiqueScopedMixin
from core.permissions import IsAdminRole
from finances.filters import TransactionFilter
from finances.models import Transaction
from finances.serializers import (
    MouvementCapitalSerializer,
    TransactionManuelleSerializer,
    TransactionSerializer,
)
from finances.services.capital import injecter_capital, injections_capital, retirer_capital
from finances.services.ledger import (
    calculer_solde,
    enregistrer_transaction,
    modifier_transaction,
    resume_financier,
    resume_mensuel,
    supprimer_transaction,
)
from tenants.models import Boutique


class TransactionViewSet(BoutiqueScopedMixin, viewsets.ModelViewSet):
    """
    Journal financier de la boutique.

    Les écritures liées aux ventes, commandes et au capital sont
    générées par leurs flux respectifs ; seules les recettes et
    dépenses manuelles se créent / modifient ici.
    """

    queryset = Transaction.objects.select_related("utilisateur")
    serializer_class = TransactionSerializer
    filterset_class = TransactionFilter
    search_fields = ["description"]
    ordering_fields = ["date_transaction", "montant", "type"]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def create(self, request, *args, **kwargs):
        serializer = TransactionManuelleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        ecriture = enregistrer_transaction(
            boutique=self.get_boutique(),
            utilisateur=request.user,
            type_transaction=data["type"],
            montant=data["montant"],
            description=data["description"],
            categorie_depense=data.get("categorie_depense", ""),
            date_transaction=data.get("date_transaction"),
        )

        return Response(TransactionSerializer(ecriture).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        ecriture = self.get_object()

        serializer = TransactionManuelleSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        ecriture = modifier_transaction(request.user, ecriture, **serializer.validated_data)
        return Response(TransactionSerializer(ecriture).data)

    def destroy(self, request, *args, **kwargs):
        supprimer_transaction(request.user, self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    # =========================
    # SOLDE / STATISTIQUES
    # =========================

    @action(detail=False, methods=["get"])
    def solde(self, request):
        boutique = self.get_boutique()
        return Response({
            "boutique_id": str(boutique.pk),
            "capital_initial": boutique.capital_initial,
            "solde": calculer_solde(boutique),
            "devise": boutique.devise,
        })

    @action(detail=False, methods=["get"])
    def stats(self, request):
        annee = request.query_params.get("annee") or timezone.localdate().year
        try:
            annee = int(annee)
        except (TypeError, ValueError):
            raise ValidationError("Année invalide.")

        qs = self.filter_queryset(self.get_queryset())

        return Response({
            "annee": annee,
            "resume": resume_financier(qs),
            "par_mois": resume_mensuel(self.get_boutique(), annee),
        })


class CapitalViewSet(viewsets.GenericViewSet):
    """
    Mouvements de capital (ADMIN uniquement).

    - GET : injections, filtrables par ?boutique_id=
    - POST : injection
    - POST retirer/ : retrait plafonné à la trésorerie
    """

    permission_classes = [IsAdminRole]
    serializer_class = MouvementCapitalSerializer
    queryset = Transaction.objects.none()

    def _boutique(self, boutique_id):
        try:
            return Boutique.objects.get(pk=boutique_id)
        except Boutique.DoesNotExist:
            raise NotFoundError("Boutique introuvable.")

    def list(self, request):
        boutique_id = request.query_params.get("boutique_id")
        boutique = self._boutique(boutique_id) if boutique_id else None

        qs = injections_capital(boutique)
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(TransactionSerializer(page, many=True).data)
        return Response(TransactionSerializer(qs, many=True).data)

    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        ecriture = injecter_capital(
            request.user,
            self._boutique(data["boutique_id"]),
            data["montant"],
            description=data["description"],
        )
        return Response(TransactionSerializer(ecriture).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"])
    def retirer(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        ecriture = retirer_capital(
            request.user,
            self._boutique(data["boutique_id"]),
            data["montant"],
            description=data["description"],
        )
        return Response(TransactionSerializer(ecriture).data, status=status.HTTP_201_CREATED)
