# core/mixins.py

from core.permissions import IsBoutiqueActor, IsSameBoutiqueOrAdmin, resoudre_boutique


class BoutiqueScopedMixin:
    """
    Cloisonnement par boutique des ViewSets.

    - get_queryset : uniquement les lignes de la boutique courante
    - perform_create : injecte la boutique
    """

    permission_classes = [IsBoutiqueActor, IsSameBoutiqueOrAdmin]
    boutique_field = "boutique"

    def get_boutique(self):
        if not hasattr(self, "_boutique"):
            request = self.request
            boutique_id = (
                request.query_params.get("boutique_id")
                or request.headers.get("X-Boutique-Id")
            )
            self._boutique = resoudre_boutique(request.user, boutique_id)
        return self._boutique

    def get_queryset(self):
        qs = super().get_queryset()
        if getattr(self, "swagger_fake_view", False):
            return qs.none()
        return qs.filter(**{self.boutique_field: self.get_boutique()})

    def perform_create(self, serializer):
        serializer.save(**{self.boutique_field: self.get_boutique()})

    def get_serializer_context(self):
        context = super().get_serializer_context()
        if getattr(self, "swagger_fake_view", False):
            return context
        context["boutique"] = self.get_boutique()
        return context
