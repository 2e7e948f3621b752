from django.db.models import Q, Sum
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.constants import UserRole
from core.permissions import IsBoutiqueActor
from finances.models import Transaction, TypeTransaction
from finances.services.ledger import TYPES_RECETTES, resume_financier


class FinanceDashboardAPIView(APIView):
    permission_classes = [IsBoutiqueActor]

    def get(self, request):
        user = request.user

        qs = Transaction.objects.all()

        # Gestionnaire → vue limitée à sa boutique
        if user.role != UserRole.ADMIN:
            qs = qs.filter(boutique_id=user.boutique_id)

        mois = request.query_params.get("mois")
        if mois:
            qs = qs.filter(mois=mois)

        par_boutique = qs.values(
            "boutique_id",
            "boutique__nom"
        ).annotate(
            recettes=Sum("montant", filter=Q(type__in=TYPES_RECETTES)),
            depenses=Sum("montant", filter=Q(type=TypeTransaction.DEPENSE)),
            achats=Sum("montant", filter=Q(type=TypeTransaction.ACHAT)),
        ).order_by("boutique__nom")

        resume = resume_financier(qs)

        return Response({
            "global": {
                "recettes": resume["recettes"],
                "depenses": resume["depenses"],
                "resultat": resume["benefice"],
            },
            "par_boutique": [
                {
                    "boutique_id": str(ligne["boutique_id"]),
                    "boutique_nom": ligne["boutique__nom"],
                    "recettes": ligne["recettes"] or 0,
                    "depenses": abs(ligne["depenses"] or 0) + (ligne["achats"] or 0),
                }
                for ligne in par_boutique
            ],
        })
