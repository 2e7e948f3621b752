from django.contrib.auth import get_user_model
from django.db.models import Count, Q, Sum
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.constants import UserRole
from core.permissions import IsAdminRole
from dashboard.utils.periods import get_period_dates
from tenants.models import Boutique

User = get_user_model()


class AdminDashboardView(APIView):
    """
    Vue d'ensemble multi-boutiques (ADMIN).
    """

    permission_classes = [IsAdminRole]

    def get(self, request):
        debut, fin = get_period_dates("mois")
        du_mois = Q(ventes__date_vente__range=(debut, fin))

        boutiques = Boutique.objects.annotate(
            nombre_utilisateurs=Count("utilisateurs", distinct=True),
        ).order_by("nom")

        # Requête séparée : la jointure utilisateurs multiplierait les sommes
        ventes_mois = {
            b.pk: b
            for b in Boutique.objects.annotate(
                nombre_ventes=Count("ventes", filter=du_mois),
                chiffre_affaires=Sum("ventes__montant_total", filter=du_mois),
            )
        }

        return Response({
            "stats": {
                "boutiques_total": boutiques.count(),
                "boutiques_actives": boutiques.filter(actif=True).count(),
                "gestionnaires_total": User.objects.filter(role=UserRole.GESTIONNAIRE).count(),
            },
            "boutiques": [
                {
                    "id": str(b.pk),
                    "nom": b.nom,
                    "actif": b.actif,
                    "nombre_utilisateurs": b.nombre_utilisateurs,
                    "ventes_mois": ventes_mois[b.pk].nombre_ventes,
                    "chiffre_affaires_mois": float(ventes_mois[b.pk].chiffre_affaires or 0),
                }
                for b in boutiques
            ],
        })
