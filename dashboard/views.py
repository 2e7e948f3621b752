# dashboard/views.py
from decimal import Decimal

from django.db.models import Count, F, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone
from rest_framework.response import Response
from rest_framework.views import APIView

from commerce.constants import StatutCommande, StatutPaiement
from commerce.models import Commande, LigneVente, Stock, Vente
from core.exceptions import ValidationError
from core.permissions import resoudre_boutique
from dashboard.permissions import DashboardPermission
from dashboard.utils.aggregations import sum_montant
from dashboard.utils.periods import get_period_dates, resolve_period
from finances.models import Transaction, TypeTransaction
from finances.services.ledger import calculer_solde, resume_financier

TYPES_RAPPORT = ("ventes", "produits", "clients", "stocks", "financier")


def _boutique(request):
    return resoudre_boutique(
        request.user,
        request.query_params.get("boutique_id") or request.headers.get("X-Boutique-Id"),
    )


def _limite(request, defaut=10):
    try:
        return max(1, min(int(request.query_params.get("limit", defaut)), 100))
    except ValueError:
        raise ValidationError("Paramètre limit invalide.")


class DashboardView(APIView):
    """
    Indicateurs du jour / du mois pour la boutique courante.
    """

    permission_classes = [DashboardPermission]

    def get(self, request):
        boutique = _boutique(request)

        debut_jour, fin_jour = get_period_dates("jour")
        debut_mois, fin_mois = get_period_dates("mois")

        ventes = Vente.objects.filter(boutique=boutique)
        ventes_jour = ventes.filter(date_vente__range=(debut_jour, fin_jour))
        ventes_mois = ventes.filter(date_vente__range=(debut_mois, fin_mois))
        creances = ventes.exclude(statut=StatutPaiement.PAYE)

        # =========================
        # KPI
        # =========================
        kpis = {
            "ventes_jour": ventes_jour.count(),
            "chiffre_affaires_jour": float(sum_montant(ventes_jour, "montant_total")),
            "ventes_mois": ventes_mois.count(),
            "chiffre_affaires_mois": float(sum_montant(ventes_mois, "montant_total")),
            "creances": float(sum_montant(creances, "montant_restant")),
            "solde": float(calculer_solde(boutique)),
            "produits_en_alerte": Stock.objects.filter(
                boutique=boutique,
                quantite__lte=F("produit__seuil_alerte"),
            ).count(),
            "commandes_en_attente": Commande.objects.filter(
                boutique=boutique,
                statut__in=[StatutCommande.EN_ATTENTE, StatutCommande.EN_COURS],
            ).count(),
        }

        # =========================
        # VENTES RECENTES
        # =========================
        ventes_recentes = list(
            ventes
            .order_by("-date_vente")[:5]
            .values("id", "numero_vente", "date_vente", "montant_total", "statut")
        )

        for v in ventes_recentes:
            v["montant_total"] = float(v["montant_total"])
            v["date_vente"] = v["date_vente"].isoformat()

        return Response({
            "boutique": {
                "id": str(boutique.pk),
                "nom": boutique.nom,
                "devise": boutique.devise,
            },
            "kpis": kpis,
            "ventes_recentes": ventes_recentes,
        })


class RapportView(APIView):
    """
    Rapports de la boutique courante.

    ?type=ventes|produits|clients|stocks|financier
    &periode=jour|semaine|mois|trimestre|annee  (défaut : mois)
    ou &date_debut=AAAA-MM-JJ&date_fin=AAAA-MM-JJ
    """

    permission_classes = [DashboardPermission]

    def get(self, request):
        type_rapport = request.query_params.get("type", "ventes")
        if type_rapport not in TYPES_RAPPORT:
            raise ValidationError(
                f"Type de rapport invalide : {type_rapport}",
                details={"types": list(TYPES_RAPPORT)},
            )

        boutique = _boutique(request)
        debut, fin = resolve_period(request.query_params)

        contenu = getattr(self, f"rapport_{type_rapport}")(request, boutique, debut, fin)

        return Response({
            "type": type_rapport,
            "periode": {
                "date_debut": debut.isoformat(),
                "date_fin": fin.isoformat(),
            },
            **contenu,
        })

    # =========================
    # VENTES
    # =========================
    def rapport_ventes(self, request, boutique, debut, fin):
        qs = Vente.objects.filter(boutique=boutique, date_vente__range=(debut, fin))

        totaux = qs.aggregate(
            nombre=Count("id"),
            chiffre_affaires=Sum("montant_total"),
            encaisse=Sum("montant_paye"),
            restant=Sum("montant_restant"),
        )
        nombre = totaux["nombre"]
        chiffre_affaires = totaux["chiffre_affaires"] or Decimal("0.00")

        par_jour = (
            qs
            .annotate(jour=TruncDate("date_vente"))
            .values("jour")
            .annotate(nombre=Count("id"), total=Sum("montant_total"))
            .order_by("jour")
        )

        par_statut = {
            ligne["statut"]: ligne["nombre"]
            for ligne in qs.order_by().values("statut").annotate(nombre=Count("id"))
        }

        return {
            "resume": {
                "nombre_ventes": nombre,
                "chiffre_affaires": chiffre_affaires,
                "montant_encaisse": totaux["encaisse"] or Decimal("0.00"),
                "montant_restant": totaux["restant"] or Decimal("0.00"),
                "panier_moyen": (
                    (chiffre_affaires / nombre).quantize(Decimal("0.01"))
                    if nombre else Decimal("0.00")
                ),
            },
            "par_jour": [
                {
                    "date": ligne["jour"].isoformat(),
                    "nombre": ligne["nombre"],
                    "total": ligne["total"],
                }
                for ligne in par_jour
            ],
            "par_statut": par_statut,
        }

    # =========================
    # PRODUITS
    # =========================
    def rapport_produits(self, request, boutique, debut, fin):
        top = (
            LigneVente.objects
            .filter(vente__boutique=boutique, vente__date_vente__range=(debut, fin))
            .values("produit_id", "produit__nom", "produit__categorie__nom")
            .annotate(
                quantite_vendue=Sum("quantite"),
                chiffre_affaires=Sum("sous_total"),
                nombre_ventes=Count("vente", distinct=True),
            )
            .order_by("-quantite_vendue", "produit__nom")[: _limite(request)]
        )

        return {
            "top_produits": [
                {
                    "produit_id": ligne["produit_id"],
                    "nom": ligne["produit__nom"],
                    "categorie": ligne["produit__categorie__nom"],
                    "quantite_vendue": ligne["quantite_vendue"],
                    "chiffre_affaires": ligne["chiffre_affaires"],
                    "nombre_ventes": ligne["nombre_ventes"],
                }
                for ligne in top
            ],
        }

    # =========================
    # CLIENTS
    # =========================
    def rapport_clients(self, request, boutique, debut, fin):
        top = (
            Vente.objects
            .filter(
                boutique=boutique,
                client__isnull=False,
                date_vente__range=(debut, fin),
            )
            .values("client_id", "client__nom", "client__prenom")
            .annotate(
                nombre_achats=Count("id"),
                total_achats=Sum("montant_total"),
                montant_restant=Sum("montant_restant"),
            )
            .order_by("-total_achats")[: _limite(request)]
        )

        return {
            "top_clients": [
                {
                    "client_id": ligne["client_id"],
                    "nom": f'{ligne["client__prenom"]} {ligne["client__nom"]}'.strip(),
                    "nombre_achats": ligne["nombre_achats"],
                    "total_achats": ligne["total_achats"],
                    "montant_restant": ligne["montant_restant"],
                }
                for ligne in top
            ],
        }

    # =========================
    # STOCKS (état courant, hors période)
    # =========================
    def rapport_stocks(self, request, boutique, debut, fin):
        stocks = (
            Stock.objects
            .filter(boutique=boutique)
            .select_related("produit", "produit__categorie")
            .order_by("produit__nom")
        )

        valeur_totale = Decimal("0.00")
        alertes = []
        ruptures = 0

        for stock in stocks:
            valeur_totale += stock.quantite * stock.produit.prix_vente
            if stock.quantite == 0:
                ruptures += 1
            if stock.en_alerte:
                alertes.append({
                    "produit_id": stock.produit_id,
                    "nom": stock.produit.nom,
                    "categorie": stock.produit.categorie.nom,
                    "quantite": stock.quantite,
                    "seuil_alerte": stock.produit.seuil_alerte,
                })

        return {
            "resume": {
                "nombre_produits": len(stocks),
                "valeur_totale": valeur_totale,
                "produits_en_alerte": len(alertes),
                "produits_en_rupture": ruptures,
            },
            "alertes": alertes,
        }

    # =========================
    # FINANCIER
    # =========================
    def rapport_financier(self, request, boutique, debut, fin):
        qs = Transaction.objects.filter(
            boutique=boutique,
            date_transaction__range=(debut, fin),
        )

        depenses_par_categorie = [
            {
                "categorie": ligne["categorie_depense"],
                "montant": abs(ligne["montant"]),
            }
            for ligne in (
                qs
                .filter(type=TypeTransaction.DEPENSE)
                .values("categorie_depense")
                .annotate(montant=Sum("montant"))
                .order_by("categorie_depense")
            )
        ]

        return {
            "resume": resume_financier(qs),
            "depenses_par_categorie": depenses_par_categorie,
            "solde": calculer_solde(boutique),
            "date_calcul": timezone.now().isoformat(),
        }
