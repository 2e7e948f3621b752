# commerce/filters.py
import django_filters
from django.db.models import F

from commerce.constants import MethodePaiement, StatutCommande, StatutPaiement
from commerce.models import Produit
from commerce.models_commande import Commande
from commerce.models_stock import MouvementStock, Stock
from commerce.models_vente import Paiement, Vente


class VenteFilter(django_filters.FilterSet):
    statut = django_filters.ChoiceFilter(choices=StatutPaiement.choices)
    date_debut = django_filters.DateFilter(field_name="date_vente", lookup_expr="date__gte")
    date_fin = django_filters.DateFilter(field_name="date_vente", lookup_expr="date__lte")

    class Meta:
        model = Vente
        fields = ["statut", "client", "utilisateur", "date_debut", "date_fin"]


class PaiementFilter(django_filters.FilterSet):
    methode_paiement = django_filters.ChoiceFilter(choices=MethodePaiement.choices)
    date_debut = django_filters.DateFilter(field_name="date_creation", lookup_expr="date__gte")
    date_fin = django_filters.DateFilter(field_name="date_creation", lookup_expr="date__lte")

    class Meta:
        model = Paiement
        fields = ["vente", "methode_paiement", "date_debut", "date_fin"]


class CommandeFilter(django_filters.FilterSet):
    statut = django_filters.ChoiceFilter(choices=StatutCommande.choices)
    date_debut = django_filters.DateFilter(field_name="date_commande", lookup_expr="date__gte")
    date_fin = django_filters.DateFilter(field_name="date_commande", lookup_expr="date__lte")

    class Meta:
        model = Commande
        fields = ["statut", "fournisseur", "date_debut", "date_fin"]


class StockFilter(django_filters.FilterSet):
    alerte = django_filters.BooleanFilter(method="filter_alerte")
    categorie = django_filters.NumberFilter(field_name="produit__categorie")

    class Meta:
        model = Stock
        fields = ["produit", "categorie", "alerte"]

    def filter_alerte(self, queryset, name, value):
        en_alerte = queryset.filter(quantite__lte=F("produit__seuil_alerte"))
        if value:
            return en_alerte
        return queryset.exclude(pk__in=en_alerte.values("pk"))


class MouvementStockFilter(django_filters.FilterSet):
    produit = django_filters.NumberFilter(field_name="stock__produit")
    date_debut = django_filters.DateFilter(field_name="date_mouvement", lookup_expr="date__gte")
    date_fin = django_filters.DateFilter(field_name="date_mouvement", lookup_expr="date__lte")

    class Meta:
        model = MouvementStock
        fields = ["stock", "produit", "type_mouvement", "vente", "date_debut", "date_fin"]


class ProduitFilter(django_filters.FilterSet):
    prix_min = django_filters.NumberFilter(field_name="prix_vente", lookup_expr="gte")
    prix_max = django_filters.NumberFilter(field_name="prix_vente", lookup_expr="lte")

    class Meta:
        model = Produit
        fields = ["categorie", "prix_min", "prix_max"]
