import django_filters

from finances.models import CategorieDepense, Transaction, TypeTransaction


class TransactionFilter(django_filters.FilterSet):
    type = django_filters.MultipleChoiceFilter(choices=TypeTransaction.choices)
    categorie_depense = django_filters.ChoiceFilter(choices=CategorieDepense.choices)
    date_debut = django_filters.DateFilter(field_name="date_transaction", lookup_expr="date__gte")
    date_fin = django_filters.DateFilter(field_name="date_transaction", lookup_expr="date__lte")

    class Meta:
        model = Transaction
        fields = ["type", "categorie_depense", "mois", "vente", "commande", "date_debut", "date_fin"]
