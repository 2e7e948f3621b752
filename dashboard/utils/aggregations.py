from decimal import Decimal

from django.db.models import Sum


def sum_montant(qs, field="montant"):
    """
    Retourne la somme d'un champ monétaire (0 si le queryset est vide)
    """
    return qs.aggregate(total=Sum(field))["total"] or Decimal("0.00")
