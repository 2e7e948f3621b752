from datetime import datetime, time, timedelta

from django.utils import timezone
from django.utils.dateparse import parse_date

from core.exceptions import ValidationError

PERIODES = ("jour", "semaine", "mois", "trimestre", "annee")


def get_period_dates(period: str):
    today = timezone.localdate()

    if period == "jour":
        start = today

    elif period == "semaine":
        start = today - timedelta(days=today.weekday())

    elif period == "mois":
        start = today.replace(day=1)

    elif period == "trimestre":
        start = today.replace(month=3 * ((today.month - 1) // 3) + 1, day=1)

    elif period == "annee":
        start = today.replace(month=1, day=1)

    else:
        raise ValidationError(
            f"Période invalide : {period}",
            details={"periodes": list(PERIODES)},
        )

    return (
        timezone.make_aware(datetime.combine(start, time.min)),
        timezone.make_aware(datetime.combine(today, time.max)),
    )


def _parse(valeur, champ):
    if not valeur:
        return None

    try:
        date = parse_date(valeur)
    except ValueError:
        date = None

    if date is None:
        raise ValidationError(f"Date invalide : {valeur}", details={champ: "AAAA-MM-JJ"})
    return date


def resolve_period(params, default="mois"):
    """
    Bornes (début, fin) d'un rapport.

    `date_debut` / `date_fin` explicites priment sur `periode`.
    """

    date_debut = _parse(params.get("date_debut"), "date_debut")
    date_fin = _parse(params.get("date_fin"), "date_fin")

    if not (date_debut or date_fin):
        return get_period_dates(params.get("periode") or default)

    date_fin = date_fin or timezone.localdate()
    date_debut = date_debut or date_fin.replace(day=1)

    if date_debut > date_fin:
        raise ValidationError("La date de début doit précéder la date de fin.")

    return (
        timezone.make_aware(datetime.combine(date_debut, time.min)),
        timezone.make_aware(datetime.combine(date_fin, time.max)),
    )
