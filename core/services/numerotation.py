# core/services/numerotation.py

from django.db import transaction
from django.db.models import F

from core.models import CompteurDocument, TypeDocument


# Préfixe + largeur du numéro : V001, CMD-000001
FORMATS = {
    TypeDocument.VENTE: ("V", 3),
    TypeDocument.COMMANDE: ("CMD-", 6),
}


def formater_numero(type_document, numero):
    prefixe, largeur = FORMATS[type_document]
    return f"{prefixe}{str(numero).zfill(largeur)}"


def plus_grand_suffixe(numeros, prefixe):
    """
    Plus grand suffixe numérique parmi des numéros existants.
    Les numéros qui ne suivent pas le format sont ignorés.
    """

    dernier = 0
    for numero in numeros:
        if not numero or not numero.startswith(prefixe):
            continue
        try:
            valeur = int(numero[len(prefixe):])
        except ValueError:
            continue
        dernier = max(dernier, valeur)
    return dernier


@transaction.atomic
def prochain_numero(boutique, type_document, existants=()):
    """
    Attribue le numéro suivant pour (boutique, type_document).

    Le compteur est incrémenté par un UPDATE atomique : la ligne reste
    verrouillée jusqu'à la fin de la transaction appelante, deux
    créations concurrentes ne peuvent donc pas obtenir le même numéro.

    `existants` (numéros déjà présents) n'est lu qu'à la création du
    compteur, pour repartir du plus grand suffixe existant.
    """

    prefixe, _ = FORMATS[type_document]
    filtre = {"boutique": boutique, "type_document": type_document}

    if not CompteurDocument.objects.filter(**filtre).exists():
        CompteurDocument.objects.get_or_create(
            **filtre,
            defaults={"dernier_numero": plus_grand_suffixe(existants, prefixe)},
        )

    CompteurDocument.objects.filter(**filtre).update(
        dernier_numero=F("dernier_numero") + 1
    )

    numero = (
        CompteurDocument.objects
        .filter(**filtre)
        .values_list("dernier_numero", flat=True)
        .get()
    )

    return formater_numero(type_document, numero)
