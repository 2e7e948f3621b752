# commerce/services/catalogue.py

from django.db import transaction

from commerce.models import Produit
from commerce.models_stock import MouvementStock
from commerce.services.stock import ajuster_stock, obtenir_ou_creer_stock
from core.exceptions import NotFoundError, ProductNotFoundError, ValidationError
from core.permissions import verifier_acces_boutique


def charger_produits(boutique, produit_ids):
    """
    {id: Produit} pour les produits demandés, tous dans la boutique.
    """

    produit_ids = list(dict.fromkeys(produit_ids))
    produits = Produit.objects.filter(boutique=boutique).in_bulk(produit_ids)

    for produit_id in produit_ids:
        if produit_id not in produits:
            raise ProductNotFoundError(
                f"Produit {produit_id} introuvable.",
                details={"produit_id": produit_id},
            )

    return produits


@transaction.atomic
def creer_produit(utilisateur, boutique, categorie, quantite_initiale=0, **champs):
    """
    Crée le produit, sa ligne de stock et, si besoin,
    l'entrée « Stock initial ».
    """

    verifier_acces_boutique(utilisateur, boutique.pk)

    if categorie.boutique_id != boutique.pk:
        raise NotFoundError("Catégorie introuvable.")

    if quantite_initiale < 0:
        raise ValidationError("La quantité initiale ne peut pas être négative.")

    produit = Produit.objects.create(boutique=boutique, categorie=categorie, **champs)
    stock = obtenir_ou_creer_stock(produit, verrouiller=True)

    if quantite_initiale:
        ajuster_stock(
            stock,
            quantite_initiale,
            MouvementStock.MOUVEMENT_ENTREE,
            motif="Stock initial",
            utilisateur=utilisateur,
        )

    return Produit.objects.select_related("categorie", "stock").get(pk=produit.pk)
