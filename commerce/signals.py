from django.db.models.signals import post_save
from django.dispatch import receiver

from commerce.models import Produit
from commerce.models_stock import Stock


@receiver(post_save, sender=Produit)
def create_stock_produit(sender, instance, created, **kwargs):
    if not created:
        return

    Stock.objects.get_or_create(
        produit=instance,
        defaults={"boutique_id": instance.boutique_id, "quantite": 0},
    )
