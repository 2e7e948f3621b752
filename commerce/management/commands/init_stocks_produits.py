# commerce/management/commands/init_stocks_produits.py

from django.core.management.base import BaseCommand
from commerce.models import Produit
from commerce.models_stock import Stock


class Command(BaseCommand):
    help = "Crée les lignes de stock manquantes pour tous les produits"

    def add_arguments(self, parser):
        parser.add_argument("--boutique", help="Limiter à une boutique (id)")

    def handle(self, *args, **options):
        total_created = 0

        produits = Produit.objects.filter(stock__isnull=True).select_related("boutique")
        if options.get("boutique"):
            produits = produits.filter(boutique_id=options["boutique"])

        for produit in produits:
            _, created = Stock.objects.get_or_create(
                produit=produit,
                defaults={
                    "boutique_id": produit.boutique_id,
                    "quantite": 0,
                },
            )
            if created:
                total_created += 1
                self.stdout.write(
                    self.style.SUCCESS(
                        f"Stock créé pour {produit.nom} ({produit.boutique.nom})"
                    )
                )

        self.stdout.write(
            self.style.WARNING(
                f"Total stocks créés : {total_created}"
            )
        )
