from rest_framework.routers import DefaultRouter

from commerce.views import (
    CategorieViewSet,
    ClientViewSet,
    FournisseurViewSet,
    ProduitViewSet,
)
from commerce.views_commande.commande import CommandeViewSet
from commerce.views_stock.stock import MouvementStockViewSet, StockViewSet
from commerce.views_vente.paiement import PaiementViewSet
from commerce.views_vente.vente import VenteViewSet

router = DefaultRouter()
router.register(r"categories", CategorieViewSet, basename="categorie")
router.register(r"produits", ProduitViewSet, basename="produit")
router.register(r"stocks", StockViewSet, basename="stock")
router.register(r"mouvements-stock", MouvementStockViewSet, basename="mouvement-stock")
router.register(r"clients", ClientViewSet, basename="client")
router.register(r"fournisseurs", FournisseurViewSet, basename="fournisseur")
router.register(r"ventes", VenteViewSet, basename="vente")
router.register(r"paiements", PaiementViewSet, basename="paiement")
router.register(r"commandes", CommandeViewSet, basename="commande")

urlpatterns = router.urls
