from .vente import Vente, LigneVente
from .paiement import Paiement

__all__ = ["Vente", "LigneVente", "Paiement"]
