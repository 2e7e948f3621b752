from .commande import Commande, LigneCommande

__all__ = ["Commande", "LigneCommande"]
