from .stock import Stock
from .mouvement_stock import MouvementStock

__all__ = ["Stock", "MouvementStock"]
