# core/exceptions.py
"""
Erreurs métier de l'application.

Elles ne connaissent pas HTTP : la correspondance avec les codes de
réponse est faite dans core.handlers.
"""


class DomainError(Exception):
    default_message = "Erreur métier."
    code = "erreur_metier"

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


# ============================================================
# RESSOURCES INTROUVABLES
# ============================================================

class NotFoundError(DomainError):
    default_message = "Ressource introuvable."
    code = "introuvable"


class ProductNotFoundError(NotFoundError):
    default_message = "Produit introuvable."
    code = "produit_introuvable"


class SaleNotFoundError(NotFoundError):
    default_message = "Vente introuvable."
    code = "vente_introuvable"


class OrderNotFoundError(NotFoundError):
    default_message = "Commande introuvable."
    code = "commande_introuvable"


class LineNotFoundError(NotFoundError):
    default_message = "Ligne de commande introuvable."
    code = "ligne_introuvable"


# ============================================================
# VALIDATION / RÈGLES MÉTIER
# ============================================================

class ValidationError(DomainError):
    default_message = "Données invalides."
    code = "donnees_invalides"


class InsufficientStockError(DomainError):
    code = "stock_insuffisant"

    def __init__(self, produit, disponible, demande):
        self.produit = produit
        self.disponible = disponible
        self.demande = demande
        super().__init__(
            f"Stock insuffisant pour {produit}. "
            f"Disponible: {disponible} | Demandé: {demande}",
            details={
                "produit": str(produit),
                "disponible": disponible,
                "demande": demande,
            },
        )


class OverpaymentError(DomainError):
    code = "montant_excessif"

    def __init__(self, montant, restant):
        super().__init__(
            f"Le montant ({montant}) dépasse le montant restant ({restant}).",
            details={"montant": str(montant), "restant": str(restant)},
        )


class OverReceiptError(DomainError):
    code = "reception_excessive"

    def __init__(self, produit, commandee, recue):
        super().__init__(
            f"Quantité reçue ({recue}) supérieure à la quantité commandée "
            f"({commandee}) pour {produit}.",
            details={
                "produit": str(produit),
                "quantite_commandee": commandee,
                "quantite_recue": recue,
            },
        )


# ============================================================
# CONFLITS
# ============================================================

class ConflictError(DomainError):
    default_message = "Opération impossible dans l'état actuel."
    code = "conflit"


class DuplicateError(ConflictError):
    default_message = "Cet élément existe déjà."
    code = "doublon"


class OrderAlreadyClosedError(ConflictError):
    default_message = "Cette commande est déjà clôturée."
    code = "commande_cloturee"


# ============================================================
# DROITS
# ============================================================

class AuthorizationError(DomainError):
    default_message = "Accès refusé à cette boutique."
    code = "acces_refuse"
