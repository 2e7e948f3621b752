from django.db import models


class StatutPaiement(models.TextChoices):
    PAYE = "PAYE", "Payé"
    IMPAYE = "IMPAYE", "Impayé"
    PARTIEL = "PARTIEL", "Partiellement payé"


class StatutCommande(models.TextChoices):
    EN_ATTENTE = "EN_ATTENTE", "En attente"
    EN_COURS = "EN_COURS", "Réception en cours"
    RECUE = "RECUE", "Reçue"
    ANNULEE = "ANNULEE", "Annulée"


# Une commande dans ces états n'accepte plus de réception
STATUTS_COMMANDE_CLOTURES = (StatutCommande.RECUE, StatutCommande.ANNULEE)


class MethodePaiement(models.TextChoices):
    ESPECES = "ESPECES", "Espèces"
    CARTE = "CARTE", "Carte bancaire"
    VIREMENT = "VIREMENT", "Virement"
    CHEQUE = "CHEQUE", "Chèque"
    MOBILE = "MOBILE", "Mobile money"
