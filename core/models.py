from django.db import models


class TypeDocument(models.TextChoices):
    VENTE = "VENTE", "Vente"
    COMMANDE = "COMMANDE", "Commande fournisseur"


class CompteurDocument(models.Model):
    """
    Dernier numéro attribué, par boutique et par type de document.
    Incrémenté uniquement par core.services.numerotation.
    """

    boutique = models.ForeignKey(
        "tenants.Boutique",
        on_delete=models.CASCADE,
        related_name="compteurs",
    )
    type_document = models.CharField(max_length=20, choices=TypeDocument.choices)
    dernier_numero = models.PositiveIntegerField(default=0)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["boutique", "type_document"],
                name="unique_compteur_par_boutique_et_type",
            ),
        ]

    def __str__(self):
        return f"{self.boutique} - {self.type_document} : {self.dernier_numero}"
