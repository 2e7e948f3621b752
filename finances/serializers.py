from rest_framework import serializers

from finances.models import CategorieDepense, Transaction
from finances.services.ledger import TYPES_MANUELS


class TransactionSerializer(serializers.ModelSerializer):
    utilisateur_nom = serializers.CharField(source="utilisateur.username", read_only=True)
    est_manuelle = serializers.BooleanField(read_only=True)

    class Meta:
        model = Transaction
        fields = [
            "id",
            "type",
            "montant",
            "description",
            "categorie_depense",
            "vente",
            "paiement",
            "commande",
            "utilisateur",
            "utilisateur_nom",
            "est_manuelle",
            "date_transaction",
            "mois",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class TransactionManuelleSerializer(serializers.Serializer):
    """
    Saisie manuelle : le montant est toujours positif,
    le signe est fixé par le type.
    """

    type = serializers.ChoiceField(choices=[(t.value, t.label) for t in TYPES_MANUELS])
    montant = serializers.DecimalField(max_digits=14, decimal_places=2)
    description = serializers.CharField(max_length=255)
    categorie_depense = serializers.ChoiceField(
        choices=CategorieDepense.choices, required=False, allow_blank=True
    )
    date_transaction = serializers.DateTimeField(required=False)

    def validate_montant(self, value):
        if value <= 0:
            raise serializers.ValidationError("Le montant doit être positif.")
        return value


class MouvementCapitalSerializer(serializers.Serializer):
    boutique_id = serializers.UUIDField()
    montant = serializers.DecimalField(max_digits=14, decimal_places=2)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")

    def validate_montant(self, value):
        if value <= 0:
            raise serializers.ValidationError("Le montant doit être positif.")
        return value
