from rest_framework import serializers

from commerce.constants import MethodePaiement
from commerce.models_vente import Paiement


class PaiementSerializer(serializers.ModelSerializer):
    vente_numero = serializers.CharField(source="vente.numero_vente", read_only=True)

    class Meta:
        model = Paiement
        fields = [
            "id",
            "vente",
            "vente_numero",
            "montant",
            "methode_paiement",
            "reference",
            "notes",
            "utilisateur",
            "date_creation",
            "updated_at",
        ]
        read_only_fields = fields


class PaiementCreateSerializer(serializers.Serializer):
    vente_id = serializers.IntegerField()
    montant = serializers.DecimalField(max_digits=14, decimal_places=2)
    methode_paiement = serializers.ChoiceField(
        choices=MethodePaiement.choices, default=MethodePaiement.ESPECES
    )
    reference = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_montant(self, value):
        if value <= 0:
            raise serializers.ValidationError("Le montant doit être positif.")
        return value


class PaiementUpdateSerializer(serializers.Serializer):
    montant = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
    methode_paiement = serializers.ChoiceField(choices=MethodePaiement.choices, required=False)
    reference = serializers.CharField(max_length=100, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_montant(self, value):
        if value <= 0:
            raise serializers.ValidationError("Le montant doit être positif.")
        return value
