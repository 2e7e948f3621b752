from django.utils import timezone
from rest_framework import serializers

from commerce.constants import MethodePaiement
from commerce.models_vente import LigneVente, Vente
from commerce.serializers_stock.stock import MouvementStockSerializer
from commerce.serializers_vente.paiement import PaiementSerializer


class LigneVenteSerializer(serializers.ModelSerializer):
    produit_nom = serializers.CharField(source="produit.nom", read_only=True)

    class Meta:
        model = LigneVente
        fields = ["id", "produit", "produit_nom", "quantite", "prix_unitaire", "sous_total"]
        read_only_fields = fields


class VenteSerializer(serializers.ModelSerializer):
    lignes = LigneVenteSerializer(many=True, read_only=True)
    paiements = PaiementSerializer(many=True, read_only=True)
    mouvements = MouvementStockSerializer(source="mouvements_stock", many=True, read_only=True)
    client_nom = serializers.SerializerMethodField()
    utilisateur_nom = serializers.CharField(source="utilisateur.username", read_only=True)

    class Meta:
        model = Vente
        fields = [
            "id",
            "numero_vente",
            "client",
            "client_nom",
            "utilisateur",
            "utilisateur_nom",
            "montant_total",
            "montant_paye",
            "montant_restant",
            "statut",
            "date_vente",
            "date_echeance",
            "lignes",
            "paiements",
            "mouvements",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_client_nom(self, obj):
        return str(obj.client) if obj.client_id else None


class CreanceSerializer(serializers.ModelSerializer):
    """
    Vente non soldée, avec le retard par rapport à l'échéance.
    """

    client_nom = serializers.SerializerMethodField()
    jours_retard = serializers.SerializerMethodField()
    en_retard = serializers.SerializerMethodField()

    class Meta:
        model = Vente
        fields = [
            "id",
            "numero_vente",
            "client",
            "client_nom",
            "montant_total",
            "montant_paye",
            "montant_restant",
            "statut",
            "date_vente",
            "date_echeance",
            "jours_retard",
            "en_retard",
        ]
        read_only_fields = fields

    def get_client_nom(self, obj):
        return str(obj.client) if obj.client_id else None

    def get_jours_retard(self, obj):
        if not obj.date_echeance:
            return 0
        return max((timezone.localdate() - obj.date_echeance).days, 0)

    def get_en_retard(self, obj):
        return self.get_jours_retard(obj) > 0


# ============================================================
# ENTRÉES
# ============================================================

class LigneVenteInputSerializer(serializers.Serializer):
    produit_id = serializers.IntegerField()
    quantite = serializers.IntegerField(min_value=1)
    prix_unitaire = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class VenteCreateSerializer(serializers.Serializer):
    client_id = serializers.IntegerField(required=False, allow_null=True)
    lignes = LigneVenteInputSerializer(many=True, allow_empty=False)
    montant_paye = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    methode_paiement = serializers.ChoiceField(
        choices=MethodePaiement.choices, default=MethodePaiement.ESPECES
    )
    date_echeance = serializers.DateField(required=False, allow_null=True)


class VenteUpdateSerializer(serializers.Serializer):
    """
    Seuls les champs non financiers sont modifiables.
    """

    client_id = serializers.IntegerField(required=False, allow_null=True)
    date_echeance = serializers.DateField(required=False, allow_null=True)
