from rest_framework import serializers

from commerce.models_commande import Commande, LigneCommande


class LigneCommandeSerializer(serializers.ModelSerializer):
    produit_nom = serializers.CharField(source="produit.nom", read_only=True)
    quantite_restante = serializers.IntegerField(read_only=True)

    class Meta:
        model = LigneCommande
        fields = [
            "id",
            "produit",
            "produit_nom",
            "quantite",
            "quantite_recue",
            "quantite_restante",
            "prix_unitaire",
            "sous_total",
        ]
        read_only_fields = fields


class CommandeSerializer(serializers.ModelSerializer):
    lignes = LigneCommandeSerializer(many=True, read_only=True)
    fournisseur_nom = serializers.CharField(source="fournisseur.nom", read_only=True)

    class Meta:
        model = Commande
        fields = [
            "id",
            "numero_commande",
            "fournisseur",
            "fournisseur_nom",
            "montant_total",
            "montant_paye",
            "montant_restant",
            "statut",
            "date_commande",
            "date_echeance",
            "date_reception",
            "notes",
            "lignes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


# ============================================================
# ENTRÉES
# ============================================================

class LigneCommandeInputSerializer(serializers.Serializer):
    produit_id = serializers.IntegerField()
    quantite = serializers.IntegerField(min_value=1)
    prix_unitaire = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class CommandeCreateSerializer(serializers.Serializer):
    fournisseur_id = serializers.IntegerField()
    lignes = LigneCommandeInputSerializer(many=True, allow_empty=False)
    date_echeance = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class LigneReceptionSerializer(serializers.Serializer):
    ligne_id = serializers.IntegerField()
    quantite_recue = serializers.IntegerField(min_value=0)


class ReceptionSerializer(serializers.Serializer):
    lignes = LigneReceptionSerializer(many=True, required=False, default=list)
    montant_paye = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    annuler_reste = serializers.BooleanField(required=False, default=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RecevoirToutSerializer(serializers.Serializer):
    montant_paye = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class PaiementCommandeSerializer(serializers.Serializer):
    montant = serializers.DecimalField(max_digits=14, decimal_places=2)

    def validate_montant(self, value):
        if value <= 0:
            raise serializers.ValidationError("Le montant doit être positif.")
        return value
