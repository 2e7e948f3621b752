from rest_framework import serializers

from commerce.models_stock import MouvementStock, Stock


class StockSerializer(serializers.ModelSerializer):
    produit_nom = serializers.CharField(source="produit.nom", read_only=True)
    categorie_nom = serializers.CharField(source="produit.categorie.nom", read_only=True)
    seuil_alerte = serializers.IntegerField(source="produit.seuil_alerte", read_only=True)
    prix_vente = serializers.DecimalField(
        source="produit.prix_vente", max_digits=12, decimal_places=2, read_only=True
    )
    en_alerte = serializers.BooleanField(read_only=True)
    valeur = serializers.SerializerMethodField()

    class Meta:
        model = Stock
        fields = [
            "id",
            "produit",
            "produit_nom",
            "categorie_nom",
            "quantite",
            "seuil_alerte",
            "prix_vente",
            "en_alerte",
            "valeur",
            "derniere_entree",
            "derniere_sortie",
            "updated_at",
        ]
        read_only_fields = fields

    def get_valeur(self, obj):
        return obj.quantite * obj.produit.prix_vente


class MouvementStockSerializer(serializers.ModelSerializer):
    produit_nom = serializers.CharField(source="stock.produit.nom", read_only=True)
    vente_numero = serializers.CharField(source="vente.numero_vente", read_only=True, default=None)

    class Meta:
        model = MouvementStock
        fields = [
            "id",
            "stock",
            "produit_nom",
            "type_mouvement",
            "quantite",
            "motif",
            "vente",
            "vente_numero",
            "utilisateur",
            "date_mouvement",
        ]
        read_only_fields = fields


class MouvementManuelSerializer(serializers.Serializer):
    stock_id = serializers.IntegerField()
    type_mouvement = serializers.ChoiceField(choices=MouvementStock.TYPE_CHOICES)
    quantite = serializers.IntegerField(min_value=1)
    motif = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
