from rest_framework import serializers
from tenants.models import Boutique


class BoutiqueSerializer(serializers.ModelSerializer):
    stats = serializers.SerializerMethodField()

    class Meta:
        model = Boutique
        fields = [
            "id",
            "nom",
            "adresse",
            "telephone",
            "description",
            "capital_initial",
            "devise",
            "actif",
            "stats",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "created_at", "updated_at")

    def validate_capital_initial(self, value):
        if value < 0:
            raise serializers.ValidationError("Le capital initial ne peut pas être négatif.")
        return value

    def get_stats(self, obj):
        if not self.context.get("include_stats"):
            return None
        return {
            "utilisateurs": obj.utilisateurs.count(),
            "produits": obj.produits.count(),
            "ventes": obj.ventes.count(),
            "clients": obj.clients.count(),
        }
