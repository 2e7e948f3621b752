from rest_framework import serializers

from commerce.models import Categorie, Client, Fournisseur, Produit
from commerce.services.catalogue import creer_produit
from core.exceptions import DuplicateError


class CategorieSerializer(serializers.ModelSerializer):
    nb_produits = serializers.SerializerMethodField()

    class Meta:
        model = Categorie
        fields = ["id", "nom", "description", "nb_produits", "created_at", "updated_at"]
        read_only_fields = ("id", "created_at", "updated_at")
        # unicité contrôlée dans validate_nom (boutique issue du contexte)
        validators = []

    def get_nb_produits(self, obj):
        return obj.produits.count()

    def validate_nom(self, value):
        boutique = self.context["boutique"]
        qs = Categorie.objects.filter(boutique=boutique, nom__iexact=value.strip())
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise DuplicateError(f"La catégorie « {value} » existe déjà.")
        return value.strip()


class ProduitSerializer(serializers.ModelSerializer):
    categorie_nom = serializers.CharField(source="categorie.nom", read_only=True)
    quantite_stock = serializers.SerializerMethodField()
    en_alerte = serializers.SerializerMethodField()
    quantite_initiale = serializers.IntegerField(write_only=True, required=False, min_value=0, default=0)

    class Meta:
        model = Produit
        fields = [
            "id",
            "nom",
            "description",
            "prix_achat",
            "prix_vente",
            "seuil_alerte",
            "categorie",
            "categorie_nom",
            "quantite_stock",
            "en_alerte",
            "quantite_initiale",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "created_at", "updated_at")

    def get_quantite_stock(self, obj):
        stock = getattr(obj, "stock", None)
        return stock.quantite if stock else 0

    def get_en_alerte(self, obj):
        return self.get_quantite_stock(obj) <= obj.seuil_alerte

    def validate_categorie(self, categorie):
        boutique = self.context["boutique"]
        if categorie.boutique_id != boutique.pk:
            raise serializers.ValidationError("Catégorie introuvable.")
        return categorie

    def validate(self, attrs):
        for champ in ("prix_achat", "prix_vente"):
            if champ in attrs and attrs[champ] <= 0:
                raise serializers.ValidationError({champ: "Le prix doit être positif."})
        return attrs

    def create(self, validated_data):
        boutique = validated_data.pop("boutique")
        categorie = validated_data.pop("categorie")
        quantite_initiale = validated_data.pop("quantite_initiale", 0)

        return creer_produit(
            self.context["request"].user,
            boutique,
            categorie,
            quantite_initiale=quantite_initiale,
            **validated_data,
        )

    def update(self, instance, validated_data):
        # le stock ne se modifie que par des mouvements
        validated_data.pop("quantite_initiale", None)
        return super().update(instance, validated_data)


class ClientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = [
            "id",
            "nom",
            "prenom",
            "email",
            "telephone",
            "adresse",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "created_at", "updated_at")
        validators = []

    def validate_email(self, value):
        if not value:
            return value

        boutique = self.context["boutique"]
        qs = Client.objects.filter(boutique=boutique, email__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise DuplicateError("Un client avec cet email existe déjà.")
        return value


class FournisseurSerializer(serializers.ModelSerializer):
    nb_commandes = serializers.SerializerMethodField()

    class Meta:
        model = Fournisseur
        fields = [
            "id",
            "nom",
            "contact",
            "email",
            "telephone",
            "adresse",
            "nb_commandes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "created_at", "updated_at")

    def get_nb_commandes(self, obj):
        return obj.commandes.count()
