from django.contrib.auth.hashers import make_password
from rest_framework import serializers

from accounts.constants import UserRole
from accounts.models import Utilisateur
from core.exceptions import DuplicateError
from tenants.models import Boutique


class UtilisateurSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, required=False, min_length=8)
    boutique_id = serializers.PrimaryKeyRelatedField(
        queryset=Boutique.objects.all(),
        source="boutique",
        required=False,
        allow_null=True,
    )
    boutique_nom = serializers.SerializerMethodField()

    class Meta:
        model = Utilisateur
        fields = (
            "id",
            "username",
            "first_name",
            "last_name",
            "email",
            "password",
            "role",
            "boutique_id",
            "boutique_nom",
            "is_active",
            "date_joined",
        )
        read_only_fields = ("id", "date_joined")
        extra_kwargs = {"email": {"validators": []}}

    def validate_email(self, value):
        qs = Utilisateur.objects.filter(email__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise DuplicateError("Un utilisateur avec cet email existe déjà.")
        return value

    def validate(self, data):
        role = data.get("role", self.instance.role if self.instance else UserRole.GESTIONNAIRE)
        boutique = data.get("boutique", self.instance.boutique if self.instance else None)

        if role == UserRole.GESTIONNAIRE and boutique is None:
            raise serializers.ValidationError(
                {"boutique_id": "Un gestionnaire doit être rattaché à une boutique."}
            )

        if self.instance is None and not data.get("password"):
            raise serializers.ValidationError({"password": "Mot de passe requis."})

        return data

    def get_boutique_nom(self, obj):
        return obj.boutique.nom if obj.boutique_id else None

    def create(self, validated_data):
        password = validated_data.pop("password")

        user = Utilisateur(**validated_data)
        user.password = make_password(password)
        user.save()

        return user

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)

        instance = super().update(instance, validated_data)

        if password:
            instance.password = make_password(password)
            instance.save(update_fields=["password"])

        return instance
