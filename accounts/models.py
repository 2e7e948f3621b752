from django.db import models
from django.contrib.auth.models import AbstractUser, UserManager

from accounts.constants import UserRole
from tenants.models import Boutique


class UtilisateurManager(UserManager):
    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("role", UserRole.ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class Utilisateur(AbstractUser):
    email = models.EmailField("adresse e-mail", unique=True)
    boutique = models.ForeignKey(
        Boutique,
        on_delete=models.SET_NULL,
        related_name="utilisateurs",
        null=True,
        blank=True,
    )
    role = models.CharField(max_length=20, choices=UserRole.CHOICES, default=UserRole.GESTIONNAIRE)

    objects = UtilisateurManager()

    REQUIRED_FIELDS = ["email"]

    @property
    def est_admin(self):
        return self.role == UserRole.ADMIN

    def __str__(self):
        return self.get_full_name() or self.username
