# accounts/constants.py

class UserRole:
    ADMIN = "ADMIN"
    GESTIONNAIRE = "GESTIONNAIRE"

    CHOICES = [
        (ADMIN, "Administrateur"),
        (GESTIONNAIRE, "Gestionnaire de boutique"),
    ]
