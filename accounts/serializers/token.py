# accounts/serializers/token.py
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer


class MyTokenObtainPairSerializer(TokenObtainPairSerializer):
    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        # claims custom
        if user.boutique_id:
            token['boutique_id'] = str(user.boutique_id)
        token['role'] = user.role
        token['username'] = user.username
        return token
