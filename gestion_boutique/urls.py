# gestion_boutique/urls.py
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from accounts.views import MeView, MyTokenObtainPairView

app_name = "gestion_boutique"


urlpatterns = [
    path("api/v1/", include("dashboard.urls")),

    path("api/v1/", include("tenants.urls")),
    path("api/v1/", include("accounts.urls")),
    path("api/v1/", include("commerce.urls")),
    path("api/v1/", include("finances.urls")),

    path("api/v1/me/", MeView.as_view(), name="me"),

    path("api/v1/auth/login/", MyTokenObtainPairView.as_view(), name="token-obtain"),
    path("api/v1/auth/refresh/", TokenRefreshView.as_view(), name="token-refresh"),

    path('api/schema/', SpectacularAPIView.as_view(), name='openapi-schema'),

    path(
        'api/docs/',
        SpectacularSwaggerView.as_view(url='/api/schema/'),
        name='swagger-ui'
    ),

    path("admin/", admin.site.urls),
]
