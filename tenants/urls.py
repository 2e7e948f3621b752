from rest_framework.routers import DefaultRouter
from tenants.views import BoutiqueViewSet

router = DefaultRouter()
router.register(r"boutiques", BoutiqueViewSet, basename="boutique")

urlpatterns = router.urls
