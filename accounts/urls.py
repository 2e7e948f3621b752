from rest_framework.routers import DefaultRouter
from accounts.views import UtilisateurViewSet

router = DefaultRouter()
router.register(r"utilisateurs", UtilisateurViewSet, basename="utilisateur")

urlpatterns = router.urls
