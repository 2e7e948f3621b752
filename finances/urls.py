from django.urls import include, path
from rest_framework.routers import DefaultRouter

from finances.api.dashboard import FinanceDashboardAPIView
from finances.views import CapitalViewSet, TransactionViewSet

router = DefaultRouter()
router.register("transactions", TransactionViewSet, basename="transaction")
router.register("capital", CapitalViewSet, basename="capital")

urlpatterns = [
    path("", include(router.urls)),
    path("finances/dashboard/", FinanceDashboardAPIView.as_view(), name="finances-dashboard"),
]
