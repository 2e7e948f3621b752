# dashboard/urls.py
from django.urls import path
from .views_admin import AdminDashboardView
from .views import DashboardView, RapportView

urlpatterns = [
    path("dashboard/", DashboardView.as_view(), name="dashboard"),
    path("dashboard/admin/", AdminDashboardView.as_view(), name="dashboard-admin"),
    path("rapports/", RapportView.as_view(), name="rapports"),
]
