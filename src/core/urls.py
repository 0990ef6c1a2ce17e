"""Root URL configuration for the modular catalog API."""
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("auth/", include("authentication.urls")),
    path("admin/", include("access_control.urls")),
    path("", include("catalog.urls")),
]
