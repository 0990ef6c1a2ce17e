"""Routing for access control admin endpoints."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from authentication.views import UserAdminViewSet
from .views import PermissionViewSet, RoleViewSet

router = DefaultRouter()
router.register(r"permissions", PermissionViewSet, basename="permission")
router.register(r"roles", RoleViewSet, basename="role")
router.register(r"users", UserAdminViewSet, basename="user")

urlpatterns = [
    path("", include(router.urls)),
]
