"""ViewSets for role and permission administration (``manage_roles``)."""

from django.db.models import Prefetch
from rest_framework.decorators import action

from core.response import BaseReadOnlyViewSet, BaseViewSet, api_response

from . import registry, services
from .models import Permission, Role, TypePermission
from .permissions import GlobalPermissionRequired
from .serializers import (
    GlobalPermissionsSerializer,
    PermissionSerializer,
    RoleSerializer,
    TypePermissionFlagsSerializer,
    TypePermissionSerializer,
)


class PermissionViewSet(BaseReadOnlyViewSet):
    """Read-only listing of the global permission catalog."""

    serializer_class = PermissionSerializer
    permission_classes = [GlobalPermissionRequired]
    global_permission = registry.MANAGE_ROLES

    def get_queryset(self):
        return Permission.objects.order_by("id")

    def list(self, request, *args, **kwargs):
        return api_response(PermissionSerializer(registry.list_all(), many=True).data)


class RoleViewSet(BaseViewSet):
    """Roles together with their global permissions and type grants."""

    serializer_class = RoleSerializer
    permission_classes = [GlobalPermissionRequired]
    global_permission = registry.MANAGE_ROLES
    http_method_names = ["get", "post", "put", "patch", "head", "options"]

    def get_queryset(self):
        return Role.objects.prefetch_related(
            "permissions",
            Prefetch("type_permissions", queryset=TypePermission.objects.select_related("element_type")),
        )

    def perform_create(self, serializer):
        data = serializer.validated_data
        serializer.instance = services.create_role(data["name"], data.get("description", ""))

    def perform_update(self, serializer):
        serializer.instance = services.update_role(serializer.instance, **serializer.validated_data)

    @action(detail=True, methods=["put"], url_path="permissions")
    def set_permissions(self, request, pk=None):
        """Replace the role's global permissions with ``permission_ids``."""
        payload = GlobalPermissionsSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        names = services.grant_global_permissions(pk, payload.validated_data["permission_ids"])
        return api_response({"role_id": int(pk), "permissions": sorted(names)})

    @action(detail=True, methods=["put"], url_path=r"type-permissions/(?P<type_id>[^/.]+)")
    def set_type_permission(self, request, pk=None, type_id=None):
        """Upsert the (role, type) matrix cell with all four flags."""
        payload = TypePermissionFlagsSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        row = services.set_type_permission(pk, type_id, **payload.validated_data)
        return api_response(TypePermissionSerializer(row).data)


__all__ = ["PermissionViewSet", "RoleViewSet"]
