"""Serializers for the role and permission administration endpoints."""

from rest_framework import serializers

from .models import Permission, Role, TypePermission


class PermissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Permission
        fields = ["id", "name", "description"]
        read_only_fields = fields


class TypePermissionSerializer(serializers.ModelSerializer):
    """One cell of the role x element-type matrix, labelled with the type name."""

    type_id = serializers.IntegerField(source="element_type_id", read_only=True)
    type_name = serializers.CharField(source="element_type.name", read_only=True)

    class Meta:
        model = TypePermission
        fields = ["type_id", "type_name", "can_view", "can_create", "can_edit", "can_delete"]
        read_only_fields = fields


class RoleSerializer(serializers.ModelSerializer):
    """Role with its global permissions and type-permission rows.

    Name uniqueness is enforced by the role services (409), so DRF's automatic
    UniqueValidator is disabled here.
    """

    permissions = PermissionSerializer(many=True, read_only=True)
    type_permissions = TypePermissionSerializer(many=True, read_only=True)

    class Meta:
        """Permissions and type grants are changed through dedicated endpoints."""

        model = Role
        fields = ["id", "name", "description", "permissions", "type_permissions", "created_at", "updated_at"]
        read_only_fields = ["id", "permissions", "type_permissions", "created_at", "updated_at"]
        extra_kwargs = {"name": {"validators": []}}


class GlobalPermissionsSerializer(serializers.Serializer):
    """Payload replacing a role's complete global permission set."""

    permission_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=True)


class TypePermissionFlagsSerializer(serializers.Serializer):
    """Payload for one matrix cell; every flag must be supplied."""

    can_view = serializers.BooleanField(required=True)
    can_create = serializers.BooleanField(required=True)
    can_edit = serializers.BooleanField(required=True)
    can_delete = serializers.BooleanField(required=True)


__all__ = [
    "PermissionSerializer",
    "TypePermissionSerializer",
    "RoleSerializer",
    "GlobalPermissionsSerializer",
    "TypePermissionFlagsSerializer",
]
