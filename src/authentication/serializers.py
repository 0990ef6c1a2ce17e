"""Serializers for identity profiles and role assignment."""

from django.contrib.auth import get_user_model
from rest_framework import serializers

User = get_user_model()


class UserDetailSerializer(serializers.ModelSerializer):
    """Read-only identity payload with its role."""

    role_id = serializers.IntegerField(source="role.id")
    role_name = serializers.CharField(source="role.name")

    class Meta:
        """Expose basic identity fields and role."""
        model = User
        fields = ["id", "username", "email", "role_id", "role_name", "is_active"]
        read_only_fields = fields


class ActorSerializer(serializers.Serializer):
    """Effective permissions of the current actor snapshot."""

    permissions = serializers.SerializerMethodField()
    type_permissions = serializers.SerializerMethodField()

    @staticmethod
    def get_permissions(actor) -> list[str]:
        return sorted(actor.global_permissions)

    @staticmethod
    def get_type_permissions(actor) -> list[dict]:
        return [
            {
                "type_id": grant.type_id,
                "can_view": grant.can_view,
                "can_create": grant.can_create,
                "can_edit": grant.can_edit,
                "can_delete": grant.can_delete,
            }
            for _, grant in sorted(actor.type_permissions.items())
        ]


class RoleAssignmentSerializer(serializers.Serializer):
    role_id = serializers.IntegerField()


__all__ = ["UserDetailSerializer", "ActorSerializer", "RoleAssignmentSerializer"]
