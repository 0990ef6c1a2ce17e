"""RBAC models: Permission, Role, and TypePermission."""

from django.db import models


class Permission(models.Model):
    """Named global capability (e.g. 'manage_types') held through roles."""

    name = models.CharField(max_length=50, unique=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name


class Role(models.Model):
    """Unit of assignment: a bundle of global permissions and type grants."""

    name = models.CharField(max_length=50, unique=True)
    description = models.TextField(blank=True)
    permissions = models.ManyToManyField(Permission, related_name="roles", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name


class TypePermission(models.Model):
    """CRUD flags binding a Role to an ElementType.

    A missing row means every action on the type is denied for the role.
    """

    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name="type_permissions")
    element_type = models.ForeignKey(
        "catalog.ElementType", on_delete=models.CASCADE, related_name="type_permissions"
    )

    can_view = models.BooleanField(default=False)
    can_create = models.BooleanField(default=False)
    can_edit = models.BooleanField(default=False)
    can_delete = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("role", "element_type")
        ordering = ["id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.role.name} -> {self.element_type.name}"

    @property
    def is_full(self) -> bool:
        return self.can_view and self.can_create and self.can_edit and self.can_delete


__all__ = ["Permission", "Role", "TypePermission"]
