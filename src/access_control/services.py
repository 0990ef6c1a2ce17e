"""Administrative operations on roles and the type-permission matrix.

Every mutation here runs in a single transaction: a concurrent request either
sees the complete previous state or the complete new one, never a mix.
"""

import logging
from typing import Iterable, Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from . import lookups
from .exceptions import NotFound, UniquenessViolation, ValidationFailure
from .grants import EffectivePermissions, TypeGrant, freeze_matrix
from .models import Permission, Role, TypePermission

logger = logging.getLogger(__name__)


def get_role(role_id) -> Role:
    try:
        return Role.objects.get(pk=role_id)
    except (Role.DoesNotExist, TypeError, ValueError) as exc:
        raise NotFound(f"Role {role_id} does not exist.") from exc


def create_role(name: str, description: str = "") -> Role:
    """Create an empty role (no permissions, no type grants)."""
    try:
        with transaction.atomic():
            role = Role.objects.create(name=name, description=description)
    except IntegrityError as exc:
        raise UniquenessViolation(f"Role '{name}' already exists.") from exc
    logger.info("Created role %s (id=%s)", role.name, role.pk)
    return role


def update_role(role: Role, **fields) -> Role:
    for attr, value in fields.items():
        setattr(role, attr, value)
    try:
        with transaction.atomic():
            role.save()
    except IntegrityError as exc:
        raise UniquenessViolation(f"Role '{role.name}' already exists.") from exc
    return role


def _normalize_ids(values: Iterable, label: str) -> set[int]:
    try:
        return {int(value) for value in values}
    except (TypeError, ValueError) as exc:
        raise ValidationFailure(f"{label} must be a list of integer ids.") from exc


def grant_global_permissions(role_id, permission_ids: Iterable) -> frozenset[str]:
    """Replace the role's global permissions with exactly ``permission_ids``.

    Unknown ids reject the whole request and leave the previous set in place.
    Returns the names now held by the role.
    """
    wanted = _normalize_ids(permission_ids, "permission_ids")

    with transaction.atomic():
        try:
            role = Role.objects.select_for_update().get(pk=role_id)
        except (Role.DoesNotExist, TypeError, ValueError) as exc:
            raise NotFound(f"Role {role_id} does not exist.") from exc

        permissions = list(Permission.objects.filter(pk__in=wanted))
        missing = wanted - {permission.pk for permission in permissions}
        if missing:
            raise ValidationFailure(f"Unknown permission ids: {sorted(missing)}.")

        role.permissions.set(permissions)
        role.save(update_fields=["updated_at"])

    names = frozenset(permission.name for permission in permissions)
    logger.info("Role %s global permissions replaced with %s", role.name, sorted(names))
    return names


def set_type_permission(
    role_id,
    type_id,
    *,
    can_view: Optional[bool] = None,
    can_create: Optional[bool] = None,
    can_edit: Optional[bool] = None,
    can_delete: Optional[bool] = None,
) -> TypePermission:
    """Upsert the (role, type) cell with all four flags at once.

    Partial updates are not supported; callers that want to keep a flag must
    pass its current value.
    """
    flags = {
        "can_view": can_view,
        "can_create": can_create,
        "can_edit": can_edit,
        "can_delete": can_delete,
    }
    omitted = sorted(name for name, value in flags.items() if value is None)
    if omitted:
        raise ValidationFailure(f"All four flags are required; missing: {', '.join(omitted)}.")

    role = get_role(role_id)
    if not lookups.type_exists(type_id):
        raise NotFound(f"Element type {type_id} does not exist.")

    with transaction.atomic():
        row, created = TypePermission.objects.update_or_create(
            role=role,
            element_type_id=type_id,
            defaults={name: bool(value) for name, value in flags.items()},
        )

    logger.info(
        "%s type permission role=%s type=%s flags=%s",
        "Created" if created else "Updated",
        role.name,
        type_id,
        {name: bool(value) for name, value in flags.items()},
    )
    return row


def effective_permissions(role_id) -> EffectivePermissions:
    """Project a role into the immutable shape used to build an Actor."""
    return project_role(get_role(role_id))


def project_role(role: Role) -> EffectivePermissions:
    """Same as :func:`effective_permissions` for a role that is already loaded."""
    names = frozenset(role.permissions.values_list("name", flat=True))
    rows = TypePermission.objects.filter(role=role)
    return EffectivePermissions(
        role_id=role.pk,
        global_names=names,
        type_matrix=freeze_matrix(TypeGrant.from_row(row) for row in rows),
    )


def assign_role(identity_id, role_id):
    """Move an identity to another role; effective from its next resolved actor."""
    User = get_user_model()
    role = get_role(role_id)
    try:
        user = User.objects.get(pk=identity_id)
    except (User.DoesNotExist, DjangoValidationError, TypeError, ValueError) as exc:
        raise NotFound(f"User {identity_id} does not exist.") from exc

    user.role = role
    user.save(update_fields=["role", "updated_at"])
    logger.info("User %s reassigned to role %s", user.pk, role.name)
    return user


def is_fully_privileged(role: Role, exclude_type_id=None) -> bool:
    """Return True when the role holds every global permission and full grants.

    A role qualifies by its data alone: all registered global permissions plus
    a full view/create/edit/delete row on every existing element type (other
    than ``exclude_type_id``).
    """
    registered = set(Permission.objects.values_list("pk", flat=True))
    if not registered:
        return False
    held = set(role.permissions.values_list("pk", flat=True))
    if not registered <= held:
        return False

    from catalog.models import ElementType

    type_ids = set(ElementType.objects.exclude(pk=exclude_type_id).values_list("pk", flat=True))
    full_ids = {row.element_type_id for row in role.type_permissions.all() if row.is_full}
    return type_ids <= full_ids


def grant_type_to_privileged_roles(element_type) -> list[Role]:
    """Seed a full grant on a new type for every fully privileged role.

    The new-type workflow calls this inside its own transaction so that a type
    never exists without the grants of the roles that administer everything.
    """
    granted = []
    for role in Role.objects.prefetch_related("type_permissions"):
        if not is_fully_privileged(role, exclude_type_id=element_type.pk):
            continue
        TypePermission.objects.update_or_create(
            role=role,
            element_type=element_type,
            defaults={"can_view": True, "can_create": True, "can_edit": True, "can_delete": True},
        )
        granted.append(role)

    if granted:
        logger.info(
            "Granted full access on new type %s to roles %s",
            element_type.name,
            [role.name for role in granted],
        )
    return granted


__all__ = [
    "get_role",
    "create_role",
    "update_role",
    "grant_global_permissions",
    "set_type_permission",
    "effective_permissions",
    "project_role",
    "assign_role",
    "is_fully_privileged",
    "grant_type_to_privileged_roles",
]
