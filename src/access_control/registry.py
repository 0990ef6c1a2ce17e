"""Permission registry: the catalog of named global capabilities.

The catalog is seeded by the ``0002_seed_permission_catalog`` migration and is
otherwise only extended by schema setup code. End users never create entries.
"""

import logging

from django.db import IntegrityError, transaction

from .exceptions import NotFound, UniquenessViolation
from .models import Permission

logger = logging.getLogger(__name__)

MANAGE_TYPES = "manage_types"
MANAGE_ROLES = "manage_roles"

KNOWN_PERMISSIONS = frozenset({MANAGE_TYPES, MANAGE_ROLES})


def list_all() -> list[Permission]:
    """Return every registered permission in registration order."""
    return list(Permission.objects.order_by("id"))


def get_by_name(name: str) -> Permission:
    try:
        return Permission.objects.get(name=name)
    except Permission.DoesNotExist as exc:
        raise NotFound(f"Permission '{name}' does not exist.") from exc


def register(name: str, description: str = "") -> Permission:
    """Add a permission to the catalog; duplicate names are rejected."""
    try:
        with transaction.atomic():
            permission = Permission.objects.create(name=name, description=description)
    except IntegrityError as exc:
        raise UniquenessViolation(f"Permission '{name}' already exists.") from exc
    logger.info("Registered global permission %s", name)
    return permission


__all__ = [
    "MANAGE_TYPES",
    "MANAGE_ROLES",
    "KNOWN_PERMISSIONS",
    "list_all",
    "get_by_name",
    "register",
]
