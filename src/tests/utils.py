"""Shared helpers for tests (catalog seeding, user creation, API clients)."""

from __future__ import annotations

from types import MappingProxyType

from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from access_control.actor import Actor
from access_control.grants import TypeGrant
from access_control.models import Role
from authentication.services import TokenService
from scripts.management.commands.seed_catalog import (
    create_seed_interaction_types,
    create_seed_permissions,
    create_seed_roles,
    create_seed_type_permissions,
    create_seed_types,
)

User = get_user_model()


def seed_catalog_basics() -> tuple[dict, dict]:
    """Create base roles, element types, and the type-permission matrix.

    Delegates to the same helpers used by the ``seed_catalog`` management
    command to keep setup logic in a single place.
    """

    permissions = create_seed_permissions()
    roles = create_seed_roles(permissions)
    types = create_seed_types()
    create_seed_type_permissions(roles, types)
    create_seed_interaction_types()
    return roles, types


def create_user(username: str, role: Role, **extra):
    return User.objects.create_user(username=username, email=f"{username}@test.com", role=role, **extra)


def auth_client(user) -> APIClient:
    """Return an APIClient authenticated with a fresh access token."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {TokenService.issue_access_token(user)}")
    return client


def make_actor(grants=(), permissions=(), identity_id="actor", role_id=1) -> Actor:
    """Build an actor snapshot directly, without touching the database.

    ``grants`` is an iterable of ``(type_id, view, create, edit, delete)``.
    """
    matrix = {
        type_id: TypeGrant(type_id, view, create, edit, delete)
        for type_id, view, create, edit, delete in grants
    }
    return Actor(
        identity_id=identity_id,
        role_id=role_id,
        global_permissions=frozenset(permissions),
        type_permissions=MappingProxyType(matrix),
    )
