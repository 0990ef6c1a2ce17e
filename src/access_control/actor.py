"""Actor resolution: identity -> immutable per-request permission snapshot."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError

from .grants import TypeGrant
from .services import project_role


@dataclass(frozen=True)
class Actor:
    """Resolved identity with the effective permissions of its role.

    Built once per request and never mutated. A role change made while a
    request is in flight only shows up in actors resolved afterwards.
    """

    identity_id: Any
    role_id: int
    global_permissions: frozenset[str] = frozenset()
    type_permissions: Mapping[int, TypeGrant] = field(default_factory=lambda: MappingProxyType({}))

    def grant_for(self, type_id) -> Optional[TypeGrant]:
        try:
            return self.type_permissions.get(int(type_id))
        except (TypeError, ValueError):
            return None


def actor_for(user) -> Actor:
    """Build the snapshot for an identity that has already been loaded."""
    projection = project_role(user.role)
    return Actor(
        identity_id=user.pk,
        role_id=projection.role_id,
        global_permissions=projection.global_names,
        type_permissions=projection.type_matrix,
    )


def resolve_actor(identity_id) -> Optional[Actor]:
    """Return the actor for ``identity_id``, or None for an unknown identity.

    Missing, malformed, and inactive identities all resolve to None, which
    callers treat as anonymous.
    """
    if identity_id in (None, ""):
        return None
    User = get_user_model()
    try:
        user = User.objects.select_related("role").get(pk=identity_id)
    except (User.DoesNotExist, DjangoValidationError, TypeError, ValueError):
        return None
    if not user.is_active:
        return None
    return actor_for(user)


__all__ = ["Actor", "actor_for", "resolve_actor"]
