"""Authorization decision engine.

Pure functions over an :class:`~access_control.actor.Actor` snapshot. Denials
are returned as :class:`Decision` values; only a missing resource raises
(:class:`~access_control.exceptions.NotFound`), and always before any
permission state is consulted.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from . import lookups
from .actor import Actor
from .exceptions import NotFound
from .grants import Action

logger = logging.getLogger(__name__)


class DenyReason(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    NO_GRANT_FOR_TYPE = "no_grant_for_type"
    INSUFFICIENT_TYPE_PERMISSION = "insufficient_type_permission"
    MISSING_GLOBAL_PERMISSION = "missing_global_permission"


@dataclass(frozen=True)
class Decision:
    """Outcome of an authorization check; truthy when access is allowed."""

    allowed: bool
    reason: Optional[DenyReason] = None
    detail: str = ""

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason, detail: str = "") -> "Decision":
        return cls(allowed=False, reason=reason, detail=detail)

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision.allow()


def _denied(decision: Decision, actor: Optional[Actor]) -> Decision:
    logger.debug(
        "Denied identity=%s reason=%s: %s",
        getattr(actor, "identity_id", None),
        decision.reason,
        decision.detail,
    )
    return decision


def decide(actor: Optional[Actor], action: Action, type_id) -> Decision:
    """Decide whether ``actor`` may perform ``action`` on elements of ``type_id``."""
    if actor is None:
        return _denied(Decision.deny(DenyReason.UNAUTHENTICATED, "Authentication required."), actor)

    grant = actor.grant_for(type_id)
    if grant is None:
        return _denied(
            Decision.deny(DenyReason.NO_GRANT_FOR_TYPE, f"No permissions granted for element type {type_id}."),
            actor,
        )

    if not grant.allows(action):
        return _denied(
            Decision.deny(
                DenyReason.INSUFFICIENT_TYPE_PERMISSION,
                f"Permission denied for this element type: {action.value}",
            ),
            actor,
        )
    return ALLOW


def decide_global(actor: Optional[Actor], permission_name: str) -> Decision:
    """Decide a schema- or admin-level operation that is not type scoped."""
    if actor is None:
        return _denied(Decision.deny(DenyReason.UNAUTHENTICATED, "Authentication required."), actor)
    if permission_name not in actor.global_permissions:
        return _denied(
            Decision.deny(
                DenyReason.MISSING_GLOBAL_PERMISSION,
                f"Missing required permission: {permission_name}",
            ),
            actor,
        )
    return ALLOW


def resolve_type_id(element_id) -> int:
    """Return the element's type id or raise NotFound."""
    type_id = lookups.element_type_id(element_id)
    if type_id is None:
        raise NotFound(f"Element {element_id} does not exist.")
    return type_id


def decide_element(actor: Optional[Actor], action: Action, element_id) -> Decision:
    """Decide ``action`` on a single element known only by id.

    Anonymous callers are turned away before the lookup; for everybody else
    the element must exist before the permission matrix is consulted.
    """
    if actor is None:
        return decide(actor, action, None)
    return decide(actor, action, resolve_type_id(element_id))


def decide_link(actor: Optional[Actor], source_id, target_id) -> Decision:
    """Decide whether two elements may be linked (or unlinked).

    Both endpoints must exist, then both types must grant edit. A denial names
    the side that failed.
    """
    if actor is None:
        return decide(actor, Action.EDIT, None)

    source_type = resolve_type_id(source_id)
    target_type = resolve_type_id(target_id)

    for side, type_id in (("source", source_type), ("target", target_type)):
        decision = decide(actor, Action.EDIT, type_id)
        if not decision:
            return Decision.deny(
                decision.reason,
                f"Permission denied to link these elements: {side} element type {type_id} lacks can_edit.",
            )
    return ALLOW


__all__ = [
    "DenyReason",
    "Decision",
    "decide",
    "decide_global",
    "resolve_type_id",
    "decide_element",
    "decide_link",
]
