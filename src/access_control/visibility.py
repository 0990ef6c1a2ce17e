"""Visibility filter: the decision engine applied to collections."""

from operator import attrgetter
from typing import Callable, Iterable, Optional

from .actor import Actor

_default_type_of = attrgetter("type_id")


def allowed_type_ids(actor: Optional[Actor]) -> frozenset[int]:
    """Return the ids of every type the actor may view (empty when anonymous)."""
    if actor is None:
        return frozenset()
    return frozenset(type_id for type_id, grant in actor.type_permissions.items() if grant.can_view)


def filter_viewable(
    actor: Optional[Actor],
    candidates: Iterable,
    type_of: Callable = _default_type_of,
) -> list:
    """Keep the candidates whose type the actor may view, preserving order."""
    allowed = allowed_type_ids(actor)
    if not allowed:
        return []
    return [candidate for candidate in candidates if type_of(candidate) in allowed]


def filter_queryset(actor: Optional[Actor], queryset, field: str = "element_type"):
    """Push the visibility filter into the query instead of filtering in memory."""
    allowed = allowed_type_ids(actor)
    if not allowed:
        return queryset.none()
    return queryset.filter(**{f"{field}__in": allowed})


__all__ = ["allowed_type_ids", "filter_viewable", "filter_queryset"]
