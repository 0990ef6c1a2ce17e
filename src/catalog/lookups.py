"""Lookup collaborators consumed by the authorization core.

These are referenced by dotted path from ``settings.ACCESS_CONTROL`` so that
``access_control`` never needs to query catalog tables itself.
"""

from typing import Optional

from .models import Element, ElementType


def element_type_id(element_id) -> Optional[int]:
    """Return the type id of the element, or None when it does not exist."""
    try:
        return Element.objects.filter(pk=element_id).values_list("element_type_id", flat=True).first()
    except (TypeError, ValueError):
        return None


def element_type_exists(type_id) -> bool:
    """Return True when an element type with this id exists."""
    try:
        return ElementType.objects.filter(pk=type_id).exists()
    except (TypeError, ValueError):
        return False


__all__ = ["element_type_id", "element_type_exists"]
