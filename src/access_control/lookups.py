"""Access to the catalog collaborators configured in ``settings.ACCESS_CONTROL``."""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

DEFAULTS = {
    "ELEMENT_TYPE_LOOKUP": "catalog.lookups.element_type_id",
    "TYPE_EXISTS_LOOKUP": "catalog.lookups.element_type_exists",
}


def _load(key: str):
    config = getattr(settings, "ACCESS_CONTROL", {}) or {}
    path = config.get(key, DEFAULTS[key])
    try:
        return import_string(path)
    except ImportError as exc:
        raise ImproperlyConfigured(f"ACCESS_CONTROL['{key}'] points to '{path}', which cannot be imported.") from exc


def element_type_id(element_id):
    """Return the element's type id, or None when the element does not exist."""
    return _load("ELEMENT_TYPE_LOOKUP")(element_id)


def type_exists(type_id) -> bool:
    return bool(_load("TYPE_EXISTS_LOOKUP")(type_id))


__all__ = ["element_type_id", "type_exists"]
