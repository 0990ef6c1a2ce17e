"""App configuration for the catalog (schema and content) application."""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    """Catalog app holds element types, their modules, elements, and graph links."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
