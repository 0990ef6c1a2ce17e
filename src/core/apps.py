"""App configuration for the project-wide plumbing."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Settings, routing, the JWT middleware and the response envelope."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "Catalog core"
