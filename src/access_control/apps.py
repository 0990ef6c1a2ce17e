"""Django app for roles, global permissions and the type-permission matrix."""

from django.apps import AppConfig


class AccessControlConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "access_control"
    verbose_name = "Access control"

    def ready(self) -> None:
        """Register the guarded-view system checks."""
        from . import checks  # noqa: F401
