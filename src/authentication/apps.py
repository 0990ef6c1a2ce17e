"""App configuration for identity components."""

from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    """Authentication app holds the identity model and access token utilities."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"
