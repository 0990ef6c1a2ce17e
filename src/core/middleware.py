"""Middleware resolving the bearer token into a user and an actor snapshot."""

import logging
from typing import Optional

from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed

from access_control.actor import actor_for
from authentication.models import User
from authentication.services import TokenService

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(MiddlewareMixin):
    """Decode the access JWT and attach ``request.user`` and ``request.actor``.

    The actor is built exactly once per request from the user's current role;
    nothing is cached between requests, so role changes apply to the next one.
    """

    def process_request(self, request):  # type: ignore[override]
        """Authenticate request using Bearer access token if present."""
        auth_header = request.META.get("HTTP_AUTHORIZATION", "")
        if not auth_header or not auth_header.startswith("Bearer "):
            request.user = AnonymousUser()
            request.actor = None
            return None

        token = auth_header.split(" ", 1)[1]

        try:
            payload = TokenService.decode_token(token)
        except AuthenticationFailed as exc:
            logger.info("Rejected bearer token: %s", exc.detail)
            return _unauthorized()

        user = self._get_user(payload.get("sub"))
        if not user or not user.is_active:
            logger.info("Rejected bearer token for unknown or inactive identity %s", payload.get("sub"))
            return _unauthorized()

        request.user = user
        request.actor = actor_for(user)
        return None

    @staticmethod
    def _get_user(user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        try:
            return User.objects.select_related("role").get(id=user_id)
        except (User.DoesNotExist, DjangoValidationError, ValueError):
            return None


def _unauthorized() -> JsonResponse:
    return JsonResponse(
        {
            "data": None,
            "errors": [
                "Authentication credentials were not provided or are invalid, or user is inactive."
            ],
        },
        status=status.HTTP_401_UNAUTHORIZED,
    )


__all__ = ["JWTAuthMiddleware"]
