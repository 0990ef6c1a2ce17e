"""DRF authenticator backed by the work ``JWTAuthMiddleware`` already did.

Tokens are verified once, in the middleware, which leaves the identity on
``request.user`` and its permission snapshot on ``request.actor``. DRF views
see them as ``request.user`` and ``request.auth``.
"""

from typing import Any, Optional, Tuple

from rest_framework.authentication import BaseAuthentication


class MiddlewareUserAuthentication(BaseAuthentication):
    """Hand the middleware's ``(user, actor)`` pair to DRF.

    Requests without a resolved actor stay unauthenticated, which makes DRF
    answer 401 for guarded views.
    """

    def authenticate(self, request) -> Optional[Tuple[Any, Any]]:
        django_request = getattr(request, "_request", None)
        actor = getattr(django_request, "actor", None)
        if actor is None:
            return None

        user = getattr(django_request, "user", None)
        if not getattr(user, "is_authenticated", False):
            return None
        return user, actor

    def authenticate_header(self, request) -> str:
        return 'Bearer realm="api"'


__all__ = ["MiddlewareUserAuthentication"]
