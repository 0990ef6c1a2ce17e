"""Token service for access JWT creation and decoding."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed


class TokenService:
    """Issue and decode the bearer tokens that carry an identity id."""

    ALGORITHM = "HS256"
    TOKEN_TYPE = "access"

    @classmethod
    def access_ttl(cls) -> timedelta:
        return timedelta(minutes=getattr(settings, "ACCESS_TOKEN_TTL_MINUTES", 15))

    @classmethod
    def issue_access_token(cls, user, ttl: timedelta | None = None) -> str:
        """Return a signed access token whose ``sub`` is the user's id."""

        now = datetime.now(timezone.utc)
        payload = cls._build_payload(user, now, ttl or cls.access_ttl())
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=cls.ALGORITHM)

    @classmethod
    def _build_payload(cls, user, issued_at: datetime, ttl: timedelta) -> dict[str, Any]:
        exp = issued_at + ttl
        return {
            "sub": str(user.pk),
            "jti": str(uuid.uuid4()),
            "exp": int(exp.timestamp()),
            "iat": int(issued_at.timestamp()),
            "type": cls.TOKEN_TYPE,
        }

    @classmethod
    def decode_token(cls, token: str) -> dict[str, Any]:
        """Decode and validate an access JWT."""

        try:
            payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[cls.ALGORITHM])
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationFailed("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationFailed("Invalid token") from exc

        if payload.get("type") != cls.TOKEN_TYPE:
            raise AuthenticationFailed("Invalid token type")

        return payload


__all__ = ["TokenService"]
