"""Response helpers and base classes for consistent API envelopes."""

from typing import Any

from rest_framework import mixins, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView


def api_response(data: Any, status: int = 200) -> Response:
    """Return data wrapped in the standard `{ "data": ..., "errors": [] }` envelope."""

    return Response({"data": data, "errors": []}, status=status)


def _is_enveloped(payload: Any) -> bool:
    return isinstance(payload, dict) and "data" in payload and "errors" in payload


class EnvelopeMixin:
    """Mixin to wrap successful responses in the standard envelope."""

    def finalize_response(self, request, response, *args, **kwargs):  # type: ignore[override]
        """Ensure non-error responses include the `{data, errors}` envelope."""
        if hasattr(response, "data") and response.status_code and response.status_code < 400:
            if response.status_code != 204 and not _is_enveloped(response.data):
                response.data = {"data": response.data, "errors": []}
        # DRF's views provide finalize_response; the mixin alone doesn't.
        return super().finalize_response(request, response, *args, **kwargs)  # type: ignore[attr-defined]


class BaseAPIView(EnvelopeMixin, APIView):
    """APIView that ensures successful responses use the standard envelope."""


class BaseViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """ModelViewSet variant that wraps successful responses in the envelope."""


class BaseReadOnlyViewSet(EnvelopeMixin, viewsets.ReadOnlyModelViewSet):
    """List/retrieve-only viewset with the envelope."""


class BaseListCreateDestroyViewSet(
    EnvelopeMixin,
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Viewset for resources that are created and deleted but never edited."""


__all__ = [
    "api_response",
    "EnvelopeMixin",
    "BaseAPIView",
    "BaseViewSet",
    "BaseReadOnlyViewSet",
    "BaseListCreateDestroyViewSet",
]
