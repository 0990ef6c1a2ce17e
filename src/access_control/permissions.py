"""DRF permission classes translating engine decisions into HTTP outcomes.

The actor snapshot built by ``JWTAuthMiddleware`` is exposed by
``MiddlewareUserAuthentication`` as ``request.auth``. Returning False for an
anonymous request lets DRF answer 401; a denial for a resolved actor raises
``PermissionDenied`` carrying the engine's reason.
"""

from typing import Optional

from rest_framework import permissions
from rest_framework.exceptions import PermissionDenied

from . import lookups
from .actor import Actor
from .engine import Decision, decide, decide_element, decide_global
from .exceptions import NotFound, ValidationFailure
from .grants import Action

METHOD_ACTIONS = {
    "GET": Action.VIEW,
    "HEAD": Action.VIEW,
    "OPTIONS": Action.VIEW,
    "POST": Action.CREATE,
    "PUT": Action.EDIT,
    "PATCH": Action.EDIT,
    "DELETE": Action.DELETE,
}


def get_actor(request) -> Optional[Actor]:
    """Return the actor attached to the request, or None when anonymous."""
    actor = getattr(request, "auth", None)
    return actor if isinstance(actor, Actor) else None


def enforce(decision: Decision) -> bool:
    """Raise PermissionDenied for a denial; return True otherwise."""
    if not decision:
        raise PermissionDenied(detail=decision.detail or None, code=str(decision.reason))
    return True


class ActorRequired(permissions.BasePermission):
    """Allow any request made by a resolved actor."""

    def has_permission(self, request, view) -> bool:
        return get_actor(request) is not None


class GlobalPermissionRequired(permissions.BasePermission):
    """Require the view's ``global_permission`` for the guarded actions.

    ``view.global_permission_actions`` limits the check to some DRF actions
    (e.g. ``("create", "destroy")``); the remaining actions only need an actor.
    When it is None every action is guarded.
    """

    def has_permission(self, request, view) -> bool:
        actor = get_actor(request)
        if actor is None:
            return False

        permission_name = getattr(view, "global_permission", None)
        if not permission_name:
            return False

        guarded = getattr(view, "global_permission_actions", None)
        if guarded is not None and getattr(view, "action", None) not in guarded:
            return True

        return enforce(decide_global(actor, permission_name))


class TypeScopedPermission(permissions.BasePermission):
    """Check the TypePermission matrix for element endpoints.

    - ``list`` only needs an actor; results are narrowed by the visibility
      filter in ``get_queryset``.
    - ``create`` reads the target type from ``request.data[view.type_field]``.
    - Detail routes resolve the type from the element id in the URL; a
      missing element yields 404 before any permission is checked.

    The action checked defaults to the HTTP method mapping and can be
    overridden per DRF action through ``view.type_actions``.
    """

    def has_permission(self, request, view) -> bool:
        actor = get_actor(request)
        if actor is None:
            return False

        view_action = getattr(view, "action", None)
        if view_action in ("list", "metadata"):
            return True

        action = getattr(view, "type_actions", {}).get(view_action) or METHOD_ACTIONS.get(request.method)
        if action is None:
            return False

        lookup = getattr(view, "lookup_url_kwarg", None) or getattr(view, "lookup_field", "pk")
        element_id = view.kwargs.get(lookup)
        if element_id is not None:
            return enforce(decide_element(actor, action, element_id))

        type_id = self._requested_type(request, view)
        return enforce(decide(actor, action, type_id))

    @staticmethod
    def _requested_type(request, view) -> int:
        field = getattr(view, "type_field", "element_type")
        raw = request.data.get(field) if hasattr(request.data, "get") else None
        if raw in (None, ""):
            raise ValidationFailure(f"'{field}' is required.")
        try:
            type_id = int(raw)
        except (TypeError, ValueError) as exc:
            raise ValidationFailure(f"'{field}' must be an integer id.") from exc
        if not lookups.type_exists(type_id):
            raise NotFound(f"Element type {type_id} does not exist.")
        return type_id


__all__ = [
    "METHOD_ACTIONS",
    "get_actor",
    "enforce",
    "ActorRequired",
    "GlobalPermissionRequired",
    "TypeScopedPermission",
]
