"""System checks for RBAC configuration."""

from django.core.checks import Error, register

from access_control.permissions import GlobalPermissionRequired
from access_control.registry import KNOWN_PERMISSIONS


@register()
def global_permission_views_name_known_permission(app_configs, **kwargs):
    """Ensure views guarded by GlobalPermissionRequired name a known permission.

    The check inspects the viewsets of this project. New views guarded by
    ``GlobalPermissionRequired`` should be added to the list below.
    """
    errors: list[Error] = []

    # Import here to avoid circular imports at module load time.
    from access_control.views import PermissionViewSet, RoleViewSet
    from authentication.views import UserAdminViewSet
    from catalog.views import ElementTypeViewSet, RelationshipTypeViewSet

    guarded_views = [
        PermissionViewSet,
        RoleViewSet,
        UserAdminViewSet,
        ElementTypeViewSet,
        RelationshipTypeViewSet,
    ]

    for view_cls in guarded_views:
        permission_classes = getattr(view_cls, "permission_classes", [])
        if GlobalPermissionRequired not in permission_classes:
            continue
        permission_name = getattr(view_cls, "global_permission", None)
        if not permission_name:
            errors.append(
                Error(
                    f"{view_cls.__name__} uses GlobalPermissionRequired but does not "
                    f"define global_permission.",
                    obj=view_cls,
                    id="access_control.E001",
                )
            )
        elif permission_name not in KNOWN_PERMISSIONS:
            errors.append(
                Error(
                    f"{view_cls.__name__}.global_permission '{permission_name}' is not a "
                    f"known permission.",
                    hint=f"Use one of: {', '.join(sorted(KNOWN_PERMISSIONS))}.",
                    obj=view_cls,
                    id="access_control.E002",
                )
            )

    return errors
