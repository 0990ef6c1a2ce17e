"""Identity endpoints: the caller's profile and admin role assignment."""

from django.contrib.auth import get_user_model
from rest_framework.decorators import action

from access_control import services
from access_control.permissions import ActorRequired, GlobalPermissionRequired, get_actor
from access_control.registry import MANAGE_ROLES
from core.response import BaseAPIView, BaseReadOnlyViewSet, api_response
from .serializers import ActorSerializer, RoleAssignmentSerializer, UserDetailSerializer

User = get_user_model()


class MeView(BaseAPIView):
    permission_classes = [ActorRequired]

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Return the current user's profile and effective permissions."""
        data = dict(UserDetailSerializer(request.user).data)
        data.update(ActorSerializer(get_actor(request)).data)
        return api_response(data)


class UserAdminViewSet(BaseReadOnlyViewSet):
    """List identities and move them between roles."""

    serializer_class = UserDetailSerializer
    permission_classes = [GlobalPermissionRequired]
    global_permission = MANAGE_ROLES
    queryset = User.objects.select_related("role")

    @action(detail=True, methods=["put"], url_path="role")
    def role(self, request, pk=None):
        """Reassign the user's role; applies from the user's next request."""
        payload = RoleAssignmentSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        user = services.assign_role(pk, payload.validated_data["role_id"])
        return api_response(UserDetailSerializer(user).data)


__all__ = ["MeView", "UserAdminViewSet"]
