"""Catalog viewsets guarded by the authorization core."""

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action

from access_control import visibility
from access_control.engine import decide_global, decide_link
from access_control.exceptions import ValidationFailure
from access_control.grants import Action
from access_control.permissions import (
    ActorRequired,
    GlobalPermissionRequired,
    TypeScopedPermission,
    enforce,
    get_actor,
)
from access_control.registry import MANAGE_ROLES, MANAGE_TYPES
from core.response import (
    BaseListCreateDestroyViewSet,
    BaseReadOnlyViewSet,
    BaseViewSet,
    EnvelopeMixin,
    api_response,
)
from . import services
from .models import Element, ElementType, GraphEdge, Interaction, InteractionType, RelationshipType
from .serializers import (
    ElementSerializer,
    ElementTypeSerializer,
    GraphEdgeSerializer,
    InteractionSerializer,
    InteractionTypeSerializer,
    RelationshipTypeSerializer,
)

SCHEMA_WRITE_ACTIONS = ("create", "update", "partial_update", "destroy")


class ElementTypeViewSet(BaseViewSet):
    """Element types: readable by any actor, changed with ``manage_types``."""

    serializer_class = ElementTypeSerializer
    permission_classes = [GlobalPermissionRequired]
    global_permission = MANAGE_TYPES
    global_permission_actions = SCHEMA_WRITE_ACTIONS
    queryset = ElementType.objects.prefetch_related("properties")

    def perform_create(self, serializer):
        data = serializer.validated_data
        serializer.instance = services.create_element_type(
            data["name"], data.get("description", ""), data.get("properties", [])
        )

    def perform_update(self, serializer):
        serializer.instance = services.update_element_type(serializer.instance, **serializer.validated_data)

    def perform_destroy(self, instance):
        services.delete_element_type(instance)


class RelationshipTypeViewSet(BaseListCreateDestroyViewSet):
    serializer_class = RelationshipTypeSerializer
    permission_classes = [GlobalPermissionRequired]
    global_permission = MANAGE_TYPES
    global_permission_actions = SCHEMA_WRITE_ACTIONS
    queryset = RelationshipType.objects.select_related("source_type", "target_type")


class ElementViewSet(BaseViewSet):
    """Elements, checked against the TypePermission matrix of their type.

    Listing only returns elements of types the caller may view. Detail routes
    answer 404 for missing elements before any permission is evaluated.
    """

    serializer_class = ElementSerializer
    permission_classes = [TypeScopedPermission]
    type_field = "element_type"
    type_actions = {"interactions": Action.VIEW}

    def get_queryset(self):
        queryset = Element.objects.select_related("element_type", "parent")
        if self.action != "list":
            return queryset

        queryset = visibility.filter_queryset(get_actor(self.request), queryset, "element_type")
        requested = self.request.query_params.get("element_type")
        if requested:
            try:
                queryset = queryset.filter(element_type_id=int(requested))
            except ValueError as exc:
                raise ValidationFailure("'element_type' must be an integer id.") from exc
        return queryset

    @action(detail=True, methods=["get", "post"], url_path="interactions")
    def interactions(self, request, pk=None):
        """List or record interactions on an element the caller can view."""
        element = self.get_object()
        if request.method == "GET":
            queryset = element.interactions.select_related("user", "interaction_type")
            return api_response(InteractionSerializer(queryset, many=True).data)

        serializer = InteractionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        interaction = services.record_interaction(
            element,
            request.user,
            serializer.validated_data["interaction_type"],
            serializer.validated_data.get("content", ""),
        )
        return api_response(InteractionSerializer(interaction).data, status=status.HTTP_201_CREATED)


class GraphEdgeViewSet(BaseListCreateDestroyViewSet):
    """Typed links between elements; both endpoints need edit rights."""

    serializer_class = GraphEdgeSerializer
    permission_classes = [ActorRequired]

    def get_queryset(self):
        queryset = GraphEdge.objects.select_related("relationship_type", "source", "target")
        if self.action != "list":
            return queryset
        actor = get_actor(self.request)
        queryset = visibility.filter_queryset(actor, queryset, "source__element_type")
        return visibility.filter_queryset(actor, queryset, "target__element_type")

    def create(self, request, *args, **kwargs):
        source_id = request.data.get("source")
        target_id = request.data.get("target")
        if source_id in (None, "") or target_id in (None, ""):
            raise ValidationFailure("Both 'source' and 'target' are required.")
        enforce(decide_link(get_actor(request), source_id, target_id))
        return super().create(request, *args, **kwargs)

    def perform_destroy(self, instance):
        enforce(decide_link(get_actor(self.request), instance.source_id, instance.target_id))
        instance.delete()


class InteractionTypeViewSet(BaseReadOnlyViewSet):
    serializer_class = InteractionTypeSerializer
    queryset = InteractionType.objects.all()


class InteractionViewSet(EnvelopeMixin, mixins.DestroyModelMixin, viewsets.GenericViewSet):
    """Deletion of a single interaction by its author or a role administrator."""

    serializer_class = InteractionSerializer
    queryset = Interaction.objects.all()

    def perform_destroy(self, instance):
        actor = get_actor(self.request)
        if instance.user_id != actor.identity_id:
            enforce(decide_global(actor, MANAGE_ROLES))
        instance.delete()


__all__ = [
    "ElementTypeViewSet",
    "RelationshipTypeViewSet",
    "ElementViewSet",
    "GraphEdgeViewSet",
    "InteractionTypeViewSet",
    "InteractionViewSet",
]
