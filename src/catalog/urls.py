"""Routing for the catalog viewsets."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    ElementTypeViewSet,
    ElementViewSet,
    GraphEdgeViewSet,
    InteractionTypeViewSet,
    InteractionViewSet,
    RelationshipTypeViewSet,
)

router = DefaultRouter()
router.register(r"types", ElementTypeViewSet, basename="element-type")
router.register(r"relationship-types", RelationshipTypeViewSet, basename="relationship-type")
router.register(r"elements", ElementViewSet, basename="element")
router.register(r"graph", GraphEdgeViewSet, basename="graph-edge")
router.register(r"interaction-types", InteractionTypeViewSet, basename="interaction-type")
router.register(r"interactions", InteractionViewSet, basename="interaction")

urlpatterns = [
    path("", include(router.urls)),
]
