"""Catalog models: element types, their data modules, elements, and links.

Element types are the schema classes of the catalog. The authorization core
only ever sees an element type as an opaque ``type_id``; everything else here
belongs to the content side of the system.
"""

from django.conf import settings
from django.db import models


class ModuleKind(models.TextChoices):
    """Fixed set of pluggable data modules an element type can be built from."""

    CONTENT = "content", "Text Content"
    PLACE = "place", "Location/Geo"
    FILE = "file", "File/Image"
    URLS_EMBEDS = "urls_embeds", "URL/Embed"
    TIME_TRACKING = "time_tracking", "Time Tracking"
    PRODUCT_INFO = "product_info", "Product Info"


class ElementType(models.Model):
    """Schema-level class of content elements (e.g. 'Article', 'Event')."""

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name


class Property(models.Model):
    """A data module attached to an element type, shown under ``label``."""

    element_type = models.ForeignKey(ElementType, on_delete=models.CASCADE, related_name="properties")
    module = models.CharField(max_length=32, choices=ModuleKind.choices)
    label = models.CharField(max_length=100)

    class Meta:
        unique_together = ("element_type", "module")
        ordering = ["id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.element_type.name}.{self.module}"


class Element(models.Model):
    """Instance of an element type, optionally nested under a parent element."""

    element_type = models.ForeignKey(ElementType, on_delete=models.CASCADE, related_name="elements")
    parent = models.ForeignKey(
        "self", on_delete=models.SET_NULL, null=True, blank=True, related_name="children"
    )
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name


class RelationshipType(models.Model):
    """Named kind of link allowed between elements of two types."""

    source_type = models.ForeignKey(
        ElementType, on_delete=models.CASCADE, related_name="outgoing_relationship_types"
    )
    target_type = models.ForeignKey(
        ElementType, on_delete=models.CASCADE, related_name="incoming_relationship_types"
    )
    name = models.CharField(max_length=100)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name


class GraphEdge(models.Model):
    """Directed link between two elements, typed by a RelationshipType."""

    relationship_type = models.ForeignKey(RelationshipType, on_delete=models.CASCADE, related_name="edges")
    source = models.ForeignKey(Element, on_delete=models.CASCADE, related_name="outgoing_edges")
    target = models.ForeignKey(Element, on_delete=models.CASCADE, related_name="incoming_edges")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.source_id} -[{self.relationship_type.name}]-> {self.target_id}"


class InteractionType(models.Model):
    """Kind of user interaction with an element (like, favorite, comment)."""

    name = models.CharField(max_length=50, unique=True)
    icon = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)
    # like/favorite may be recorded once per user and element; comments repeat.
    once_per_user = models.BooleanField(default=False)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name


class Interaction(models.Model):
    """A single interaction recorded by a user on an element."""

    element = models.ForeignKey(Element, on_delete=models.CASCADE, related_name="interactions")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="interactions")
    interaction_type = models.ForeignKey(InteractionType, on_delete=models.CASCADE, related_name="interactions")
    content = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.interaction_type.name} on {self.element_id}"


__all__ = [
    "ModuleKind",
    "ElementType",
    "Property",
    "Element",
    "RelationshipType",
    "GraphEdge",
    "InteractionType",
    "Interaction",
]
