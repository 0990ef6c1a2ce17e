"""Serializers for catalog resources with standard envelope support."""

from rest_framework import serializers

from access_control import visibility
from access_control.permissions import get_actor
from .models import (
    Element,
    ElementType,
    GraphEdge,
    Interaction,
    InteractionType,
    ModuleKind,
    Property,
    RelationshipType,
)


class PropertySerializer(serializers.ModelSerializer):
    module = serializers.ChoiceField(choices=ModuleKind.choices)

    class Meta:
        model = Property
        fields = ["id", "module", "label"]
        read_only_fields = ["id"]


class ElementTypeSerializer(serializers.ModelSerializer):
    """Element type with its module properties.

    Properties are only accepted on create. Name uniqueness is reported by
    the catalog services as a 409.
    """

    properties = PropertySerializer(many=True, required=False)

    class Meta:
        model = ElementType
        fields = ["id", "name", "description", "properties", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {"name": {"validators": []}}

    def validate(self, attrs):
        if self.instance is not None and "properties" in attrs:
            raise serializers.ValidationError("Properties cannot be changed after a type is created.")
        return attrs


class VisibleElementField(serializers.PrimaryKeyRelatedField):
    """Element reference limited to types the requesting actor may view.

    A hidden element is rejected with the same message as a missing one.
    """

    def get_queryset(self):
        request = self.context.get("request")
        return visibility.filter_queryset(get_actor(request) if request else None, Element.objects.all())


class ElementSerializer(serializers.ModelSerializer):
    type_name = serializers.CharField(source="element_type.name", read_only=True)
    parent = VisibleElementField(allow_null=True, required=False)

    class Meta:
        """Expose element fields; the type is fixed once the element exists."""
        model = Element
        fields = ["id", "element_type", "type_name", "parent", "name", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_element_type(self, value):
        if self.instance is not None and value.pk != self.instance.element_type_id:
            raise serializers.ValidationError("The type of an existing element cannot be changed.")
        return value

    def validate_parent(self, value):
        if value is not None and self.instance is not None and value.pk == self.instance.pk:
            raise serializers.ValidationError("An element cannot be its own parent.")
        return value

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if instance.parent_id is not None:
            request = self.context.get("request")
            allowed = visibility.allowed_type_ids(get_actor(request) if request else None)
            if instance.parent.element_type_id not in allowed:
                data["parent"] = None
        return data


class RelationshipTypeSerializer(serializers.ModelSerializer):
    source_type_name = serializers.CharField(source="source_type.name", read_only=True)
    target_type_name = serializers.CharField(source="target_type.name", read_only=True)

    class Meta:
        model = RelationshipType
        fields = ["id", "name", "source_type", "target_type", "source_type_name", "target_type_name"]
        read_only_fields = ["id"]


class GraphEdgeSerializer(serializers.ModelSerializer):
    rel_name = serializers.CharField(source="relationship_type.name", read_only=True)
    source_name = serializers.CharField(source="source.name", read_only=True)
    target_name = serializers.CharField(source="target.name", read_only=True)

    class Meta:
        model = GraphEdge
        fields = [
            "id",
            "relationship_type",
            "source",
            "target",
            "rel_name",
            "source_name",
            "target_name",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]

    def validate(self, attrs):
        """Endpoints must match the relationship type's source and target types."""
        relationship = attrs["relationship_type"]
        if attrs["source"].element_type_id != relationship.source_type_id:
            raise serializers.ValidationError("Source element does not match the relationship's source type.")
        if attrs["target"].element_type_id != relationship.target_type_id:
            raise serializers.ValidationError("Target element does not match the relationship's target type.")
        return attrs


class InteractionTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = InteractionType
        fields = ["id", "name", "icon", "description", "once_per_user"]
        read_only_fields = fields


class InteractionSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)
    type_name = serializers.CharField(source="interaction_type.name", read_only=True)
    type_icon = serializers.CharField(source="interaction_type.icon", read_only=True)

    class Meta:
        """Element and author come from the URL and the caller."""
        model = Interaction
        fields = [
            "id",
            "element",
            "user",
            "username",
            "interaction_type",
            "type_name",
            "type_icon",
            "content",
            "created_at",
        ]
        read_only_fields = ["id", "element", "user", "created_at"]


__all__ = [
    "PropertySerializer",
    "ElementTypeSerializer",
    "ElementSerializer",
    "RelationshipTypeSerializer",
    "GraphEdgeSerializer",
    "InteractionTypeSerializer",
    "InteractionSerializer",
]
