"""Schema and content workflows that must stay consistent with the RBAC matrix."""

import logging
from typing import Iterable

from django.db import IntegrityError, transaction

from access_control.exceptions import UniquenessViolation, ValidationFailure
from access_control.services import grant_type_to_privileged_roles
from .models import Element, ElementType, Interaction, InteractionType, Property

logger = logging.getLogger(__name__)


def _check_modules(properties: Iterable[dict]) -> list[dict]:
    properties = list(properties)
    modules = [prop["module"] for prop in properties]
    duplicates = sorted({module for module in modules if modules.count(module) > 1})
    if duplicates:
        raise ValidationFailure(f"Each module may appear once per type; repeated: {', '.join(duplicates)}.")
    return properties


def create_element_type(name: str, description: str = "", properties: Iterable[dict] = ()) -> ElementType:
    """Create a type with its modules and seed grants for fully privileged roles."""
    properties = _check_modules(properties)
    try:
        with transaction.atomic():
            element_type = ElementType.objects.create(name=name, description=description)
            Property.objects.bulk_create(
                Property(element_type=element_type, module=prop["module"], label=prop["label"])
                for prop in properties
            )
            grant_type_to_privileged_roles(element_type)
    except IntegrityError as exc:
        raise UniquenessViolation(f"Element type '{name}' already exists.") from exc

    logger.info("Created element type %s (id=%s) with modules %s", name, element_type.pk,
                [prop["module"] for prop in properties])
    return element_type


def update_element_type(element_type: ElementType, **fields) -> ElementType:
    for attr, value in fields.items():
        setattr(element_type, attr, value)
    try:
        with transaction.atomic():
            element_type.save()
    except IntegrityError as exc:
        raise UniquenessViolation(f"Element type '{element_type.name}' already exists.") from exc
    return element_type


def delete_element_type(element_type: ElementType) -> None:
    """Delete a type; its grants, modules, elements and links go with it."""
    with transaction.atomic():
        grants = element_type.type_permissions.count()
        elements = element_type.elements.count()
        element_type.delete()
    logger.info(
        "Deleted element type %s, cascading %s type permission rows and %s elements",
        element_type.name,
        grants,
        elements,
    )


def record_interaction(element: Element, user, interaction_type: InteractionType, content: str = "") -> Interaction:
    """Store an interaction; once-per-user kinds reject repeats.

    The interaction type row is locked for the duration of the check so that
    concurrent requests for the same kind are serialized.
    """
    with transaction.atomic():
        interaction_type = InteractionType.objects.select_for_update().get(pk=interaction_type.pk)
        if interaction_type.once_per_user and Interaction.objects.filter(
            element=element, user=user, interaction_type=interaction_type
        ).exists():
            raise UniquenessViolation(f"Already recorded '{interaction_type.name}' on this element.")
        return Interaction.objects.create(
            element=element, user=user, interaction_type=interaction_type, content=content
        )


__all__ = [
    "create_element_type",
    "update_element_type",
    "delete_element_type",
    "record_interaction",
]
