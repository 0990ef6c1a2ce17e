"""Immutable value types shared by the role services, actors, and the engine."""

from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping


class Action(StrEnum):
    """Type-scoped actions; each value is the TypePermission flag it checks."""

    VIEW = "can_view"
    CREATE = "can_create"
    EDIT = "can_edit"
    DELETE = "can_delete"


@dataclass(frozen=True)
class TypeGrant:
    """Snapshot of one TypePermission row."""

    type_id: int
    can_view: bool = False
    can_create: bool = False
    can_edit: bool = False
    can_delete: bool = False

    @classmethod
    def from_row(cls, row) -> "TypeGrant":
        return cls(
            type_id=row.element_type_id,
            can_view=row.can_view,
            can_create=row.can_create,
            can_edit=row.can_edit,
            can_delete=row.can_delete,
        )

    def allows(self, action: Action) -> bool:
        """Return the effective flag for ``action``.

        Create, edit and delete only take effect together with view: a grant
        that cannot see a type cannot act on it either.
        """
        flag = bool(getattr(self, action.value))
        if action is Action.VIEW:
            return flag
        return flag and self.can_view


def freeze_matrix(grants) -> Mapping[int, TypeGrant]:
    """Build a read-only ``type_id -> TypeGrant`` mapping."""
    return MappingProxyType({grant.type_id: grant for grant in grants})


@dataclass(frozen=True)
class EffectivePermissions:
    """Read-only projection of a role used to build an Actor."""

    role_id: int
    global_names: frozenset[str] = frozenset()
    type_matrix: Mapping[int, TypeGrant] = field(default_factory=lambda: MappingProxyType({}))


__all__ = ["Action", "TypeGrant", "EffectivePermissions", "freeze_matrix"]
