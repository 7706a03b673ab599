"""
Persisted navigation menu.

A tree of immutable nodes; root nodes have no ``parent_id``. Visibility uses
ANY semantics against the permission ids linked to each node: a node with no
linked permissions is public, otherwise one matching permission suffices.
This differs from the static ``MenuFilter`` which requires ALL permissions.
"""

from collections.abc import Collection
from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

from auditoria.core.domain.base import utc_now


@dataclass(frozen=True)
class Menu:
    name: str
    id: UUID = field(default_factory=uuid4)
    icon: str | None = None
    path: str | None = None
    order: int = 0
    is_active: bool = True
    parent_id: UUID | None = None
    children: tuple["Menu", ...] = ()
    permission_ids: tuple[UUID, ...] = ()
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def is_parent(self) -> bool:
        return self.parent_id is None

    @property
    def is_child(self) -> bool:
        return self.parent_id is not None

    def has_permission(self, user_permission_ids: Collection[UUID]) -> bool:
        if not self.permission_ids:
            return True
        return any(permission_id in user_permission_ids for permission_id in self.permission_ids)

    def filter_by_permissions(self, user_permission_ids: Collection[UUID]) -> "Menu | None":
        """
        Copy of this subtree restricted to what the user may see, or None.

        A permission-less grouping node survives only while at least one of
        its children does.
        """
        visible_children = tuple(
            child
            for child in (c.filter_by_permissions(user_permission_ids) for c in self.children)
            if child is not None
        )

        if not self.permission_ids and self.has_children:
            if not visible_children:
                return None
            return replace(self, children=visible_children)

        if not self.has_permission(user_permission_ids):
            return None

        return replace(self, children=visible_children)
