"""Authorization Catalog Repository Interfaces

Persisted roles, permissions and menus. The catalog is written only by the
seeding command; request handlers read it.
"""

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from auditoria.modules.identity.domain.enums import Role

if TYPE_CHECKING:
    from auditoria.modules.identity.domain.aggregates.menu import Menu
    from auditoria.modules.identity.domain.aggregates.permission import PermissionEntity
    from auditoria.modules.identity.domain.aggregates.role import RoleEntity


class IPermissionRepository(Protocol):
    async def find_by_name(self, name: str) -> "PermissionEntity | None":
        ...

    async def find_all(self) -> list["PermissionEntity"]:
        ...

    async def find_ids_for_roles(self, roles: list[Role]) -> set[UUID]:
        """Union of the permission ids linked to any of ``roles``."""
        ...

    async def save(self, permission: "PermissionEntity") -> "PermissionEntity":
        """Insert or update by name; returns the stored row."""
        ...


class IRoleRepository(Protocol):
    async def find_by_name(self, name: Role) -> "RoleEntity | None":
        ...

    async def find_all(self) -> list["RoleEntity"]:
        """Live roles, each with its linked permissions."""
        ...

    async def save(self, role: "RoleEntity") -> "RoleEntity":
        ...

    async def replace_permissions(self, role_id: UUID, permission_ids: list[UUID]) -> None:
        """Make ``permission_ids`` the exact set linked to the role."""
        ...


class IMenuRepository(Protocol):
    async def find_all_with_hierarchy(self) -> list["Menu"]:
        """Active root menus ordered by ``order``, each with its active children."""
        ...

    async def find_by_name(self, name: str) -> "Menu | None":
        ...

    async def save(self, menu: "Menu") -> "Menu":
        """Insert or update a single node; children are saved separately."""
        ...

    async def replace_permissions(self, menu_id: UUID, permission_ids: list[UUID]) -> None:
        ...
