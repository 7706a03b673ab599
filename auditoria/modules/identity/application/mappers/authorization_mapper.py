"""
Authorization mappers: roles, permissions and both kinds of menus.

Static menu items (``MenuItem``) and persisted menus (``Menu``) map to the same
``MenuResponse`` so clients render either the same way.
"""

from auditoria.modules.identity.application.dtos.response import (
    MenuResponse,
    PermissionResponse,
    RoleResponse,
)
from auditoria.modules.identity.domain.aggregates.menu import Menu
from auditoria.modules.identity.domain.aggregates.permission import PermissionEntity
from auditoria.modules.identity.domain.aggregates.role import RoleEntity
from auditoria.modules.identity.domain.authorization.menu_config import MenuItem


class PermissionMapper:
    @staticmethod
    def to_response(permission: PermissionEntity) -> PermissionResponse:
        return PermissionResponse(
            id=permission.id,
            name=permission.name,
            resource=permission.resource,
            action=permission.action,
            description=permission.description,
        )


class RoleMapper:
    @staticmethod
    def to_response(role: RoleEntity) -> RoleResponse:
        return RoleResponse(
            id=role.id,
            name=role.name.value,
            description=role.description,
            permissions=[PermissionMapper.to_response(p) for p in role.permissions],
        )


class MenuMapper:
    @classmethod
    def from_entity(cls, menu: Menu) -> MenuResponse:
        return MenuResponse(
            id=str(menu.id),
            name=menu.name,
            icon=menu.icon,
            path=menu.path,
            order=menu.order,
            children=[cls.from_entity(child) for child in menu.children],
        )

    @classmethod
    def from_item(cls, item: MenuItem) -> MenuResponse:
        return MenuResponse(
            id=item.id,
            name=item.label,
            icon=item.icon,
            path=item.route,
            order=item.order or 0,
            children=[cls.from_item(child) for child in item.children or ()],
        )
