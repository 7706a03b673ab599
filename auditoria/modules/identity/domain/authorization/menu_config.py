"""
Navigation menu configuration and role-based menu filtering.

A menu item is visible to a role when it requires no permissions or when
the role holds **all** of its required permissions. Filtering runs
depth-first and bottom-up:

- children are filtered first
- an item without own permissions but with children survives only if at
  least one filtered child survives
- an item with permissions survives only if the role satisfies all of them;
  its (already filtered) children are attached whatever they are
- the result is sorted by ``order`` ascending, missing order counting as 0,
  keeping the original order for ties
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Any

from auditoria.modules.identity.domain.authorization.role_permissions import (
    RolePermissionChecker,
)
from auditoria.modules.identity.domain.enums import Action, Resource, Role
from auditoria.modules.identity.domain.value_objects.permission import Permission


@dataclass(frozen=True)
class MenuItem:
    id: str
    label: str
    icon: str | None = None
    route: str | None = None
    required_permissions: tuple[Permission, ...] = ()
    children: tuple["MenuItem", ...] | None = None
    order: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "icon": self.icon,
            "route": self.route,
            "order": self.order,
            "required_permissions": [p.value for p in self.required_permissions],
        }
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def _requires(resource: Resource, action: Action) -> tuple[Permission, ...]:
    return (Permission.create(resource, action),)


MENU_CONFIG: tuple[MenuItem, ...] = (
    MenuItem(
        id="dashboard",
        label="Dashboard",
        icon="dashboard",
        route="/dashboard",
        order=1,
    ),
    MenuItem(
        id="users",
        label="Usuarios",
        icon="users",
        route="/users",
        required_permissions=_requires(Resource.USERS, Action.READ),
        order=2,
        children=(
            MenuItem(
                id="users-list",
                label="Lista de Usuarios",
                route="/users",
                required_permissions=_requires(Resource.USERS, Action.READ),
            ),
            MenuItem(
                id="users-create",
                label="Crear Usuario",
                route="/users/create",
                required_permissions=_requires(Resource.USERS, Action.CREATE),
            ),
        ),
    ),
    MenuItem(
        id="audits",
        label="Auditorías",
        icon="clipboard-check",
        route="/audits",
        required_permissions=_requires(Resource.AUDITS, Action.READ),
        order=3,
        children=(
            MenuItem(
                id="audits-list",
                label="Mis Auditorías",
                route="/audits",
                required_permissions=_requires(Resource.AUDITS, Action.READ),
            ),
            MenuItem(
                id="audits-create",
                label="Nueva Auditoría",
                route="/audits/create",
                required_permissions=_requires(Resource.AUDITS, Action.CREATE),
            ),
            MenuItem(
                id="audits-approve",
                label="Aprobar Auditorías",
                route="/audits/approve",
                required_permissions=_requires(Resource.AUDITS, Action.APPROVE),
            ),
            MenuItem(
                id="audits-assign",
                label="Asignar Auditorías",
                route="/audits/assign",
                required_permissions=_requires(Resource.AUDITS, Action.ASSIGN),
            ),
        ),
    ),
    MenuItem(
        id="findings",
        label="Hallazgos",
        icon="alert-circle",
        route="/findings",
        required_permissions=_requires(Resource.FINDINGS, Action.READ),
        order=4,
        children=(
            MenuItem(
                id="findings-list",
                label="Lista de Hallazgos",
                route="/findings",
                required_permissions=_requires(Resource.FINDINGS, Action.READ),
            ),
            MenuItem(
                id="findings-create",
                label="Registrar Hallazgo",
                route="/findings/create",
                required_permissions=_requires(Resource.FINDINGS, Action.CREATE),
            ),
        ),
    ),
    MenuItem(
        id="reports",
        label="Reportes",
        icon="file-text",
        route="/reports",
        required_permissions=_requires(Resource.REPORTS, Action.READ),
        order=5,
        children=(
            MenuItem(
                id="reports-list",
                label="Ver Reportes",
                route="/reports",
                required_permissions=_requires(Resource.REPORTS, Action.READ),
            ),
            MenuItem(
                id="reports-create",
                label="Generar Reporte",
                route="/reports/create",
                required_permissions=_requires(Resource.REPORTS, Action.CREATE),
            ),
            MenuItem(
                id="reports-export",
                label="Exportar Reportes",
                route="/reports/export",
                required_permissions=_requires(Resource.REPORTS, Action.EXPORT),
            ),
        ),
    ),
    MenuItem(
        id="clients",
        label="Clientes",
        icon="briefcase",
        route="/clients",
        required_permissions=_requires(Resource.CLIENTS, Action.READ),
        order=6,
        children=(
            MenuItem(
                id="clients-list",
                label="Lista de Clientes",
                route="/clients",
                required_permissions=_requires(Resource.CLIENTS, Action.READ),
            ),
            MenuItem(
                id="clients-create",
                label="Registrar Cliente",
                route="/clients/create",
                required_permissions=_requires(Resource.CLIENTS, Action.CREATE),
            ),
        ),
    ),
    MenuItem(
        id="settings",
        label="Configuración",
        icon="settings",
        route="/settings",
        required_permissions=_requires(Resource.SETTINGS, Action.READ),
        order=7,
    ),
    MenuItem(
        id="notifications",
        label="Notificaciones",
        icon="bell",
        route="/notifications",
        required_permissions=_requires(Resource.NOTIFICATIONS, Action.READ),
        order=8,
    ),
)


class MenuFilter:
    """Builds the navigation tree visible to a role or a permission set."""

    @classmethod
    def get_menus_for_role(
        cls, role: Role, menus: Iterable[MenuItem] = MENU_CONFIG
    ) -> list[MenuItem]:
        return cls.filter_menu_items(menus, RolePermissionChecker.get_permissions(role))

    @classmethod
    def filter_menu_items(
        cls, items: Iterable[MenuItem], permissions: Iterable[Permission]
    ) -> list[MenuItem]:
        granted = frozenset(permissions)
        return cls._filter(items, granted)

    @classmethod
    def _filter(cls, items: Iterable[MenuItem], granted: frozenset[Permission]) -> list[MenuItem]:
        visible: list[MenuItem] = []

        for item in items:
            children = None
            if item.children is not None:
                children = tuple(cls._filter(item.children, granted))

            if not item.required_permissions:
                if item.children and not children:
                    continue
            elif not cls.has_required_permissions(item, granted):
                continue

            visible.append(replace(item, children=children))

        return sorted(visible, key=lambda menu: menu.order or 0)

    @staticmethod
    def has_required_permissions(item: MenuItem, granted: Iterable[Permission]) -> bool:
        """ALL semantics: every required permission must be granted."""
        granted_set = set(granted)
        return all(required in granted_set for required in item.required_permissions)
