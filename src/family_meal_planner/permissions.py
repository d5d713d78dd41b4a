"""Family edit permission hook.

Services never enforce permissions; callers check :meth:`PermissionChecker.can_edit`
before invoking a mutating operation.
"""

from abc import ABC, abstractmethod
from typing import Any


class PermissionChecker(ABC):
    @abstractmethod
    def can_edit(self, user_id: str | None, family_id: str) -> bool:
        ...


class AllowAllPermissions(PermissionChecker):
    """Every caller may edit every family. Used when no editors are configured."""

    def can_edit(self, user_id: str | None, family_id: str) -> bool:
        return True


class StaticFamilyPermissions(PermissionChecker):
    """Editors listed per family. Families without an entry are open to anyone."""

    def __init__(self, editors: dict[str, list[str]]) -> None:
        self._editors = {family: set(users) for family, users in editors.items()}

    def can_edit(self, user_id: str | None, family_id: str) -> bool:
        allowed = self._editors.get(family_id)
        if allowed is None:
            return True
        return user_id is not None and user_id in allowed


def create_permission_checker(rules: dict[str, Any]) -> PermissionChecker:
    editors = rules.get("family_editors") or {}
    if not editors:
        return AllowAllPermissions()
    return StaticFamilyPermissions(editors)
