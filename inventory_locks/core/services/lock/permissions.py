# File: inventory_locks/core/services/lock/permissions.py
"""
文件说明: 权限判定接口 (Permission Layer)
主要功能:
1. 位掩码权限常量 (READ / UPDATE / CREATE / DELETE / PURGE)。
2. PermissionChecker 接口: can(kind, item_id, right) -> bool。
3. 内置实现: AllowAll (服务内部调用)、ProfileRights (按类型的权限位表)。
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

READ = 1
UPDATE = 2
CREATE = 4
DELETE = 8
PURGE = 16

RIGHT_NAMES = {
    READ: "read",
    UPDATE: "update",
    CREATE: "create",
    DELETE: "delete",
    PURGE: "purge",
}


class PermissionChecker(ABC):

    @abstractmethod
    def can(self, kind: str, item_id: Optional[int], right: int) -> bool:
        pass

    def can_any(self, kind: str, item_id: Optional[int], *rights: int) -> bool:
        return any(self.can(kind, item_id, right) for right in rights)


class AllowAll(PermissionChecker):
    def can(self, kind, item_id, right):
        return True


class ProfileRights(PermissionChecker):
    """
    按类型配置的权限位 (与实例无关)
    e.g. {"networkport": UPDATE | PURGE, "computer_item": UPDATE}
    """

    def __init__(self, rights: Dict[str, int]):
        self.rights = {key.lower(): value for key, value in rights.items()}

    def can(self, kind, item_id, right):
        return bool(self.rights.get(kind.lower(), 0) & right)
