# File: inventory_locks/apps/locking/permissions.py
"""
文件说明: Django 用户权限适配 (Django User Rights)
主要功能:
1. 将 Django 用户权限映射为锁引擎的 PermissionChecker。
2. 权限码格式: "locking.<right>_<kind>"，例如 "locking.purge_networkport"。
3. 超级用户拥有全部权限；未激活用户没有任何权限。
"""

from inventory_locks.core.services.lock.permissions import RIGHT_NAMES, PermissionChecker


class DjangoUserRights(PermissionChecker):
    APP_LABEL = "locking"

    def __init__(self, user):
        self.user = user

    @classmethod
    def codename(cls, kind: str, right: int) -> str:
        return f"{RIGHT_NAMES[right]}_{kind.lower()}"

    def can(self, kind, item_id, right):
        if not getattr(self.user, "is_active", False):
            return False
        if self.user.is_superuser:
            return True
        return self.user.has_perm(f"{self.APP_LABEL}.{self.codename(kind, right)}")
