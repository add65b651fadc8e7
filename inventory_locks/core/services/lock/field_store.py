# File: inventory_locks/core/services/lock/field_store.py
"""
# ==============================================================================
# 模块名称: 字段锁存储 (Field Lock Store)
# ==============================================================================
#
# [Purpose / 用途]
# 字段级锁的读取与删除，以及 "可选解锁字段" 目录。
#
# [Rules / 规则]
# - list_locks_for: 实例锁 + 同类型全局锁 (两者并存时都返回)。
# - effective_locks: 展示用，同一字段实例锁优先。
# - delete_locks: 幂等，返回实际删除行数；删除不存在的锁不是错误。
#
# ==============================================================================
"""

from typing import Dict, Iterable, List, Optional

from inventory_locks.core.components.db.schema import KIND_TABLES
from inventory_locks.core.repository.lockedfield_repo import LockedFieldRepository
from inventory_locks.core.services.lock.models import LockCriteria, LockedField
from inventory_locks.core.services.lock.search_options import get_options_for_itemtype
from inventory_locks.core.sys.logger import get_logger

# 技术字段: 由系统维护，不提供解锁选项
EXCLUDED_FIELDS = frozenset({
    "id", "entities_id", "is_recursive", "is_dynamic", "is_deleted", "is_template",
    "template_name", "date_mod", "date_creation", "last_inventory_update", "last_boot",
})

# 选择界面提交的格式: "Computer - serial"
FIELD_SEPARATOR = " - "


def normalize_field_name(name: str) -> str:
    if FIELD_SEPARATOR in name:
        return name.split(FIELD_SEPARATOR, 1)[1].strip()
    return name.strip()


def effective_locks(locks: Iterable[LockedField]) -> Dict[str, LockedField]:
    """同一字段同时存在实例锁与全局锁时，展示实例锁"""
    result: Dict[str, LockedField] = {}
    for lock in locks:
        current = result.get(lock.field)
        if current is None or (current.is_global and not lock.is_global):
            result[lock.field] = lock
    return result


class FieldLockStore:

    def __init__(self, repo: Optional[LockedFieldRepository] = None):
        self.repo = repo or LockedFieldRepository()
        self.logger = get_logger("FieldLockStore")

    def list_locks_for(self, itemtype: str, items_id: int) -> List[LockedField]:
        rows = self.repo.find_for_item(itemtype, items_id)
        return [
            LockedField(
                id=int(row["id"]),
                itemtype=row["itemtype"],
                items_id=int(row["items_id"]),
                field=row["field"],
                value=row["value"],
                is_global=bool(row["is_global"]),
            )
            for row in rows
        ]

    def delete_locks(self, criteria: LockCriteria) -> int:
        fields = None
        if criteria.field_names is not None:
            fields = sorted({normalize_field_name(f) for f in criteria.field_names})
            if not fields:
                return 0
        items_id = None if criteria.is_global else criteria.items_id
        deleted = self.repo.delete_where(criteria.itemtype, criteria.is_global, items_id, fields)
        self.logger.info(
            f"🔓 字段解锁: {criteria.itemtype}#{items_id if items_id is not None else '*'} "
            f"fields={fields or 'ALL'} global={criteria.is_global} -> {deleted} rows"
        )
        return deleted

    def unlock_global(self, itemtype: str, field_names: Optional[Iterable[str]] = None) -> int:
        """按类型解除全局字段锁"""
        names = tuple(field_names) if field_names is not None else None
        return self.delete_locks(LockCriteria(itemtype=itemtype, field_names=names, is_global=True))

    # =========================================================================
    # 可选解锁字段 (由检索字段目录推导)
    # =========================================================================
    def field_labels(self, itemtype: str) -> Dict[str, str]:
        own_table = KIND_TABLES.get(itemtype)
        labels: Dict[str, str] = {}
        for option in get_options_for_itemtype(itemtype):
            if option.linkfield:
                name = option.linkfield
            elif option.table == own_table:
                name = option.field
            else:
                continue
            if name in EXCLUDED_FIELDS or name in labels:
                continue
            labels[name] = option.name
        return labels

    def fields_eligible_for_lock(self, itemtype: str) -> List[str]:
        return list(self.field_labels(itemtype))
