# File: inventory_locks/core/services/lock/resolver.py
"""
# ==============================================================================
# 模块名称: 锁状态查询 (Locked State Resolver)
# ==============================================================================
#
# [Purpose / 用途]
# 回答 "基础资产 X 当前有哪些锁": 字段锁 + 记录锁。
#
# [Architecture / 架构]
# - 字段锁: FieldLockStore.list_locks_for
# - 记录锁: RelationRegistry 全部类型 -> QueryComposer.compose_union
#           -> 一条物理 UNION 查询 (超过 LOCK_UNION_BATCH_SIZE 时分批)
# - 结果不排序，展示顺序由调用方决定。
#
# ==============================================================================
"""

from typing import Iterable, List, Optional, Sequence

from inventory_locks.common.settings import settings
from inventory_locks.core.components.db.schema import is_known_kind
from inventory_locks.core.repository.record_repo import RecordRepository
from inventory_locks.core.services.base import BaseService
from inventory_locks.core.services.lock.composer import QueryComposer
from inventory_locks.core.services.lock.descriptors import RelationDescriptor
from inventory_locks.core.services.lock.field_store import FieldLockStore
from inventory_locks.core.services.lock.models import LockedRecordRef, LockedState
from inventory_locks.core.services.lock.permissions import PURGE, UPDATE, PermissionChecker
from inventory_locks.core.services.lock.registry import RelationRegistry
from inventory_locks.core.sys.exceptions import AppValidationError, UnknownItemTypeError


def validate_base_ref(base_kind: str, base_id) -> int:
    """基础资产引用校验，非法时整体拒绝请求"""
    if not isinstance(base_kind, str) or not is_known_kind(base_kind):
        raise UnknownItemTypeError(str(base_kind))
    if isinstance(base_id, bool):
        raise AppValidationError(f"Invalid id for {base_kind}: {base_id!r}")
    try:
        item_id = int(base_id)
    except (TypeError, ValueError):
        raise AppValidationError(f"Invalid id for {base_kind}: {base_id!r}") from None
    if item_id <= 0:
        raise AppValidationError(f"Invalid id for {base_kind}: {base_id!r}")
    return item_id


def _batches(items: Sequence[RelationDescriptor], size: int) -> Iterable[Sequence[RelationDescriptor]]:
    size = max(1, size)
    for start in range(0, len(items), size):
        yield items[start:start + size]


class LockedStateResolver(BaseService):

    def __init__(self,
                 registry: Optional[RelationRegistry] = None,
                 composer: Optional[QueryComposer] = None,
                 field_store: Optional[FieldLockStore] = None,
                 records: Optional[RecordRepository] = None,
                 permissions: Optional[PermissionChecker] = None,
                 batch_size: Optional[int] = None):
        super().__init__()
        self.registry = registry or RelationRegistry.default()
        self.composer = composer or QueryComposer()
        self.field_store = field_store or FieldLockStore()
        self.records = records or RecordRepository()
        self.permissions = permissions
        self.batch_size = batch_size or settings.LOCK_UNION_BATCH_SIZE

    def resolve(self, base_kind: str, base_id: int) -> LockedState:
        base_id = validate_base_ref(base_kind, base_id)
        return LockedState(
            field_locks=self.field_store.list_locks_for(base_kind, base_id),
            record_locks=self.find_record_locks(base_kind, base_id),
        )

    def find_record_locks(self, base_kind: str, base_id: int,
                          kinds: Optional[Sequence[str]] = None) -> List[LockedRecordRef]:
        """
        :param kinds: 仅查询指定类型 (支持 "Device")；None = 全部已注册类型
        """
        if kinds is None:
            descriptors = self.registry.descriptors()
        else:
            descriptors = [self.registry.require(k) for k in self.registry.expand_kinds(kinds)]

        refs: List[LockedRecordRef] = []
        for batch in _batches(descriptors, self.batch_size):
            stmt = self.composer.compose_union(base_kind, base_id, batch)
            if stmt is None:
                continue
            for row in self.records.df_records(self.records.fetch(stmt)):
                itemtype, items_id = row["itemtype"], int(row["id"])
                refs.append(LockedRecordRef(
                    related_kind=row["related_kind"],
                    itemtype=itemtype,
                    items_id=items_id,
                    actionable=self._actionable(itemtype, items_id),
                ))
        return refs

    def _actionable(self, itemtype: str, items_id: int) -> bool:
        if self.permissions is None:
            return True
        return self.permissions.can_any(itemtype, items_id, UPDATE, PURGE)
