"""
锁引擎对外接口
- LockedStateResolver.resolve(): 查看锁
- BulkUnlockEngine.run(): 批量解锁
- LockedRecordActions.process(): 锁表单
"""
from inventory_locks.core.services.lock.bulk_unlock import (
    BulkUnlockEngine, LockedRecordActions, run_bulk_unlock,
)
from inventory_locks.core.services.lock.models import (
    LockCriteria, LockedField, LockedRecordRef, LockedState, OutcomeStatus,
    PurgeComponents, UnlockComponents, UnlockFields, UnlockOutcome,
)
from inventory_locks.core.services.lock.registry import RelationRegistry, build_registry
from inventory_locks.core.services.lock.resolver import LockedStateResolver

__all__ = [
    "BulkUnlockEngine", "LockedRecordActions", "run_bulk_unlock",
    "LockCriteria", "LockedField", "LockedRecordRef", "LockedState", "OutcomeStatus",
    "PurgeComponents", "UnlockComponents", "UnlockFields", "UnlockOutcome",
    "RelationRegistry", "build_registry", "LockedStateResolver",
]
