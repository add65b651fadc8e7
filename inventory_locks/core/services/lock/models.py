# File: inventory_locks/core/services/lock/models.py
"""
# ==============================================================================
# 模块名称: 锁数据传输对象 (Lock DTOs)
# ==============================================================================
#
# [Purpose / 用途]
# 锁引擎在各层之间传递的内存数据结构:
#   - LockedField / LockCriteria: 字段锁及其删除条件
#   - LockedRecordRef / LockedState: 记录锁查询结果
#   - UnlockFields / UnlockComponents / PurgeComponents: 批量动作
#   - UnlockOutcome: 每个基础资产 ID 一条执行结果
#
# ==============================================================================
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class LockedField:
    """人工修改过、盘点不得再覆盖的字段"""
    id: int
    itemtype: str
    items_id: int
    field: str
    value: Optional[str] = None
    is_global: bool = False


@dataclass(frozen=True)
class LockCriteria:
    """
    字段锁删除条件
    - field_names=None: 所有字段；空列表: 不删除任何行
    - items_id=None: 不按实例过滤
    """
    itemtype: str
    field_names: Optional[Tuple[str, ...]] = None
    is_global: bool = False
    items_id: Optional[int] = None


@dataclass(frozen=True)
class LockedRecordRef:
    """一条被锁定 (is_dynamic=1 且 is_deleted=1) 的关联记录"""
    related_kind: str   # 选择维度 (e.g. "Monitor")
    itemtype: str       # 实际执行 restore/purge 的类型 (e.g. "Computer_Item")
    items_id: int       # 该类型下的行 ID
    actionable: bool = True

    @property
    def sort_key(self) -> Tuple[str, int]:
        return self.related_kind, self.items_id


@dataclass
class LockedState:
    field_locks: List[LockedField] = field(default_factory=list)
    record_locks: List[LockedRecordRef] = field(default_factory=list)

    def records_by_kind(self) -> Dict[str, List[LockedRecordRef]]:
        grouped: Dict[str, List[LockedRecordRef]] = {}
        for ref in sorted(self.record_locks, key=lambda r: r.sort_key):
            grouped.setdefault(ref.related_kind, []).append(ref)
        return grouped


# =========================================================================
# 批量动作
# =========================================================================
@dataclass(frozen=True)
class UnlockFields:
    field_names: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "field_names", tuple(self.field_names))


@dataclass(frozen=True)
class UnlockComponents:
    kinds: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "kinds", tuple(self.kinds))


@dataclass(frozen=True)
class PurgeComponents:
    kinds: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "kinds", tuple(self.kinds))


class OutcomeStatus(str, Enum):
    OK = "OK"
    FAILED = "Failed"


class UnitState(str, Enum):
    """单个基础资产 ID 的处理状态"""
    PENDING = "pending"
    RESOLVING = "resolving"
    APPLYING = "applying"
    DONE = "done"
    SKIPPED = "skipped"


@dataclass
class UnlockOutcome:
    base_id: int
    status: OutcomeStatus = OutcomeStatus.OK
    detail: str = ""
    state: UnitState = UnitState.PENDING
    processed: int = 0   # 成功 restore/purge/删除的行数
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.OK

    def to_dict(self) -> Dict:
        return {
            "base_id": self.base_id,
            "status": self.status.value,
            "detail": self.detail,
            "state": self.state.value,
            "processed": self.processed,
        }


@dataclass
class RecordOutcome:
    """锁表单 (显式选择的行) 的单行执行结果"""
    itemtype: str
    items_id: int
    status: OutcomeStatus = OutcomeStatus.OK
    detail: str = ""

    def to_dict(self) -> Dict:
        return {
            "itemtype": self.itemtype,
            "items_id": self.items_id,
            "status": self.status.value,
            "detail": self.detail,
        }
