# File: inventory_locks/core/services/lock/bulk_unlock.py
"""
# ==============================================================================
# 模块名称: 批量解锁引擎 (Bulk Unlock Engine)
# ==============================================================================
#
# [Purpose / 用途]
# 对一组基础资产 ID 执行一次批量动作，并为每个 ID 返回一条结果:
#   - UnlockFields:      删除所选字段的实例锁
#   - UnlockComponents:  恢复所选类型下已锁定的关联记录 (is_deleted=0)
#   - PurgeComponents:   物理删除所选类型下已锁定的关联记录
#
# [State / 状态]
# 每个 ID 独立: PENDING -> RESOLVING -> APPLYING -> DONE | SKIPPED (无匹配)
#
# [Semantics / 语义]
# - ID 之间互不影响: 一个 ID 失败不会中止或回滚其它 ID。
# - 同一 ID 内各类型/各行独立执行，不回滚: 部分成功 + 任一失败 => Failed。
# - 权限不足 / 存储错误只记录在结果中，从不抛给调用方。
# - 结果数量恒等于请求的 ID 数量，顺序一致。
#
# ==============================================================================
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from inventory_locks.common.settings import settings
from inventory_locks.core.repository.record_repo import RecordRepository
from inventory_locks.core.services.base import BaseService
from inventory_locks.core.services.lock.composer import QueryComposer
from inventory_locks.core.services.lock.descriptors import RelationDescriptor
from inventory_locks.core.services.lock.field_store import FieldLockStore
from inventory_locks.core.services.lock.models import (
    LockCriteria, OutcomeStatus, PurgeComponents, RecordOutcome, UnitState,
    UnlockComponents, UnlockFields, UnlockOutcome,
)
from inventory_locks.core.services.lock.permissions import (
    PURGE, RIGHT_NAMES, UPDATE, AllowAll, PermissionChecker,
)
from inventory_locks.core.services.lock.registry import RelationRegistry
from inventory_locks.core.services.lock.resolver import validate_base_ref
from inventory_locks.core.sys.exceptions import (
    AppValidationError, PermissionDeniedError, PersistenceError,
)

BulkAction = Union[UnlockFields, UnlockComponents, PurgeComponents]

ACTION_UNLOCK_FIELDS = "unlock_fields"
ACTION_UNLOCK_COMPONENTS = "unlock_components"
ACTION_PURGE_COMPONENTS = "purge_components"


def _payload_names(payload: Dict[str, Any], key: str) -> List[str]:
    names = payload.get(key) or []
    if not isinstance(names, (list, tuple)) or not all(isinstance(n, str) for n in names):
        raise AppValidationError(f"'{key}' must be a list of names", details={key: names})
    return list(names)


def action_from_payload(name: str, payload: Dict[str, Any]) -> BulkAction:
    """接口参数 -> 批量动作"""
    if name == ACTION_UNLOCK_FIELDS:
        return UnlockFields(_payload_names(payload, "fields"))
    if name == ACTION_UNLOCK_COMPONENTS:
        return UnlockComponents(_payload_names(payload, "kinds"))
    if name == ACTION_PURGE_COMPONENTS:
        return PurgeComponents(_payload_names(payload, "kinds"))
    raise AppValidationError(f"Unknown bulk action: {name}", details={"action": name})


class _RecordGuard:
    """restore / purge 前的权限校验 + 执行"""

    def __init__(self, records: RecordRepository, permissions: PermissionChecker):
        self.records = records
        self.permissions = permissions

    def apply(self, kind: str, item_id: int, purge: bool) -> bool:
        right = PURGE if purge else UPDATE
        if not self.permissions.can(kind, item_id, right):
            raise PermissionDeniedError(f"No {RIGHT_NAMES[right]} right on {kind} #{item_id}")
        if purge:
            return self.records.delete(kind, item_id)
        return self.records.restore(kind, item_id)


class BulkUnlockEngine(BaseService):

    def __init__(self,
                 registry: Optional[RelationRegistry] = None,
                 composer: Optional[QueryComposer] = None,
                 field_store: Optional[FieldLockStore] = None,
                 records: Optional[RecordRepository] = None,
                 permissions: Optional[PermissionChecker] = None):
        super().__init__()
        self.registry = registry or RelationRegistry.default()
        self.composer = composer or QueryComposer()
        self.field_store = field_store or FieldLockStore()
        self.records = records or RecordRepository()
        self.guard = _RecordGuard(self.records, permissions or AllowAll())

    # =========================================================================
    # 入口
    # =========================================================================
    def run(self, base_kind: str, base_ids: Sequence[int], action: BulkAction) -> List[UnlockOutcome]:
        # 1. 整体校验: 任何非法输入在处理第一个 ID 之前拒绝
        ids = [validate_base_ref(base_kind, base_id) for base_id in base_ids]
        if base_kind not in settings.INVENTORY_TYPES:
            raise AppValidationError(f"Bulk unlock is not available for {base_kind}")

        self.start_timer()
        if isinstance(action, UnlockFields):
            outcomes = [self._unlock_fields(base_kind, base_id, action.field_names) for base_id in ids]
        elif isinstance(action, (UnlockComponents, PurgeComponents)):
            descriptors = self._descriptors_for(action.kinds)
            purge = isinstance(action, PurgeComponents)
            outcomes = [self._apply_components(base_kind, base_id, descriptors, purge) for base_id in ids]
        else:
            raise AppValidationError(f"Unsupported bulk action: {type(action).__name__}")

        failed = sum(1 for o in outcomes if not o.ok)
        self.log(f"📦 批量动作 {type(action).__name__} on {base_kind}: "
                 f"{len(outcomes) - failed} OK / {failed} Failed")
        self.end_timer(f"Bulk {type(action).__name__}")
        return outcomes

    # =========================================================================
    # UnlockFields
    # =========================================================================
    def _unlock_fields(self, base_kind: str, base_id: int, field_names: Tuple[str, ...]) -> UnlockOutcome:
        outcome = UnlockOutcome(base_id=base_id, state=UnitState.RESOLVING)
        criteria = LockCriteria(itemtype=base_kind, items_id=base_id,
                                field_names=field_names, is_global=False)
        try:
            outcome.state = UnitState.APPLYING
            outcome.processed = self.field_store.delete_locks(criteria)
        except PersistenceError as e:
            outcome.state = UnitState.DONE
            self._fail(outcome, base_kind, [e.message])
            return outcome
        # 没有可删除的锁也算成功
        outcome.state = UnitState.DONE if outcome.processed else UnitState.SKIPPED
        return outcome

    # =========================================================================
    # UnlockComponents / PurgeComponents
    # =========================================================================
    def _descriptors_for(self, kinds: Iterable[str]) -> List[RelationDescriptor]:
        expanded = self.registry.expand_kinds(list(kinds))
        if not expanded:
            raise AppValidationError("No component kind selected")
        return [self.registry.require(kind) for kind in expanded]

    def _apply_components(self, base_kind: str, base_id: int,
                          descriptors: List[RelationDescriptor], purge: bool) -> UnlockOutcome:
        outcome = UnlockOutcome(base_id=base_id, state=UnitState.RESOLVING)
        errors: List[str] = []

        # 1. Resolving: 逐类型查找已锁定的行
        matches: List[Tuple[str, int]] = []
        for descriptor in descriptors:
            stmt = self.composer.compose_single(descriptor, base_kind, base_id)
            if stmt is None:
                continue
            try:
                rows = self.records.df_records(self.records.fetch(stmt))
            except PersistenceError as e:
                errors.append(f"{descriptor.related_kind}: {e.message}")
                continue
            matches.extend((row["itemtype"], int(row["id"])) for row in rows)

        if not matches and not errors:
            outcome.state = UnitState.SKIPPED
            return outcome

        # 2. Applying: 每行独立执行，失败不回滚已完成的行
        outcome.state = UnitState.APPLYING
        for kind, row_id in matches:
            try:
                if self.guard.apply(kind, row_id, purge):
                    outcome.processed += 1
                else:
                    errors.append(f"{kind} #{row_id}: record not found")
            except (PermissionDeniedError, PersistenceError) as e:
                errors.append(f"{kind} #{row_id}: {e.message}")

        outcome.state = UnitState.DONE
        if errors:
            self._fail(outcome, base_kind, errors)
        return outcome

    # =========================================================================
    # 失败记录
    # =========================================================================
    def _fail(self, outcome: UnlockOutcome, base_kind: str, errors: List[str]) -> None:
        outcome.status = OutcomeStatus.FAILED
        outcome.errors = list(errors)
        outcome.detail = self._error_detail(base_kind, outcome.base_id, errors)
        self.log(f"❌ {outcome.detail}", level="warning")

    def _error_detail(self, base_kind: str, base_id: int, errors: List[str]) -> str:
        name = f"{base_kind} #{base_id}"
        try:
            item = self.records.get_by_id(base_kind, base_id)
        except PersistenceError:
            item = None
        if item and item.get("name"):
            name = f"{item['name']} ({base_kind} #{base_id})"
        return f"Failed to operate on item: {name} - " + "; ".join(errors)


class LockedRecordActions(BaseService):
    """
    锁表单: 对 resolve() 列出的记录做显式选择后 restore / purge
    selection = {"Computer_Item": [3, 4], "NetworkPort": [12]}
    """

    UNLOCK = "unlock"
    PURGE = "purge"

    def __init__(self, records: Optional[RecordRepository] = None,
                 permissions: Optional[PermissionChecker] = None):
        super().__init__()
        self.records = records or RecordRepository()
        self.guard = _RecordGuard(self.records, permissions or AllowAll())

    def process(self, action: str, selection: Dict[str, Iterable[int]]) -> List[RecordOutcome]:
        if action not in (self.UNLOCK, self.PURGE):
            raise AppValidationError(f"Unknown lock form action: {action}")
        # 整体校验: 类型与 ID 全部合法后才开始处理
        validated = {
            kind: [validate_base_ref(kind, item_id) for item_id in ids]
            for kind, ids in selection.items()
        }

        outcomes: List[RecordOutcome] = []
        for kind, ids in validated.items():
            for item_id in ids:
                outcomes.append(self._process_one(kind, item_id, action == self.PURGE))

        failed = sum(1 for o in outcomes if o.status == OutcomeStatus.FAILED)
        self.log(f"🔓 锁表单 {action}: {len(outcomes) - failed} OK / {failed} Failed")
        return outcomes

    def _process_one(self, kind: str, item_id: int, purge: bool) -> RecordOutcome:
        outcome = RecordOutcome(itemtype=kind, items_id=item_id)
        try:
            row = self.records.get_by_id(kind, item_id)
            # 只处理确实处于锁定状态的行
            if not row or not (row.get("is_dynamic") and row.get("is_deleted")):
                outcome.status = OutcomeStatus.FAILED
                outcome.detail = "record is not locked"
            elif not self.guard.apply(kind, item_id, purge):
                outcome.status = OutcomeStatus.FAILED
                outcome.detail = "record not found"
        except (PermissionDeniedError, PersistenceError) as e:
            outcome.status = OutcomeStatus.FAILED
            outcome.detail = e.message
        return outcome


def run_bulk_unlock(base_kind: str, base_ids: Sequence[int], action: BulkAction,
                    permissions: Optional[PermissionChecker] = None) -> List[UnlockOutcome]:
    """[快捷方式] 使用默认注册表执行批量动作"""
    return BulkUnlockEngine(permissions=permissions).run(base_kind, base_ids, action)
