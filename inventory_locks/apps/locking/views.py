# File: inventory_locks/apps/locking/views.py
"""
# ==============================================================================
# 模块名称: 锁管理 API 视图 (Locking Views)
# ==============================================================================
#
# [Purpose / 用途]
# 对外暴露锁引擎的四个入口:
#   - GET  items/<itemtype>/<id>/  查看字段锁 + 记录锁
#   - GET  fields/<itemtype>/      可选解锁字段
#   - POST bulk/                   批量解锁 (逐 ID 返回 OK / Failed)
#   - POST records/                锁表单 unlock / purge
#
# [Architecture / 架构]
# - Auth: IsAuthenticated + DjangoUserRights (按类型的 locking.* 权限)。
# - Errors: AppException -> StandardResponse.from_exception (code 即 HTTP 状态)。
# - 批量结果中的单条失败不影响 HTTP 状态 (始终 200)。
#
# ==============================================================================
"""

from dataclasses import asdict

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from inventory_locks.apps.locking.permissions import DjangoUserRights
from inventory_locks.core.components.db.schema import is_known_kind
from inventory_locks.core.services.lock.bulk_unlock import (
    BulkUnlockEngine, LockedRecordActions, action_from_payload,
)
from inventory_locks.core.services.lock.field_store import FieldLockStore, effective_locks
from inventory_locks.core.services.lock.models import OutcomeStatus
from inventory_locks.core.services.lock.permissions import READ, UPDATE
from inventory_locks.core.services.lock.resolver import LockedStateResolver, validate_base_ref
from inventory_locks.core.sys.context import clear_context, set_context
from inventory_locks.core.sys.exceptions import (
    AppException, AppValidationError, PermissionDeniedError, UnknownItemTypeError,
)
from inventory_locks.core.sys.response import StandardResponse


def _bind_context(request, function: str) -> None:
    """每个请求重新生成上下文 (操作人 + trace_id)"""
    clear_context()
    set_context(
        username=request.user.username,
        function=function,
        trace_id=request.headers.get('X-Trace-Id'),
    )


def _require(checker: DjangoUserRights, kind: str, item_id, right: int) -> None:
    if not checker.can(kind, item_id, right):
        raise PermissionDeniedError(f"Permission denied on {kind}")


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def item_locks(request, itemtype, item_id):
    """
    [API] 资产当前的锁
    Response.data: { field_locks: [...], record_locks: { "Monitor": [...], ... } }
    """
    _bind_context(request, 'Locking.View')
    checker = DjangoUserRights(request.user)
    try:
        item_id = validate_base_ref(itemtype, item_id)
        _require(checker, itemtype, item_id, READ)
        state = LockedStateResolver(permissions=checker).resolve(itemtype, item_id)
    except AppException as e:
        return StandardResponse.from_exception(e)

    effective = effective_locks(state.field_locks)
    return StandardResponse.success({
        "itemtype": itemtype,
        "items_id": item_id,
        "field_locks": [
            {**asdict(lock), "effective": effective[lock.field].id == lock.id}
            for lock in state.field_locks
        ],
        "record_locks": {
            kind: [asdict(ref) for ref in refs]
            for kind, refs in state.records_by_kind().items()
        },
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def lockable_fields(request, itemtype):
    """[API] 可选解锁字段: { field: label }"""
    _bind_context(request, 'Locking.Fields')
    try:
        if not is_known_kind(itemtype):
            raise UnknownItemTypeError(itemtype)
        labels = FieldLockStore().field_labels(itemtype)
    except AppException as e:
        return StandardResponse.from_exception(e)
    return StandardResponse.success({"itemtype": itemtype, "fields": labels})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def bulk_unlock(request):
    """
    [API] 批量解锁
    Payload: {
        "itemtype": "Computer",
        "ids": [1, 2],
        "action": "unlock_fields" | "unlock_components" | "purge_components",
        "fields": ["serial"],          # unlock_fields
        "kinds": ["Monitor", "Device"] # unlock_components / purge_components
    }
    """
    _bind_context(request, 'Locking.Bulk')
    data = request.data
    itemtype = data.get('itemtype')
    ids = data.get('ids')
    checker = DjangoUserRights(request.user)

    try:
        if not isinstance(itemtype, str) or not is_known_kind(itemtype):
            raise UnknownItemTypeError(str(itemtype))
        if not isinstance(ids, list) or not ids:
            raise AppValidationError("Missing ids", details={"ids": ids})
        action = action_from_payload(data.get('action'), data)
        _require(checker, itemtype, None, UPDATE)
        outcomes = BulkUnlockEngine(permissions=checker).run(itemtype, ids, action)
    except AppException as e:
        return StandardResponse.from_exception(e)

    failed = sum(1 for o in outcomes if o.status == OutcomeStatus.FAILED)
    return StandardResponse.success({
        "itemtype": itemtype,
        "action": data.get('action'),
        "outcomes": [o.to_dict() for o in outcomes],
        "summary": {"ok": len(outcomes) - failed, "failed": failed},
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def locked_records(request):
    """
    [API] 锁表单
    Payload: { "action": "unlock" | "purge", "items": { "NetworkPort": [12, 13] } }
    """
    _bind_context(request, 'Locking.Records')
    data = request.data
    items = data.get('items')

    try:
        if not isinstance(items, dict) or not items:
            raise AppValidationError("Missing items", details={"items": items})
        outcomes = LockedRecordActions(permissions=DjangoUserRights(request.user)).process(
            data.get('action'), items,
        )
    except AppException as e:
        return StandardResponse.from_exception(e)

    failed = sum(1 for o in outcomes if o.status == OutcomeStatus.FAILED)
    return StandardResponse.success({
        "action": data.get('action'),
        "outcomes": [o.to_dict() for o in outcomes],
        "summary": {"ok": len(outcomes) - failed, "failed": failed},
    })
