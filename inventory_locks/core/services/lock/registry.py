# File: inventory_locks/core/services/lock/registry.py
"""
# ==============================================================================
# 模块名称: 可锁定类型注册表 (Relation Registry)
# ==============================================================================
#
# [Purpose / 用途]
# related_kind -> RelationDescriptor 的映射。
# 读路径 (LockedStateResolver) 与写路径 (BulkUnlockEngine) 共用同一份注册表。
#
# [Lifecycle / 生命周期]
# 1. build_registry(): 静态种子 + 插件钩子 (LOCKABLE_KIND_HOOKS) 各调用一次。
# 2. freeze(): 之后只读，并发读无需加锁。
# 3. 冻结后 extend() 抛 RegistryFrozenError；首次 resolve/all_kinds 会隐式冻结。
#
# ==============================================================================
"""

import importlib
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from inventory_locks.common.settings import settings
from inventory_locks.core.components.db.schema import DEVICE_TYPES, is_known_kind, metadata
from inventory_locks.core.services.lock.descriptors import (
    DEVICE_PSEUDO_KIND, ConnectionShape, IndirectJoin, PolymorphicPair,
    RelationDescriptor, default_descriptors,
)
from inventory_locks.core.sys.exceptions import (
    AppValidationError, RegistryFrozenError, UnknownItemTypeError,
)
from inventory_locks.core.sys.logger import get_logger

logger = get_logger("RelationRegistry")

LockableKindsHook = Callable[[], Iterable[RelationDescriptor]]


def _shape_tables(shape: ConnectionShape) -> List[str]:
    if isinstance(shape, PolymorphicPair):
        return [shape.junction]
    if isinstance(shape, IndirectJoin):
        return [shape.table] + [hop.table for hop in shape.chain]
    return [shape.table]


class RelationRegistry:
    _default: Optional["RelationRegistry"] = None

    def __init__(self, descriptors: Iterable[RelationDescriptor] = ()):
        self._descriptors: Dict[str, RelationDescriptor] = {}
        self._frozen = False
        for descriptor in descriptors:
            self.extend(descriptor)

    # --- 注册 (仅启动阶段) ---

    def extend(self, descriptor: RelationDescriptor) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{descriptor.related_kind}' after the registry was frozen",
                details={"related_kind": descriptor.related_kind},
            )
        if descriptor.related_kind == DEVICE_PSEUDO_KIND:
            raise AppValidationError(f"'{DEVICE_PSEUDO_KIND}' is reserved")
        if descriptor.related_kind in self._descriptors:
            raise AppValidationError(f"Relation kind already registered: {descriptor.related_kind}")
        # restore / purge 作用的类型与查询涉及的表必须在启动时就已声明
        if not is_known_kind(descriptor.act_on):
            raise UnknownItemTypeError(descriptor.act_on)
        missing = [t for t in _shape_tables(descriptor.shape) if t not in metadata.tables]
        if missing:
            raise AppValidationError(
                f"Relation kind {descriptor.related_kind} uses undeclared tables: {missing}",
                details={"related_kind": descriptor.related_kind, "tables": missing},
            )
        self._descriptors[descriptor.related_kind] = descriptor

    def freeze(self) -> "RelationRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # --- 只读查询 ---

    def resolve(self, related_kind: str) -> Tuple[Optional[RelationDescriptor], bool]:
        self._frozen = True
        descriptor = self._descriptors.get(related_kind)
        return descriptor, descriptor is not None

    def all_kinds(self) -> Tuple[str, ...]:
        self._frozen = True
        return tuple(self._descriptors)

    def descriptors(self) -> List[RelationDescriptor]:
        self._frozen = True
        return list(self._descriptors.values())

    def require(self, related_kind: str) -> RelationDescriptor:
        descriptor, found = self.resolve(related_kind)
        if not found:
            raise UnknownItemTypeError(related_kind)
        return descriptor

    def expand_kinds(self, kinds: Sequence[str]) -> List[str]:
        """展开 "Device" 伪类型为全部已注册的硬件组件类型 (保序去重)"""
        expanded: List[str] = []
        for kind in kinds:
            members = [k for k in DEVICE_TYPES if k in self._descriptors] if kind == DEVICE_PSEUDO_KIND else [kind]
            for member in members:
                if member not in expanded:
                    expanded.append(member)
        return expanded

    # --- 进程级默认实例 ---

    @classmethod
    def default(cls) -> "RelationRegistry":
        if cls._default is None:
            cls._default = build_registry()
        return cls._default

    @classmethod
    def reset_default(cls) -> None:
        cls._default = None


def load_hook(path: str) -> LockableKindsHook:
    """解析 "package.module:callable" 形式的钩子路径"""
    module_name, _, attr = path.partition(":")
    if not attr:
        raise AppValidationError(f"Invalid hook path (expected 'module:callable'): {path}")
    module = importlib.import_module(module_name)
    return getattr(module, attr)


def build_registry(hooks: Optional[Iterable[LockableKindsHook]] = None,
                   device_base_kinds: Optional[Iterable[str]] = None) -> RelationRegistry:
    """
    [启动] 构建并冻结注册表
    :param hooks: 插件钩子；None 时读取 settings.LOCKABLE_KIND_HOOKS
    """
    if device_base_kinds is None:
        device_base_kinds = settings.DEVICE_ITEM_TYPES
    registry = RelationRegistry(default_descriptors(device_base_kinds))

    if hooks is None:
        hooks = [load_hook(path) for path in settings.LOCKABLE_KIND_HOOKS]
    for hook in hooks:
        contributed = list(hook())
        for descriptor in contributed:
            registry.extend(descriptor)
        logger.info(f"插件注册可锁定类型: {[d.related_kind for d in contributed]}")

    return registry.freeze()
