# File: inventory_locks/core/services/lock/descriptors.py
"""
# ==============================================================================
# 模块名称: 可锁定关联描述 (Relation Descriptors)
# ==============================================================================
#
# [Purpose / 用途]
# 声明式描述 "某类关联记录如何连接到基础资产" 以及 "锁定" 的含义。
#
# [Architecture / 架构]
# - Shape (封闭的标签变体，每种对应 QueryComposer 中的一个算法):
#   - DirectOwner:     关联表自带 itemtype/items_id 指向基础资产
#   - PolymorphicPair: 经由 computers_items 连接表 (仅电脑)
#   - ConnexityLookup: 由类型自身的 ConnexityRule 给出 WHERE 片段
#   - IndirectJoin:    经由中间类型链 (IPAddress -> NetworkName -> NetworkPort)
# - locked_predicate(): 唯一的 "已锁定" 判定 (is_dynamic=1 AND is_deleted=1)
#
# ==============================================================================
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Tuple, Union

from sqlalchemy import Table, and_, true
from sqlalchemy.sql.elements import ColumnElement

from inventory_locks.core.components.db.schema import DEVICE_TABLES, DEVICE_TYPES


def locked_predicate(table: Table) -> ColumnElement:
    """Locked(record) = is_dynamic AND is_deleted"""
    return and_(table.c.is_dynamic == true(), table.c.is_deleted == true())


# =========================================================================
# Connexity 能力
# =========================================================================
class ConnexityRule(ABC):
    """类型自带的结构归属规则 (SearchCriteriaForItem)"""

    @abstractmethod
    def search_criteria_for_item(self, base_kind: str, base_id: int,
                                 table: Table) -> Optional[ColumnElement]:
        """返回 WHERE 片段；None 表示该类型不适用于此基础资产"""


class ItemDeviceConnexity(ConnexityRule):
    """硬件组件: itemtype/items_id 归属，仅限拥有组件的资产类型"""

    def __init__(self, base_kinds: Iterable[str]):
        self.base_kinds = frozenset(base_kinds)

    def search_criteria_for_item(self, base_kind, base_id, table):
        if base_kind not in self.base_kinds:
            return None
        return and_(table.c.itemtype == base_kind, table.c.items_id == base_id)


# =========================================================================
# Shape 变体
# =========================================================================
@dataclass(frozen=True)
class DirectOwner:
    table: str


@dataclass(frozen=True)
class PolymorphicPair:
    junction: str                   # e.g. computers_items
    owner_kind: str = "Computer"
    owner_column: str = "computers_id"
    kind_column: str = "itemtype"


@dataclass(frozen=True)
class ConnexityLookup:
    table: str
    rule: ConnexityRule


@dataclass(frozen=True)
class JoinHop:
    """链上的一个中间类型"""
    kind: str
    table: str


@dataclass(frozen=True)
class IndirectJoin:
    table: str                      # 叶子表 (实际被锁定的行)
    chain: Tuple[JoinHop, ...]      # 从叶子的直接父级到入口 (归属于基础资产) 的顺序


ConnectionShape = Union[DirectOwner, PolymorphicPair, ConnexityLookup, IndirectJoin]


@dataclass(frozen=True)
class RelationDescriptor:
    related_kind: str
    shape: ConnectionShape
    target_kind: Optional[str] = None       # restore/purge 作用的类型，默认等于 related_kind
    result_id_field: str = "id"
    label: str = ""
    base_kinds: Optional[FrozenSet[str]] = None   # None = 所有基础类型

    @property
    def act_on(self) -> str:
        return self.target_kind or self.related_kind

    def applies_to(self, base_kind: str) -> bool:
        return self.base_kinds is None or base_kind in self.base_kinds


# =========================================================================
# 静态种子
# =========================================================================
DEVICE_PSEUDO_KIND = "Device"

_DIRECT_CONNECT = (
    ("Monitor", "Monitors"),
    ("Peripheral", "Devices"),
    ("Printer", "Printers"),
    ("Phone", "Phones"),
)

_NETWORK_PORT = JoinHop("NetworkPort", "networkports")
_NETWORK_NAME = JoinHop("NetworkName", "networknames")


def default_descriptors(device_base_kinds: Iterable[str]) -> List[RelationDescriptor]:
    """一等可锁定类型，每类一个描述 (顺序即展示/选择顺序)"""
    descriptors = [
        RelationDescriptor(kind, PolymorphicPair("computers_items"),
                           target_kind="Computer_Item", label=label)
        for kind, label in _DIRECT_CONNECT
    ]
    descriptors += [
        RelationDescriptor("SoftwareVersion", DirectOwner("items_softwareversions"),
                           target_kind="Item_SoftwareVersion", label="Software versions"),
        RelationDescriptor("SoftwareLicense", DirectOwner("items_softwarelicenses"),
                           target_kind="Item_SoftwareLicense", label="Licenses"),
        RelationDescriptor("NetworkPort", DirectOwner("networkports"), label="Network ports"),
        RelationDescriptor("NetworkName", IndirectJoin("networknames", (_NETWORK_PORT,)),
                           label="Network names"),
        RelationDescriptor("IPAddress", IndirectJoin("ipaddresses", (_NETWORK_NAME, _NETWORK_PORT)),
                           label="IP addresses"),
        RelationDescriptor("Item_Disk", DirectOwner("items_disks"), label="Volumes"),
        RelationDescriptor("ItemVirtualMachine", DirectOwner("itemvirtualmachines"),
                           label="Virtual machines"),
        RelationDescriptor("DatabaseInstance", DirectOwner("databaseinstances"),
                           label="Database instances"),
        RelationDescriptor("Domain_Item", DirectOwner("domains_items"), label="Domains"),
    ]
    rule = ItemDeviceConnexity(device_base_kinds)
    for kind in DEVICE_TYPES:
        table, _fk = DEVICE_TABLES[kind]
        descriptors.append(RelationDescriptor(
            kind, ConnexityLookup(table, rule),
            label=kind.replace("Item_Device", "") + " components",
        ))
    return descriptors
