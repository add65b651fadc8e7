# File: inventory_locks/core/services/lock/composer.py
"""
# ==============================================================================
# 模块名称: 锁查询组装器 (Query Composer)
# ==============================================================================
#
# [Purpose / 用途]
# RelationDescriptor + (base_kind, base_id) -> 可执行的 SQLAlchemy 查询。
#
# [Architecture / 架构]
# - 每种 Shape 一个组装算法 (_BUILDERS 分派表)，新增 Shape 需新增变体与算法。
# - 所有查询统一输出三列: related_kind / itemtype (执行类型) / id (行 ID)。
# - compose_single: 单一类型 (批量解锁使用)。
# - compose_union:  所有适用类型合并为一条 UNION (锁列表展示使用)。
# - 不适用 (None) 的描述直接跳过，贡献 0 行而不是报错。
#
# [Ordering / 排序]
# UNION 结果不保证顺序，调用方按 (related_kind, id) 自行排序。
#
# ==============================================================================
"""

from typing import Iterable, List, Optional

from sqlalchemy import MetaData, String, Table, and_, literal, select, union
from sqlalchemy.sql import Select
from sqlalchemy.sql.expression import Selectable

from inventory_locks.core.components.db import schema
from inventory_locks.core.services.lock.descriptors import (
    ConnexityLookup, DirectOwner, IndirectJoin, PolymorphicPair, RelationDescriptor,
    locked_predicate,
)
from inventory_locks.core.sys.exceptions import AppValidationError


class QueryComposer:

    def __init__(self, metadata: MetaData = schema.metadata):
        self.metadata = metadata

    # =========================================================================
    # 对外接口
    # =========================================================================
    def compose_single(self, descriptor: RelationDescriptor, base_kind: str,
                       base_id: int) -> Optional[Select]:
        """单一类型的锁定行查询；不适用时返回 None"""
        if not descriptor.applies_to(base_kind):
            return None
        builder = self._BUILDERS.get(type(descriptor.shape))
        if builder is None:
            raise AppValidationError(f"Unsupported connection shape: {type(descriptor.shape).__name__}")
        return builder(self, descriptor, base_kind, base_id)

    def compose_union(self, base_kind: str, base_id: int,
                      descriptors: Iterable[RelationDescriptor]) -> Optional[Selectable]:
        """全部适用类型合并为一条 UNION；没有任何适用类型时返回 None"""
        selects: List[Select] = []
        for descriptor in descriptors:
            stmt = self.compose_single(descriptor, base_kind, base_id)
            if stmt is not None:
                selects.append(stmt)
        if not selects:
            return None
        if len(selects) == 1:
            return selects[0]
        return union(*selects)

    # =========================================================================
    # 各 Shape 的组装算法
    # =========================================================================
    def _direct_owner(self, descriptor, base_kind, base_id):
        t = self._table(descriptor.shape.table)
        return self._projection(descriptor, t).where(
            t.c.itemtype == base_kind,
            t.c.items_id == base_id,
            locked_predicate(t),
        )

    def _polymorphic_pair(self, descriptor, base_kind, base_id):
        shape: PolymorphicPair = descriptor.shape
        # 连接表只记录 owner_kind (电脑) 的直连外设
        if base_kind != shape.owner_kind:
            return None
        j = self._table(shape.junction)
        return self._projection(descriptor, j).where(
            j.c[shape.owner_column] == base_id,
            j.c[shape.kind_column] == descriptor.related_kind,
            locked_predicate(j),
        )

    def _connexity_lookup(self, descriptor, base_kind, base_id):
        shape: ConnexityLookup = descriptor.shape
        t = self._table(shape.table)
        criteria = shape.rule.search_criteria_for_item(base_kind, base_id, t)
        if criteria is None:
            return None
        return self._projection(descriptor, t).where(criteria, locked_predicate(t))

    def _indirect_join(self, descriptor, base_kind, base_id):
        shape: IndirectJoin = descriptor.shape
        leaf = self._table(shape.table)
        joined = leaf
        child = leaf
        for depth, hop in enumerate(shape.chain):
            parent = self._table(hop.table).alias(f"hop{depth}")
            joined = joined.join(parent, and_(
                child.c.items_id == parent.c.id,
                child.c.itemtype == hop.kind,
            ))
            child = parent
        # child 此时为链的入口，归属于基础资产；只有叶子需要锁定标志
        return self._projection(descriptor, leaf).select_from(joined).where(
            child.c.itemtype == base_kind,
            child.c.items_id == base_id,
            locked_predicate(leaf),
        )

    _BUILDERS = {
        DirectOwner: _direct_owner,
        PolymorphicPair: _polymorphic_pair,
        ConnexityLookup: _connexity_lookup,
        IndirectJoin: _indirect_join,
    }

    # =========================================================================
    # 辅助
    # =========================================================================
    def _table(self, name: str) -> Table:
        try:
            return self.metadata.tables[name]
        except KeyError:
            raise AppValidationError(f"Unknown table: {name}") from None

    @staticmethod
    def _projection(descriptor: RelationDescriptor, table) -> Select:
        return select(
            literal(descriptor.related_kind, String).label("related_kind"),
            literal(descriptor.act_on, String).label("itemtype"),
            table.c[descriptor.result_id_field].label("id"),
        )
