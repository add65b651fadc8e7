# File: inventory_locks/core/repository/lockedfield_repo.py
"""
文件说明: 字段锁数据仓库 (Lockedfield Repository)
主要功能:
1. 查询某实例的字段锁 (实例锁 + 同类型全局锁)。
2. 按条件删除字段锁，返回实际删除行数。
"""

from typing import Dict, List, Optional, Sequence, Any

from sqlalchemy import and_, delete, false, or_, select, true

from inventory_locks.core.components.db.schema import lockedfields
from inventory_locks.core.repository.base import BaseRepository


class LockedFieldRepository(BaseRepository):

    COLUMNS = ("id", "itemtype", "items_id", "field", "value", "is_global")

    def find_for_item(self, itemtype: str, items_id: int) -> List[Dict[str, Any]]:
        t = lockedfields
        stmt = (
            select(*[t.c[name] for name in self.COLUMNS])
            .where(
                t.c.itemtype == itemtype,
                or_(
                    and_(t.c.items_id == items_id, t.c.is_global == false()),
                    t.c.is_global == true(),
                ),
            )
            .order_by(t.c.id)
        )
        return self.df_records(self.query_df(stmt))

    def delete_where(self, itemtype: str, is_global: bool,
                     items_id: Optional[int] = None,
                     fields: Optional[Sequence[str]] = None) -> int:
        """
        :param fields: None = 所有字段
        :return: 删除行数
        """
        t = lockedfields
        conditions = [t.c.itemtype == itemtype, t.c.is_global == (true() if is_global else false())]
        if items_id is not None:
            conditions.append(t.c.items_id == items_id)
        if fields is not None:
            conditions.append(t.c.field.in_(list(fields)))
        return self.execute_sql(delete(t).where(*conditions))
