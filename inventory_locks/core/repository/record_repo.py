# File: inventory_locks/core/repository/record_repo.py
"""
# ==============================================================================
# 模块名称: 通用记录仓库 (Record Repository)
# ==============================================================================
#
# [Purpose / 用途]
# 锁引擎消费的持久层能力，按 itemtype 分派到对应物理表:
#   - fetch(stmt)        -> DataFrame
#   - get_by_id(kind,id) -> dict | None
#   - restore(kind,id)   -> bool  (is_deleted=0，不动 is_dynamic，不写历史)
#   - delete(kind,id)    -> bool  (物理删除 / purge)
#
# [Error / 错误]
# 数据库异常以 PersistenceError 抛出；目标行不存在返回 False。
#
# ==============================================================================
"""

from typing import Any, Dict, Optional

import pandas as pd
from sqlalchemy import delete, false, select, update

from inventory_locks.core.components.db.schema import table_for_kind
from inventory_locks.core.repository.base import BaseRepository


class RecordRepository(BaseRepository):

    def fetch(self, stmt: Any) -> pd.DataFrame:
        return self.query_df(stmt)

    def get_by_id(self, kind: str, item_id: int) -> Optional[Dict[str, Any]]:
        t = table_for_kind(kind)
        rows = self.df_records(self.query_df(select(t).where(t.c.id == item_id)))
        return rows[0] if rows else None

    def restore(self, kind: str, item_id: int) -> bool:
        t = table_for_kind(kind)
        stmt = update(t).where(t.c.id == item_id).values(is_deleted=false())
        return self.execute_sql(stmt) > 0

    def delete(self, kind: str, item_id: int) -> bool:
        t = table_for_kind(kind)
        return self.execute_sql(delete(t).where(t.c.id == item_id)) > 0
