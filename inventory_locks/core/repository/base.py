# File: inventory_locks/core/repository/base.py
"""
# ==============================================================================
# 模块名称: 仓库基类 (Base Repository)
# ==============================================================================
#
# [Purpose / 用途]
# 所有数据仓库 (Repository) 的基类。
# 封装 DBClient 的底层调用，提供统一的查询接口和类型清洗。
#
# [Architecture / 架构]
# - Layer: Data Access Layer
# - Capabilities:
#   - SQL Execution: execute_sql (返回影响行数)
#   - DataFrame Loading: query_df
#   - Row Conversion: df_records (numpy 标量 -> Python 原生类型)
#
# ==============================================================================
"""

import numpy as np
import pandas as pd
from typing import List, Dict, Any, Optional
from inventory_locks.core.components.db.client import DBClient
from inventory_locks.core.sys.logger import get_logger

class BaseRepository:
    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def execute_sql(self, sql: Any, params: Optional[Dict] = None) -> int:
        """执行变更 (Update/Insert/Delete)，异常向上抛出"""
        return DBClient.execute_stmt(sql, params)

    def query_df(self, sql: Any, params: Optional[Dict] = None) -> pd.DataFrame:
        """查询并返回 DataFrame"""
        return DBClient.read_df(sql, params)

    @staticmethod
    def df_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
        """
        [工具方法] DataFrame -> list[dict]
        NaN 转 None，numpy 标量转 Python 原生类型。
        """
        if df.empty:
            return []
        clean = df.astype(object).where(pd.notna(df), None)
        rows = []
        for record in clean.to_dict(orient="records"):
            rows.append({k: (v.item() if isinstance(v, np.generic) else v) for k, v in record.items()})
        return rows
