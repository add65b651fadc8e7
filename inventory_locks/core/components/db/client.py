# File: inventory_locks/core/components/db/client.py
"""
文件说明: 数据库客户端 (Database Client)
主要功能:
1. 惰性创建 SQLAlchemy Engine (MySQL 默认，测试可注入 SQLite)。
2. read_df: 查询 -> DataFrame；execute_stmt: 变更 -> 影响行数。
3. [Audit] 每条变更语句写一条底层审计日志 (参数脱敏)。
4. 所有 SQLAlchemy / pandas 数据库异常统一包装为 PersistenceError 向上抛出。
"""

import pandas as pd
import re
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional, Dict, Any, Union

from inventory_locks.common.settings import settings
from inventory_locks.core.components.db import schema
from inventory_locks.core.sys.exceptions import PersistenceError
from inventory_locks.core.sys.logger import get_audit_logger, get_error_logger

audit_logger = get_audit_logger()
error_logger = get_error_logger()


class DBClient:
    _engine: Optional[Engine] = None

    @classmethod
    def get_engine(cls) -> Engine:
        if cls._engine is None:
            url = settings.SQLALCHEMY_URL
            connect_args = {}
            if url.startswith("mysql"):
                # 强制设置连接的默认 collation
                connect_args["init_command"] = "SET NAMES utf8mb4 COLLATE utf8mb4_unicode_ci"
            cls._engine = create_engine(
                url,
                pool_recycle=3600,
                pool_pre_ping=True,
                connect_args=connect_args,
            )
        return cls._engine

    @classmethod
    def use_engine(cls, engine: Engine) -> None:
        """注入外部 Engine (测试 / 宿主服务共享连接池)"""
        cls._engine = engine

    @classmethod
    def reset(cls) -> None:
        if cls._engine is not None:
            cls._engine.dispose()
        cls._engine = None

    @classmethod
    def initialize(cls) -> None:
        """[初始化] 创建锁引擎依赖的表结构"""
        schema.initialize(cls.get_engine())

    @classmethod
    def read_df(cls, sql: Union[str, Any], params: dict = None) -> pd.DataFrame:
        """查询 (str 或 SQLAlchemy Select / Union)"""
        stmt = text(sql) if isinstance(sql, str) else sql
        try:
            with cls.get_engine().connect() as conn:
                return pd.read_sql(stmt, conn, params=params)
        except (SQLAlchemyError, pd.errors.DatabaseError) as e:
            error_logger.error(f"🔥 DATABASE QUERY ERROR: {e} | SQL: {cls._normalize_sql(stmt)}")
            raise PersistenceError(f"Query failed: {e}") from e

    @classmethod
    def execute_stmt(cls, sql: Union[str, Any], params: dict = None) -> int:
        """
        执行变更 (INSERT / UPDATE / DELETE / DDL)
        :return: 影响行数
        """
        meta = cls._parse_sql_meta(sql)
        safe_sql = cls._normalize_sql(sql)
        safe_params = cls._sanitize_params(params)

        try:
            with cls.get_engine().begin() as conn:
                stmt = text(sql) if isinstance(sql, str) else sql
                result = conn.execute(stmt, params if params else {})
                rows_affected = result.rowcount
                meta["rows"] = rows_affected

            audit_logger.info(
                f"[DB] {meta['action']} {meta['table']}",
                extra={
                    "action": meta["action"],
                    "target": meta["table"],
                    "sql": f"{safe_sql} ;; Params: {safe_params}",
                    "status": "Success",
                    "details": f"Rows Affected: {rows_affected}",
                }
            )
            return rows_affected

        except SQLAlchemyError as e:
            audit_logger.critical(
                f"[DB FAILED] {meta['action']} {meta['table']}",
                extra={
                    "action": meta["action"],
                    "target": meta["table"],
                    "sql": f"{safe_sql} ;; Params: {safe_params}",
                    "status": "Failed(System)",
                    "root_cause": str(e),
                }
            )
            raise PersistenceError(f"{meta['action']} {meta['table']} failed: {e}") from e

    # --- 辅助工具 ---

    @staticmethod
    def _parse_sql_meta(sql: Union[str, Any]) -> Dict[str, Any]:
        norm_sql = re.sub(r'\s+', ' ', str(sql).strip().upper())
        meta = {"action": "SQL", "table": "-", "rows": 0}

        first_word = norm_sql.split(' ')[0]
        if first_word in ["INSERT", "UPDATE", "DELETE", "TRUNCATE", "CREATE", "DROP", "ALTER"]:
            meta["action"] = first_word

        # 简单的正则提取表名
        patterns = {
            "UPDATE": r"UPDATE\s+[`'\"]?([A-Z0-9_]+)",
            "DELETE": r"FROM\s+[`'\"]?([A-Z0-9_]+)",
            "INSERT": r"INTO\s+[`'\"]?([A-Z0-9_]+)",
        }
        pattern = patterns.get(meta["action"])
        if pattern:
            m = re.search(pattern, norm_sql)
            if m:
                meta["table"] = m.group(1).lower()
        return meta

    @staticmethod
    def _sanitize_params(params: Optional[Dict]) -> str:
        if not params: return "{}"
        SENSITIVE_KEYS = {'password', 'passwd', 'pwd', 'token', 'secret'}
        safe_copy = {}
        for k, v in params.items():
            if any(s in k.lower() for s in SENSITIVE_KEYS):
                safe_copy[k] = "******"
            else:
                safe_copy[k] = str(v)[:100] + "..." if len(str(v)) > 100 else v
        return str(safe_copy)

    @staticmethod
    def _normalize_sql(sql: Union[str, Any]) -> str:
        s = str(sql).replace('\n', ' ').replace('\r', ' ')
        return re.sub(r'\s+', ' ', s).strip()
