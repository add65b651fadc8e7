"""
测试辅助: 内存 SQLite + 种子数据
每个用例独立一个 Engine (StaticPool 保证同一连接)，通过 DBClient.use_engine 注入。
"""

import unittest
from typing import Any, Dict, Optional

from sqlalchemy import create_engine, func, insert, select
from sqlalchemy.pool import StaticPool

from inventory_locks.core.components.db import schema
from inventory_locks.core.components.db.client import DBClient


def make_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    schema.initialize(engine)
    return engine


class LockDatabaseMixin:
    """为用例准备一份空的锁引擎数据库"""

    def setUp(self):
        super().setUp()
        self.engine = make_engine()
        DBClient.use_engine(self.engine)

    def tearDown(self):
        DBClient.reset()
        super().tearDown()

    # --- 写入 ---

    def insert(self, table_name: str, **values: Any) -> int:
        table = schema.metadata.tables[table_name]
        with self.engine.begin() as conn:
            return conn.execute(insert(table).values(**values)).inserted_primary_key[0]

    def add_computer(self, item_id: int, name: str = "pc") -> int:
        return self.insert("computers", id=item_id, name=name)

    def add_field_lock(self, itemtype: str, items_id: int, field: str,
                       is_global: bool = False, value: Optional[str] = None) -> int:
        return self.insert("lockedfields", itemtype=itemtype, items_id=0 if is_global else items_id,
                           field=field, is_global=is_global, value=value)

    def add_owned(self, table_name: str, itemtype: str, items_id: int,
                  locked: bool = True, **values: Any) -> int:
        """归属于 (itemtype, items_id) 的关联行；locked=True 即 is_dynamic=1 且 is_deleted=1"""
        return self.insert(table_name, itemtype=itemtype, items_id=items_id,
                           is_dynamic=True, is_deleted=locked, **values)

    def add_connection(self, computers_id: int, itemtype: str, items_id: int, locked: bool = True) -> int:
        return self.insert("computers_items", computers_id=computers_id, itemtype=itemtype,
                           items_id=items_id, is_dynamic=True, is_deleted=locked)

    # --- 读取 ---

    def row(self, table_name: str, item_id: int) -> Optional[Dict[str, Any]]:
        table = schema.metadata.tables[table_name]
        with self.engine.connect() as conn:
            found = conn.execute(select(table).where(table.c.id == item_id)).mappings().first()
        return dict(found) if found else None

    def count(self, table_name: str) -> int:
        table = schema.metadata.tables[table_name]
        with self.engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(table)).scalar()


class LockDatabaseTestCase(LockDatabaseMixin, unittest.TestCase):
    pass
