# File: inventory_locks/apps/locking/management/commands/init_lock_schema.py
"""
初始化锁引擎表结构
仅创建缺失的表 (CREATE IF NOT EXISTS)，已有数据不受影响
"""
from django.core.management.base import BaseCommand

from inventory_locks.core.components.db import schema
from inventory_locks.core.components.db.client import DBClient


class Command(BaseCommand):
    help = '创建锁引擎依赖的资产表、关联表与 lockedfields 表（已存在则跳过）'

    def handle(self, *args, **options):
        DBClient.initialize()
        self.stdout.write(self.style.SUCCESS(f"✅ 表结构已就绪: {len(schema.metadata.tables)} 张表"))
