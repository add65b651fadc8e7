# File: inventory_locks/apps/locking/apps.py
"""
# ==============================================================================
# 模块名称: 锁管理应用配置 (Locking Config)
# ==============================================================================
#
# [Purpose / 用途]
# 初始化锁管理应用: 挂载日志，构建并冻结可锁定类型注册表 (含插件钩子)。
#
# ==============================================================================
"""
from django.apps import AppConfig


class LockingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'inventory_locks.apps.locking'
    label = 'locking'

    def ready(self):
        from inventory_locks.core.services.lock.registry import RelationRegistry
        from inventory_locks.core.sys.logger import init_logging

        init_logging()
        # 启动阶段完成全部注册，之后注册表只读
        RelationRegistry.default()
