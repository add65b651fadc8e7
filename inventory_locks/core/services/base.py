# File: inventory_locks/core/services/base.py
"""
# ==============================================================================
# 模块名称: 服务基类 (Base Service)
# ==============================================================================
#
# [Purpose / 用途]
# 锁领域服务 (Resolver / BulkUnlockEngine / LockedRecordActions) 的基类。
# 提供统一的 Logger、上下文 (trace_id / 操作人) 与计时能力。
#
# ==============================================================================
"""

import time
from typing import Optional
from inventory_locks.core.sys.logger import get_logger
from inventory_locks.core.sys.context import get_current_user, get_trace_id

class BaseService:
    def __init__(self, context: Optional[dict] = None):
        """
        :param context: 可选的上下文传递 (如 Request Context)
        """
        self.class_name = self.__class__.__name__
        self.logger = get_logger(self.class_name)
        self.context = context or {}
        self._start_time = None

    def log(self, message: str, level: str = "info"):
        """统一日志记录封装 (附带 trace_id 与操作人)"""
        extra = {"trace_id": get_trace_id(), "user": get_current_user()}
        if level.lower() == "error":
            self.logger.error(message, extra=extra)
        elif level.lower() == "warning":
            self.logger.warning(message, extra=extra)
        else:
            self.logger.info(message, extra=extra)

    def start_timer(self):
        self._start_time = time.time()

    def end_timer(self, operation_name: str = "Operation"):
        """结束计时并记录"""
        if self._start_time:
            elapsed = time.time() - self._start_time
            self.log(f"⏱️ {operation_name} completed in {elapsed:.4f}s")
            self._start_time = None
