# File: inventory_locks/core/sys/logger.py
"""
日志系统入口
保持旧 API (get_logger / get_audit_logger / get_error_logger / init_logging)，
内部统一转发到标准库 logging，命名空间为 inventory_locks.*

- 业务日志: get_logger("BulkUnlockEngine")
- 审计日志: get_audit_logger()  (DBClient 每条变更语句一条记录)
- 错误日志: get_error_logger()
"""
import logging
from typing import Optional

from inventory_locks.common.settings import settings

ROOT_NAME = "inventory_locks"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """按类名/模块名获取业务日志器"""
    if not name:
        return logging.getLogger(ROOT_NAME)
    return logging.getLogger(f"{ROOT_NAME}.{name}")


def get_audit_logger() -> logging.Logger:
    """底层审计日志器 (SQL 变更)"""
    return logging.getLogger(f"{ROOT_NAME}.audit")


def get_error_logger() -> logging.Logger:
    """系统错误日志器"""
    return logging.getLogger(f"{ROOT_NAME}.error")


def init_logging(level: Optional[str] = None) -> None:
    """
    [初始化] 挂载控制台 (及可选文件) Handler
    重复调用不会重复挂载。
    """
    root = logging.getLogger(ROOT_NAME)
    root.setLevel((level or settings.LOG_LEVEL).upper())
    if root.handlers:
        return

    formatter = logging.Formatter(_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if settings.LOG_TO_FILE:
        settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.LOG_DIR / "inventory_locks.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
