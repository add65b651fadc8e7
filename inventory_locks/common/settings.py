# File: inventory_locks/common/settings.py
"""
文件说明: 全局配置中心 (Settings)
主要功能:
1. 路径定义与环境加载 (.env)。
2. 数据库连接字符串生成 (MySQL 默认, DB_URL 可整体覆盖)。
3. 锁引擎参数: UNION 分批大小、插件钩子、可盘点资产类型。
"""

import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv

# 加载 .env 环境变量
load_dotenv()


def _split_env(name: str, default: str = "") -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    # =========================================================================
    # 1. 路径定义 (Path Definitions)
    # =========================================================================
    # Points to project root (common -> inventory_locks -> root)
    BASE_DIR = Path(__file__).resolve().parent.parent.parent
    LOG_DIR = Path(os.getenv("LOG_DIR", str(BASE_DIR / "logs")))

    # =========================================================================
    # 2. 版本与元数据
    # =========================================================================
    APP_NAME = "Inventory Locks"
    APP_VERSION = "V1.0.0"

    # =========================================================================
    # 3. 数据库配置
    # =========================================================================
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = int(os.getenv("DB_PORT", 3306))
    DB_USER = os.getenv("DB_USER", "root")
    DB_PASS = os.getenv("DB_PASS", "")
    DB_NAME = os.getenv("DB_NAME", "glpi")
    DB_CHARSET = os.getenv("DB_CHARSET", "utf8mb4")
    DB_URL = os.getenv("DB_URL", "")

    @property
    def SQLALCHEMY_URL(self):
        # DB_URL 优先 (测试/SQLite 场景), 否则拼装 MySQL 连接串
        if self.DB_URL:
            return self.DB_URL
        return f"mysql+pymysql://{self.DB_USER}:{self.DB_PASS}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset={self.DB_CHARSET}"

    # =========================================================================
    # 4. 日志配置
    # =========================================================================
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_TO_FILE = os.getenv("LOG_TO_FILE", "false").lower() == "true"

    # =========================================================================
    # 5. 锁引擎参数
    # =========================================================================
    # 单条 UNION 查询最多合并的关联类型数量 (超出则分批执行)
    LOCK_UNION_BATCH_SIZE = int(os.getenv("LOCK_UNION_BATCH_SIZE", 32))

    # 插件钩子: "module.path:callable"，启动时调用一次，返回额外的 RelationDescriptor
    LOCKABLE_KIND_HOOKS = _split_env("LOCKABLE_KIND_HOOKS")

    # 允许批量解锁的资产类型
    INVENTORY_TYPES = _split_env(
        "INVENTORY_TYPES",
        "Computer,NetworkEquipment,Printer,Phone,Peripheral,Monitor",
    )

    # 拥有硬件组件 (Item_Device*) 的资产类型
    DEVICE_ITEM_TYPES = _split_env(
        "DEVICE_ITEM_TYPES",
        "Computer,NetworkEquipment,Printer,Phone,Peripheral",
    )


settings = Settings()
