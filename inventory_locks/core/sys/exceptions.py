# File: inventory_locks/core/sys/exceptions.py
"""
# ==============================================================================
# 模块名称: 系统异常定义 (System Exceptions)
# ==============================================================================
#
# [Purpose / 用途]
# 定义锁引擎内通用的异常基类，视图层捕获后转换为 StandardResponse。
#
# [Architecture / 架构]
# - AppException (Base)
#   - RegistryFrozenError (启动后注册关联类型)
#   - AuthError -> PermissionDeniedError (权限不足)
#   - AppValidationError -> UnknownItemTypeError (类型非法)
#   - PersistenceError (底层存储错误)
#
# [Propagation / 传播策略]
# - 读路径 (resolve): 直接抛给调用方。
# - 批量解锁: PermissionDeniedError / PersistenceError 记录到逐条结果中，不抛出。
#
# ==============================================================================
"""

class AppException(Exception):
    """通用应用异常基类"""
    def __init__(self, message: str, code: int = 400, details: any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

class RegistryFrozenError(AppException):
    """关联类型注册表已冻结 (仅允许在进程启动阶段注册)"""
    def __init__(self, message: str = "Relation registry is frozen", details: any = None):
        super().__init__(message, code=409, details=details)

class AuthError(AppException):
    """认证与权限错误"""
    def __init__(self, message: str = "Unauthorized", code: int = 401):
        super().__init__(message, code=code)

class PermissionDeniedError(AuthError):
    def __init__(self, message: str = "Permission Denied"):
        super().__init__(message, code=403)

class AppValidationError(AppException):
    """数据校验错误"""
    def __init__(self, message: str = "Validation Failed", details: any = None):
        super().__init__(message, code=422, details=details)

class UnknownItemTypeError(AppValidationError):
    """未知的资产/关联类型"""
    def __init__(self, itemtype: str):
        super().__init__(f"Unknown itemtype: {itemtype}", details={"itemtype": itemtype})
        self.itemtype = itemtype

class PersistenceError(AppException):
    """底层存储错误 (SQLAlchemy 异常包装)"""
    def __init__(self, message: str = "Persistence failure", details: any = None):
        super().__init__(message, code=500, details=details)
