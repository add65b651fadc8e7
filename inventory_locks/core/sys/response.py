# File: inventory_locks/core/sys/response.py
"""
# ==============================================================================
# 模块名称: 标准响应格式 (Standard Response)
# ==============================================================================
#
# [Purpose / 用途]
# 锁接口统一的 JSON 结构:
#   {
#       "status": "success" | "error",
#       "code": int,
#       "message": str,
#       "data" | "errors": any,
#       "meta": {"timestamp", "trace_id", ...}
#   }
#
# ==============================================================================
"""

from django.http import JsonResponse
from typing import Any, Dict, Optional
from datetime import datetime
from inventory_locks.core.sys.context import get_trace_id
from inventory_locks.core.sys.exceptions import AppException


def _meta(extra: Optional[Dict] = None) -> Dict[str, Any]:
    return {
        "timestamp": datetime.now().isoformat(),
        "trace_id": get_trace_id(),
        **(extra or {})
    }


class StandardResponse:
    @staticmethod
    def success(data: Any = None, msg: str = "Success", meta: Optional[Dict] = None) -> JsonResponse:
        """返回成功响应 (HTTP 200)"""
        payload = {
            "status": "success",
            "code": 200,
            "message": msg,
            "data": data,
            "meta": _meta(meta),
        }
        return JsonResponse(payload, status=200)

    @staticmethod
    def error(msg: str = "Error", code: int = 400, errors: Any = None, http_status: int = None) -> JsonResponse:
        """
        返回错误响应
        :param code: 业务错误码 (默认与 HTTP 状态码一致)
        :param http_status: 实际 HTTP 响应码 (默认等于 code)
        """
        payload = {
            "status": "error",
            "code": code,
            "message": msg,
            "errors": errors,
            "meta": _meta(),
        }
        return JsonResponse(payload, status=http_status if http_status else code)

    @classmethod
    def from_exception(cls, exc: AppException) -> JsonResponse:
        """AppException -> 错误响应 (沿用异常自带的 code)"""
        return cls.error(msg=exc.message, code=exc.code, errors=exc.details)
