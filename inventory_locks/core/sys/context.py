# File: inventory_locks/core/sys/context.py
"""
文件说明: 全局请求/用户上下文管理 (Request / User Context)
主要功能:
1. 在 contextvars 中保存当前操作人与 trace_id。
2. 批量解锁的日志与结果通过 trace_id 关联到同一次请求。
"""

from dataclasses import dataclass
from typing import Optional
import contextvars
import uuid


@dataclass
class RequestContext:
    """
    [上下文模型]
    存储当前请求的元数据，确保在多层调用中无需显式传递这些参数。
    """
    username: Optional[str] = None  # 当前操作人
    function: Optional[str] = "System"  # 当前功能模块名
    trace_id: Optional[str] = None  # 全链路追踪码 (UUID)


# 上下文存储容器 (线程/协程隔离)
_current_ctx: contextvars.ContextVar[RequestContext] = contextvars.ContextVar(
    "current_request_context",
    default=RequestContext()
)


def set_context(username: Optional[str] = None,
                function: Optional[str] = None,
                trace_id: Optional[str] = None) -> None:
    """
    [入口] 设置当前上下文 (支持增量更新)
    未传入且当前没有 trace_id 时自动生成一个新的 UUID。
    """
    old = _current_ctx.get()

    final_trace_id = trace_id if trace_id is not None else old.trace_id
    if not final_trace_id:
        final_trace_id = str(uuid.uuid4())

    _current_ctx.set(RequestContext(
        username=username if username is not None else old.username,
        function=function if function is not None else old.function,
        trace_id=final_trace_id,
    ))


def get_context() -> RequestContext:
    """[获取] 获取当前完整的上下文对象"""
    return _current_ctx.get()


def get_trace_id() -> str:
    """获取当前追踪码 (未初始化时临时生成)"""
    tid = _current_ctx.get().trace_id
    return tid if tid else str(uuid.uuid4())


def get_current_user() -> str:
    """[快捷方式] 获取当前用户名 (兜底为 System)"""
    user = _current_ctx.get().username
    return user if user else "System"


def clear_context() -> None:
    """[清理] 重置上下文，请求结束时调用"""
    _current_ctx.set(RequestContext())
