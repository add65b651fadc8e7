# File: inventory_locks/apps/locking/urls.py
"""
# ==============================================================================
# 模块名称: 锁管理路由 (Locking URLs)
# ==============================================================================
#
# [Purpose / 用途]
# 定义锁管理的 API 路由。
#
# ==============================================================================
"""

from django.urls import path
from .views import item_locks, lockable_fields, bulk_unlock, locked_records

urlpatterns = [
    # 查看某资产的字段锁与记录锁
    # 例如: /api/lock/items/Computer/42/
    path('items/<str:itemtype>/<int:item_id>/', item_locks, name='lock_item'),

    # 可选解锁字段目录
    path('fields/<str:itemtype>/', lockable_fields, name='lock_fields'),

    # 批量解锁 (字段 / 关联记录 / 清除)
    path('bulk/', bulk_unlock, name='lock_bulk'),

    # 锁表单: 对选中的记录 unlock / purge
    path('records/', locked_records, name='lock_records'),
]
