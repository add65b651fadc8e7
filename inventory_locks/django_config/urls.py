# File: inventory_locks/django_config/urls.py
"""
文件说明: 路由总入口 (Root URL Configuration)
"""

from django.urls import path, include
from django.http import JsonResponse

from inventory_locks.common.settings import settings


def health_check(request):
    """
    [API] 系统心跳检测
    """
    return JsonResponse({
        "status": "online",
        "system": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "api_version": "v1",
    })


urlpatterns = [
    path('api/health/', health_check, name='api_health'),
    path('api/lock/', include('inventory_locks.apps.locking.urls')),
]
