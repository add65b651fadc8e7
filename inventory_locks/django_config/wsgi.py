# File Path: inventory_locks/django_config/wsgi.py
"""
文件说明: WSGI 生产环境接口
"""
import os

from inventory_locks.django_config import use_pymysql

use_pymysql()

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'inventory_locks.django_config.settings')

application = get_wsgi_application()
