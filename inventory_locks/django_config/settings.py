# File Path: inventory_locks/django_config/settings.py
"""
文件说明: Django 核心配置 (Core Settings)
1. 数据库配置从 inventory_locks.common.settings 读取 (SSOT)。
2. 仅注册锁管理所需的应用与中间件。
"""

import os
from pathlib import Path

from inventory_locks.common.settings import settings as app_settings

# -----------------------------------------------------------------------------
# 1. 路径
# -----------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# -----------------------------------------------------------------------------
# 2. 安全与核心
# -----------------------------------------------------------------------------
SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-inventory-locks-dev-key')
DEBUG = os.environ.get('DJANGO_DEBUG', 'false').lower() == 'true'
ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', '*').split(',')

# -----------------------------------------------------------------------------
# 3. 应用注册 (Installed Apps)
# -----------------------------------------------------------------------------
INSTALLED_APPS = [
    # --- Django Native ---
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',

    # --- Third Party ---
    'rest_framework',

    # --- Inventory Locks ---
    'inventory_locks.apps.locking',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
]

ROOT_URLCONF = 'inventory_locks.django_config.urls'

WSGI_APPLICATION = 'inventory_locks.django_config.wsgi.application'

# -----------------------------------------------------------------------------
# 4. 数据库配置 (SSOT - Single Source of Truth)
# -----------------------------------------------------------------------------
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.mysql',
        'NAME': app_settings.DB_NAME,
        'USER': app_settings.DB_USER,
        'PASSWORD': app_settings.DB_PASS,
        'HOST': app_settings.DB_HOST,
        'PORT': app_settings.DB_PORT,
        'OPTIONS': {
            'charset': app_settings.DB_CHARSET,
            'init_command': "SET sql_mode='STRICT_TRANS_TABLES', collation_connection='utf8mb4_unicode_ci'",
        },
    }
}

# -----------------------------------------------------------------------------
# 5. 国际化与时区
# -----------------------------------------------------------------------------
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = False

# -----------------------------------------------------------------------------
# 6. DRF API 配置
# -----------------------------------------------------------------------------
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework.authentication.SessionAuthentication',
        'rest_framework.authentication.BasicAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ]
}
