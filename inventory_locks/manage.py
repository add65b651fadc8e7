#!/usr/bin/env python
# File Path: inventory_locks/manage.py
"""
文件说明: Django 管理入口 (Management Utility)
用法: python -m inventory_locks.manage runserver
"""
import os
import sys


def main():
    """Run administrative tasks."""
    from inventory_locks.django_config import use_pymysql

    use_pymysql()
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'inventory_locks.django_config.settings')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
