# File: inventory_locks/apps/locking/management/commands/unlock_global_fields.py
"""
按类型解除全局字段锁
例如: python -m inventory_locks.manage unlock_global_fields Computer --field serial --confirm
"""
from django.core.management.base import BaseCommand, CommandError

from inventory_locks.core.components.db.schema import is_known_kind
from inventory_locks.core.services.lock.field_store import FieldLockStore
from inventory_locks.core.sys.context import set_context


class Command(BaseCommand):
    help = '解除某资产类型的全局字段锁（不指定 --field 则解除全部字段）'

    def add_arguments(self, parser):
        parser.add_argument('itemtype', help='资产类型，例如 Computer')
        parser.add_argument(
            '--field',
            action='append',
            dest='fields',
            help='要解锁的字段，可重复指定',
        )
        parser.add_argument(
            '--confirm',
            action='store_true',
            help='确认执行删除（必须指定此参数才会实际删除）',
        )

    def handle(self, *args, **options):
        itemtype = options['itemtype']
        fields = options['fields']
        if not is_known_kind(itemtype):
            raise CommandError(f"Unknown itemtype: {itemtype}")

        store = FieldLockStore()
        global_locks = [
            lock for lock in store.list_locks_for(itemtype, 0)
            if lock.is_global and (fields is None or lock.field in fields)
        ]
        self.stdout.write(f"{itemtype} 全局字段锁: {len(global_locks)} 条")

        if not options['confirm']:
            self.stdout.write(self.style.WARNING("未指定 --confirm，不执行删除"))
            return

        set_context(username='manage.py', function='Locking.GlobalUnlock')
        deleted = store.unlock_global(itemtype, fields)
        self.stdout.write(self.style.SUCCESS(f"✅ 已解除 {deleted} 条全局字段锁"))
