import unittest

from inventory_locks.core.services.lock.field_store import (
    FieldLockStore, effective_locks, normalize_field_name,
)
from inventory_locks.core.services.lock.models import LockCriteria, LockedField
from inventory_locks.tests.support import LockDatabaseTestCase


class FieldLockStoreTest(LockDatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.store = FieldLockStore()

    def test_list_returns_instance_and_global_locks(self):
        self.add_field_lock("Computer", 42, "serial", value="ABC")
        self.add_field_lock("Computer", 42, "serial", is_global=True)
        self.add_field_lock("Computer", 7, "name")
        self.add_field_lock("Printer", 42, "serial")

        locks = self.store.list_locks_for("Computer", 42)
        self.assertEqual([(l.field, l.is_global) for l in locks], [("serial", False), ("serial", True)])
        self.assertEqual(locks[0].value, "ABC")
        self.assertEqual(locks[1].items_id, 0)

    def test_delete_is_idempotent(self):
        self.add_field_lock("Computer", 42, "serial")
        criteria = LockCriteria("Computer", field_names=("serial",), items_id=42)

        self.assertEqual(self.store.delete_locks(criteria), 1)
        self.assertEqual(self.store.delete_locks(criteria), 0)

    def test_delete_keeps_global_and_other_fields(self):
        self.add_field_lock("Computer", 42, "serial")
        self.add_field_lock("Computer", 42, "name")
        self.add_field_lock("Computer", 42, "serial", is_global=True)

        deleted = self.store.delete_locks(LockCriteria("Computer", field_names=("serial",), items_id=42))
        self.assertEqual(deleted, 1)
        remaining = {(l.field, l.is_global) for l in self.store.list_locks_for("Computer", 42)}
        self.assertEqual(remaining, {("name", False), ("serial", True)})

    def test_empty_field_list_deletes_nothing(self):
        self.add_field_lock("Computer", 42, "serial")
        self.assertEqual(self.store.delete_locks(LockCriteria("Computer", field_names=(), items_id=42)), 0)
        self.assertEqual(self.count("lockedfields"), 1)

    def test_none_field_list_deletes_all_fields_of_item(self):
        self.add_field_lock("Computer", 42, "serial")
        self.add_field_lock("Computer", 42, "name")
        self.add_field_lock("Computer", 43, "name")
        self.assertEqual(self.store.delete_locks(LockCriteria("Computer", items_id=42)), 2)
        self.assertEqual(self.count("lockedfields"), 1)

    def test_prefixed_field_names_are_normalized(self):
        self.add_field_lock("Computer", 42, "otherserial")
        criteria = LockCriteria("Computer", field_names=("Computer - otherserial",), items_id=42)
        self.assertEqual(self.store.delete_locks(criteria), 1)

    def test_unlock_global_ignores_instance(self):
        self.add_field_lock("Computer", 42, "serial")
        self.add_field_lock("Computer", 42, "serial", is_global=True)
        self.add_field_lock("Computer", 42, "name", is_global=True)

        self.assertEqual(self.store.unlock_global("Computer", ["serial"]), 1)
        remaining = {(l.field, l.is_global) for l in self.store.list_locks_for("Computer", 42)}
        self.assertEqual(remaining, {("serial", False), ("name", True)})

    def test_eligible_fields(self):
        labels = self.store.field_labels("Computer")
        self.assertEqual(labels["serial"], "Serial number")
        self.assertEqual(labels["locations_id"], "Location")
        self.assertEqual(labels["comment"], "Comments")
        self.assertIn("computermodels_id", labels)
        self.assertIn("uuid", labels)
        for technical in ("id", "entities_id", "date_mod", "date_creation", "last_inventory_update"):
            self.assertNotIn(technical, labels)
        self.assertNotIn("Manufacturer : Comments", labels.values())
        self.assertEqual(self.store.fields_eligible_for_lock("Computer"), list(labels))

    def test_unknown_itemtype_has_no_eligible_fields(self):
        self.assertEqual(self.store.fields_eligible_for_lock("NetworkPort"), [])


class EffectiveLocksTest(unittest.TestCase):

    def test_instance_lock_takes_precedence(self):
        instance = LockedField(2, "Computer", 42, "serial", is_global=False)
        global_lock = LockedField(1, "Computer", 0, "serial", is_global=True)
        other = LockedField(3, "Computer", 0, "name", is_global=True)

        for order in ([global_lock, instance, other], [instance, global_lock, other]):
            result = effective_locks(order)
            self.assertIs(result["serial"], instance)
            self.assertIs(result["name"], other)

    def test_normalize_field_name(self):
        self.assertEqual(normalize_field_name("Computer - serial"), "serial")
        self.assertEqual(normalize_field_name(" serial "), "serial")
