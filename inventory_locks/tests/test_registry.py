import unittest

from inventory_locks.core.components.db.schema import DEVICE_TYPES
from inventory_locks.core.services.lock.descriptors import (
    DirectOwner, IndirectJoin, JoinHop, RelationDescriptor, default_descriptors,
)
from inventory_locks.core.services.lock.registry import (
    RelationRegistry, build_registry, load_hook,
)
from inventory_locks.core.sys.exceptions import (
    AppValidationError, RegistryFrozenError, UnknownItemTypeError,
)


def extra_kinds():
    """插件钩子示例"""
    return [RelationDescriptor("Volume", DirectOwner("items_disks"), target_kind="Item_Disk", label="Volumes")]


class RelationRegistryTest(unittest.TestCase):

    def test_extend_after_freeze_is_rejected(self):
        registry = RelationRegistry().freeze()
        with self.assertRaises(RegistryFrozenError):
            registry.extend(RelationDescriptor("NetworkPort", DirectOwner("networkports")))

    def test_first_resolve_freezes(self):
        registry = RelationRegistry([RelationDescriptor("NetworkPort", DirectOwner("networkports"))])
        self.assertFalse(registry.frozen)

        descriptor, found = registry.resolve("NetworkPort")
        self.assertTrue(found)
        self.assertEqual(descriptor.related_kind, "NetworkPort")
        self.assertTrue(registry.frozen)

        with self.assertRaises(RegistryFrozenError):
            registry.extend(RelationDescriptor("Item_Disk", DirectOwner("items_disks")))

    def test_resolve_unknown_kind(self):
        registry = RelationRegistry()
        self.assertEqual(registry.resolve("Nope"), (None, False))
        with self.assertRaises(UnknownItemTypeError):
            registry.require("Nope")

    def test_device_is_reserved_and_duplicates_rejected(self):
        registry = RelationRegistry()
        with self.assertRaises(AppValidationError):
            registry.extend(RelationDescriptor("Device", DirectOwner("networkports")))
        registry.extend(RelationDescriptor("NetworkPort", DirectOwner("networkports")))
        with self.assertRaises(AppValidationError):
            registry.extend(RelationDescriptor("NetworkPort", DirectOwner("networkports")))

    def test_target_kind_must_have_a_table(self):
        registry = RelationRegistry()
        with self.assertRaises(UnknownItemTypeError):
            registry.extend(RelationDescriptor("Item_Cluster", DirectOwner("items_disks")))
        self.assertEqual(registry.resolve("Item_Cluster"), (None, False))

    def test_shape_tables_must_be_declared(self):
        registry = RelationRegistry()
        with self.assertRaises(AppValidationError):
            registry.extend(RelationDescriptor("NetworkPort", DirectOwner("no_such_ports")))
        with self.assertRaises(AppValidationError):
            registry.extend(RelationDescriptor(
                "IPAddress", IndirectJoin("ipaddresses", (JoinHop("NetworkName", "no_such_names"),))))

    def test_expand_device_pseudo_kind(self):
        registry = RelationRegistry(default_descriptors(["Computer"]))
        expanded = registry.expand_kinds(["Monitor", "Device", "Monitor"])
        self.assertEqual(expanded, ["Monitor", *DEVICE_TYPES])

    def test_default_seed_order(self):
        kinds = RelationRegistry(default_descriptors(["Computer"])).all_kinds()
        self.assertEqual(kinds[:4], ("Monitor", "Peripheral", "Printer", "Phone"))
        self.assertIn("IPAddress", kinds)
        self.assertIn("Item_DeviceProcessor", kinds)
        self.assertNotIn("Device", kinds)

    def test_direct_connections_act_on_junction(self):
        registry = RelationRegistry(default_descriptors(["Computer"]))
        self.assertEqual(registry.require("Monitor").act_on, "Computer_Item")
        self.assertEqual(registry.require("NetworkPort").act_on, "NetworkPort")
        self.assertEqual(registry.require("SoftwareVersion").act_on, "Item_SoftwareVersion")


class BuildRegistryTest(unittest.TestCase):

    def test_build_registry_runs_hooks_then_freezes(self):
        registry = build_registry(hooks=[extra_kinds], device_base_kinds=["Computer"])
        self.assertTrue(registry.frozen)
        self.assertIn("Volume", registry.all_kinds())

    def test_hook_with_unknown_target_fails_at_startup(self):
        def broken():
            return [RelationDescriptor("Item_Cluster", DirectOwner("items_disks"))]
        with self.assertRaises(UnknownItemTypeError):
            build_registry(hooks=[broken], device_base_kinds=["Computer"])

    def test_load_hook_by_path(self):
        hook = load_hook("inventory_locks.tests.test_registry:extra_kinds")
        self.assertIs(hook, extra_kinds)

    def test_load_hook_requires_callable_name(self):
        with self.assertRaises(AppValidationError):
            load_hook("inventory_locks.tests.test_registry")

    def test_default_registry_is_shared_and_frozen(self):
        first = RelationRegistry.default()
        self.assertIs(first, RelationRegistry.default())
        self.assertTrue(first.frozen)
