from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from django.contrib.contenttypes.models import ContentType
from django.test import TestCase
from rest_framework.test import APIClient

from inventory_locks.tests.support import LockDatabaseMixin


class LockingApiTest(LockDatabaseMixin, TestCase):
    client_class = APIClient

    def setUp(self):
        super().setUp()
        User = get_user_model()
        self.admin = User.objects.create_superuser("admin", "admin@example.com", "password123")
        self.operator = User.objects.create_user("operator", "op@example.com", "password123")

        self.add_computer(42, name="pc-042")
        self.add_field_lock("Computer", 42, "serial")
        self.add_field_lock("Computer", 42, "serial", is_global=True)
        self.port = self.add_owned("networkports", "Computer", 42, name="eth0")

    def grant(self, user, *codenames):
        for codename in codenames:
            kind = codename.split("_", 1)[1]
            content_type, _ = ContentType.objects.get_or_create(app_label="locking", model=kind)
            perm, _ = Permission.objects.get_or_create(
                codename=codename, content_type=content_type, defaults={"name": codename})
            user.user_permissions.add(perm)
        # 清除权限缓存
        return get_user_model().objects.get(pk=user.pk)

    # --- 认证 ---

    def test_anonymous_is_rejected(self):
        response = self.client.get("/api/lock/items/Computer/42/")
        self.assertIn(response.status_code, (401, 403))

    def test_health_check(self):
        response = self.client.get("/api/health/")
        self.assertEqual(response.json()["status"], "online")

    # --- 查看 ---

    def test_item_locks(self):
        self.client.force_authenticate(self.admin)
        response = self.client.get("/api/lock/items/Computer/42/")
        self.assertEqual(response.status_code, 200)

        data = response.json()["data"]
        self.assertEqual(len(data["field_locks"]), 2)
        effective = [lock for lock in data["field_locks"] if lock["effective"]]
        self.assertEqual([(l["field"], l["is_global"]) for l in effective], [("serial", False)])
        self.assertEqual([r["items_id"] for r in data["record_locks"]["NetworkPort"]], [self.port])

    def test_item_locks_unknown_kind(self):
        self.client.force_authenticate(self.admin)
        response = self.client.get("/api/lock/items/Spaceship/1/")
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["status"], "error")

    def test_item_locks_requires_read_right(self):
        self.client.force_authenticate(self.operator)
        self.assertEqual(self.client.get("/api/lock/items/Computer/42/").status_code, 403)

        operator = self.grant(self.operator, "read_computer")
        self.client.force_authenticate(operator)
        response = self.client.get("/api/lock/items/Computer/42/")
        self.assertEqual(response.status_code, 200)
        # 没有 update/purge 权限: 记录可见但不可操作
        self.assertFalse(response.json()["data"]["record_locks"]["NetworkPort"][0]["actionable"])

    def test_lockable_fields(self):
        self.client.force_authenticate(self.operator)
        response = self.client.get("/api/lock/fields/Computer/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["fields"]["serial"], "Serial number")

    # --- 批量 ---

    def test_bulk_unlock_components(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post("/api/lock/bulk/", {
            "itemtype": "Computer",
            "ids": [42, 43],
            "action": "unlock_components",
            "kinds": ["NetworkPort"],
        }, format="json")
        self.assertEqual(response.status_code, 200)

        data = response.json()["data"]
        self.assertEqual([o["base_id"] for o in data["outcomes"]], [42, 43])
        self.assertEqual(data["summary"], {"ok": 2, "failed": 0})
        self.assertFalse(self.row("networkports", self.port)["is_deleted"])

    def test_bulk_unlock_fields(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post("/api/lock/bulk/", {
            "itemtype": "Computer", "ids": [42], "action": "unlock_fields", "fields": ["serial"],
        }, format="json")
        self.assertEqual(response.json()["data"]["outcomes"][0]["processed"], 1)
        self.assertEqual(self.count("lockedfields"), 1)

    def test_bulk_failures_are_reported_per_item(self):
        operator = self.grant(self.operator, "update_computer")
        self.client.force_authenticate(operator)
        response = self.client.post("/api/lock/bulk/", {
            "itemtype": "Computer", "ids": [42], "action": "unlock_components", "kinds": ["NetworkPort"],
        }, format="json")
        self.assertEqual(response.status_code, 200)
        [outcome] = response.json()["data"]["outcomes"]
        self.assertEqual(outcome["status"], "Failed")
        self.assertIn("pc-042", outcome["detail"])
        self.assertTrue(self.row("networkports", self.port)["is_deleted"])

    def test_bulk_requires_update_right_on_itemtype(self):
        self.client.force_authenticate(self.operator)
        response = self.client.post("/api/lock/bulk/", {
            "itemtype": "Computer", "ids": [42], "action": "unlock_fields", "fields": ["serial"],
        }, format="json")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.count("lockedfields"), 2)

    def test_bulk_validation(self):
        self.client.force_authenticate(self.admin)
        cases = [
            {"itemtype": "Computer", "ids": [], "action": "unlock_fields"},
            {"itemtype": "Computer", "ids": [42], "action": "explode"},
            {"itemtype": "Computer", "ids": [42], "action": "unlock_components", "kinds": ["Spaceship"]},
            {"itemtype": None, "ids": [42], "action": "unlock_fields"},
            {"itemtype": "Computer", "ids": [42], "action": "unlock_fields", "fields": [5]},
        ]
        for payload in cases:
            response = self.client.post("/api/lock/bulk/", payload, format="json")
            self.assertEqual(response.status_code, 422, payload)

    # --- 锁表单 ---

    def test_locked_records_purge(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post("/api/lock/records/", {
            "action": "purge", "items": {"NetworkPort": [self.port]},
        }, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["summary"], {"ok": 1, "failed": 0})
        self.assertIsNone(self.row("networkports", self.port))

    def test_locked_records_with_granted_right(self):
        operator = self.grant(self.operator, "update_networkport")
        self.client.force_authenticate(operator)

        denied = self.client.post("/api/lock/records/", {
            "action": "purge", "items": {"NetworkPort": [self.port]},
        }, format="json")
        self.assertEqual(denied.json()["data"]["outcomes"][0]["status"], "Failed")

        allowed = self.client.post("/api/lock/records/", {
            "action": "unlock", "items": {"NetworkPort": [self.port]},
        }, format="json")
        self.assertEqual(allowed.json()["data"]["outcomes"][0]["status"], "OK")
        self.assertFalse(self.row("networkports", self.port)["is_deleted"])
