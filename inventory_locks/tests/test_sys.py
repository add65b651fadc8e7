import unittest

from inventory_locks.core.components.db.client import DBClient
from inventory_locks.core.sys.context import (
    clear_context, get_context, get_current_user, get_trace_id, set_context,
)
from inventory_locks.core.sys.exceptions import PersistenceError
from inventory_locks.tests.support import LockDatabaseTestCase


class DBClientTest(LockDatabaseTestCase):

    def test_read_df(self):
        self.add_computer(1, name="pc-001")
        df = DBClient.read_df("SELECT id, name FROM computers WHERE id = :id", {"id": 1})
        self.assertEqual(df.iloc[0]["name"], "pc-001")

    def test_query_errors_are_wrapped(self):
        with self.assertRaises(PersistenceError):
            DBClient.read_df("SELECT * FROM no_such_table")
        with self.assertRaises(PersistenceError):
            DBClient.execute_stmt("UPDATE no_such_table SET x = 1")

    def test_execute_returns_rowcount(self):
        self.add_computer(1)
        self.add_computer(2)
        self.assertEqual(DBClient.execute_stmt("UPDATE computers SET comment = 'x'"), 2)

    def test_sql_meta_and_sanitizer(self):
        meta = DBClient._parse_sql_meta("delete from `networkports` where id = 1")
        self.assertEqual((meta["action"], meta["table"]), ("DELETE", "networkports"))
        self.assertIn("******", DBClient._sanitize_params({"db_password": "secret", "id": 3}))


class RequestContextTest(unittest.TestCase):

    def tearDown(self):
        clear_context()

    def test_set_and_clear(self):
        set_context(username="alice", function="Locking.Bulk", trace_id="t-1")
        self.assertEqual(get_current_user(), "alice")
        self.assertEqual(get_trace_id(), "t-1")

        set_context(function="Locking.View")
        self.assertEqual(get_context().username, "alice")
        self.assertEqual(get_context().trace_id, "t-1")

        clear_context()
        self.assertEqual(get_current_user(), "System")

    def test_trace_id_generated(self):
        set_context(username="bob")
        self.assertTrue(get_context().trace_id)
