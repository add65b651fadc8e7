"""
插件扩展点: 自定义资产表 + 检索项
"""

import unittest

from sqlalchemy import Column, Integer, MetaData, String, Table

from inventory_locks.core.components.db.schema import (
    KIND_TABLES, metadata, register_kind_table, table_for_kind,
)
from inventory_locks.core.services.lock.search_options import (
    SEARCH_OPTIONS, SearchOption, get_options_for_itemtype, register_options,
)


class PluginKindTest(unittest.TestCase):

    def test_table_on_foreign_metadata_is_rejected(self):
        foreign = Table("plugin_assets", MetaData(), Column("id", Integer, primary_key=True))
        with self.assertRaises(ValueError):
            register_kind_table("PluginAsset", foreign)
        self.assertNotIn("PluginAsset", KIND_TABLES)

    def test_register_table_and_options(self):
        table = Table(
            "plugin_assets", metadata,
            Column("id", Integer, primary_key=True),
            Column("name", String(255)),
        )
        self.addCleanup(metadata.remove, table)
        self.addCleanup(KIND_TABLES.pop, "PluginAsset", None)
        self.addCleanup(SEARCH_OPTIONS.pop, "PluginAsset", None)

        register_kind_table("PluginAsset", table)
        self.assertIs(table_for_kind("PluginAsset"), table)

        register_options("PluginAsset", [SearchOption(1, "Name", "plugin_assets", "name")])
        register_options("PluginAsset", [SearchOption(2, "ID", "plugin_assets", "id")])
        self.assertEqual([o.field for o in get_options_for_itemtype("PluginAsset")], ["name", "id"])

    def test_unknown_itemtype_has_no_options(self):
        self.assertEqual(get_options_for_itemtype("Spaceship"), [])
