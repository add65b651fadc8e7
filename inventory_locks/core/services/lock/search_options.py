# File: inventory_locks/core/services/lock/search_options.py
"""
文件说明: 资产可检索字段目录 (Search Options)
主要功能:
1. 声明每类资产对外暴露的检索字段 (字段名 + 显示名 + 所在表)。
2. 字段锁的 "可选解锁字段" 由此推导，不落库。
3. 下拉表附带的辅助检索项 (无 linkfield 且不在资产表上) 不参与字段锁。
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from inventory_locks.core.components.db.schema import KIND_TABLES


@dataclass(frozen=True)
class SearchOption:
    id: int
    name: str
    table: str
    field: str
    linkfield: Optional[str] = None


def _asset_options(kind: str, model_fk: str, type_fk: str) -> List[SearchOption]:
    own = KIND_TABLES[kind]
    prefix = kind.lower()
    return [
        SearchOption(1, "Name", own, "name"),
        SearchOption(2, "ID", own, "id"),
        SearchOption(3, "Location", "locations", "completename", "locations_id"),
        SearchOption(4, "Type", f"{prefix}types", "name", type_fk),
        SearchOption(40, "Model", f"{prefix}models", "name", model_fk),
        SearchOption(5, "Serial number", own, "serial"),
        SearchOption(6, "Inventory number", own, "otherserial"),
        SearchOption(7, "Alternate username", own, "contact"),
        SearchOption(8, "Alternate username number", own, "contact_num"),
        SearchOption(16, "Comments", own, "comment"),
        SearchOption(19, "Last update", own, "date_mod"),
        SearchOption(23, "Manufacturer", "manufacturers", "name", "manufacturers_id"),
        SearchOption(31, "Status", "states", "completename", "states_id"),
        SearchOption(70, "User", "users", "name", "users_id"),
        SearchOption(71, "Group", "groups", "completename", "groups_id"),
        SearchOption(80, "Entity", "entities", "completename", "entities_id"),
        SearchOption(121, "Creation date", own, "date_creation"),
        SearchOption(9, "Last inventory date", own, "last_inventory_update"),
        # 下拉附带项: 仅用于显示，不可锁
        SearchOption(1001, "Manufacturer : Comments", "manufacturers", "comment"),
    ]


SEARCH_OPTIONS: Dict[str, List[SearchOption]] = {
    "Computer": _asset_options("Computer", "computermodels_id", "computertypes_id")
    + [SearchOption(47, "UUID", "computers", "uuid")],
    "NetworkEquipment": _asset_options("NetworkEquipment", "networkequipmentmodels_id", "networkequipmenttypes_id"),
    "Printer": _asset_options("Printer", "printermodels_id", "printertypes_id"),
    "Monitor": _asset_options("Monitor", "monitormodels_id", "monitortypes_id"),
    "Peripheral": _asset_options("Peripheral", "peripheralmodels_id", "peripheraltypes_id"),
    "Phone": _asset_options("Phone", "phonemodels_id", "phonetypes_id")
    + [SearchOption(47, "UUID", "phones", "uuid")],
}


def get_options_for_itemtype(itemtype: str) -> List[SearchOption]:
    return list(SEARCH_OPTIONS.get(itemtype, []))


def register_options(itemtype: str, options: List[SearchOption]) -> None:
    """插件类型补充检索项"""
    SEARCH_OPTIONS.setdefault(itemtype, []).extend(options)
