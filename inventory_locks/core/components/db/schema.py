# File: inventory_locks/core/components/db/schema.py
"""
# ==============================================================================
# 模块名称: 资产与锁表结构 (Table Metadata)
# ==============================================================================
#
# [Purpose / 用途]
# 以 SQLAlchemy Core 声明锁引擎读写的全部物理表:
#   - 资产主表 (computers / printers / ...)
#   - 可锁定的关联表 (is_dynamic + is_deleted 双标志)
#   - 字段锁表 lockedfields
#
# [Architecture / 架构]
# - KIND_TABLES: 类型标识 (itemtype) -> 表名，唯一映射入口。
# - table_for_kind(): 未知类型抛 UnknownItemTypeError。
# - initialize(): CREATE TABLE IF NOT EXISTS (checkfirst)。
#
# ==============================================================================
"""

from typing import Dict, Tuple

from sqlalchemy import (
    Boolean, Column, DateTime, Integer, MetaData, String, Table, Text,
    UniqueConstraint, func,
)
from sqlalchemy.engine import Engine

from inventory_locks.core.sys.exceptions import UnknownItemTypeError

metadata = MetaData()


def _flags():
    # 所有可锁定表共用的两个标志位
    return [
        Column("is_dynamic", Boolean, nullable=False, default=False, server_default="0"),
        Column("is_deleted", Boolean, nullable=False, default=False, server_default="0"),
    ]


def _asset(name: str, model_fk: str, type_fk: str) -> Table:
    return Table(
        name, metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("entities_id", Integer, nullable=False, default=0),
        Column("name", String(255)),
        Column("serial", String(255)),
        Column("otherserial", String(255)),
        Column("contact", String(255)),
        Column("contact_num", String(255)),
        Column("comment", Text),
        Column("uuid", String(255)),
        Column("locations_id", Integer, nullable=False, default=0),
        Column("states_id", Integer, nullable=False, default=0),
        Column("manufacturers_id", Integer, nullable=False, default=0),
        Column("users_id", Integer, nullable=False, default=0),
        Column("groups_id", Integer, nullable=False, default=0),
        Column(model_fk, Integer, nullable=False, default=0),
        Column(type_fk, Integer, nullable=False, default=0),
        Column("date_mod", DateTime, server_default=func.now()),
        Column("date_creation", DateTime, server_default=func.now()),
        Column("last_inventory_update", DateTime),
        *_flags(),
    )


def _owned(name: str, *columns: Column) -> Table:
    """itemtype/items_id 多态归属的关联表"""
    return Table(
        name, metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("itemtype", String(100), nullable=False),
        Column("items_id", Integer, nullable=False, default=0),
        *columns,
        *_flags(),
    )


# --- 1. 资产主表 ---
computers = _asset("computers", "computermodels_id", "computertypes_id")
networkequipments = _asset("networkequipments", "networkequipmentmodels_id", "networkequipmenttypes_id")
printers = _asset("printers", "printermodels_id", "printertypes_id")
monitors = _asset("monitors", "monitormodels_id", "monitortypes_id")
peripherals = _asset("peripherals", "peripheralmodels_id", "peripheraltypes_id")
phones = _asset("phones", "phonemodels_id", "phonetypes_id")

# --- 2. 直连外设 (仅电脑) ---
computers_items = Table(
    "computers_items", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("items_id", Integer, nullable=False, default=0),
    Column("computers_id", Integer, nullable=False, default=0),
    Column("itemtype", String(100), nullable=False),
    *_flags(),
)

# --- 3. 直接归属的关联表 ---
items_disks = _owned(
    "items_disks",
    Column("name", String(255)),
    Column("device", String(255)),
    Column("mountpoint", String(255)),
    Column("totalsize", Integer, nullable=False, default=0),
    Column("freesize", Integer, nullable=False, default=0),
)
networkports = _owned(
    "networkports",
    Column("name", String(255)),
    Column("logical_number", Integer, nullable=False, default=0),
    Column("instantiation_type", String(255)),
    Column("mac", String(255)),
)
networknames = _owned(
    "networknames",
    Column("name", String(255)),
    Column("fqdns_id", Integer, nullable=False, default=0),
)
ipaddresses = _owned(
    "ipaddresses",
    Column("name", String(255)),
    Column("version", Integer, nullable=False, default=4),
)
itemvirtualmachines = _owned(
    "itemvirtualmachines",
    Column("name", String(255)),
    Column("uuid", String(255)),
    Column("vcpu", Integer, nullable=False, default=0),
    Column("ram", Integer),
)
items_softwareversions = _owned(
    "items_softwareversions",
    Column("softwareversions_id", Integer, nullable=False, default=0),
)
items_softwarelicenses = _owned(
    "items_softwarelicenses",
    Column("softwarelicenses_id", Integer, nullable=False, default=0),
)
databaseinstances = _owned(
    "databaseinstances",
    Column("name", String(255)),
    Column("version", String(255)),
)
domains_items = _owned(
    "domains_items",
    Column("domains_id", Integer, nullable=False, default=0),
    Column("domainrelations_id", Integer, nullable=False, default=0),
)

# --- 4. 硬件组件 (Item_Device*) ---
# 类型 -> (表名, 组件外键)
DEVICE_TABLES: Dict[str, Tuple[str, str]] = {
    "Item_DeviceMotherboard": ("items_devicemotherboards", "devicemotherboards_id"),
    "Item_DeviceFirmware": ("items_devicefirmwares", "devicefirmwares_id"),
    "Item_DeviceProcessor": ("items_deviceprocessors", "deviceprocessors_id"),
    "Item_DeviceMemory": ("items_devicememories", "devicememories_id"),
    "Item_DeviceHardDrive": ("items_deviceharddrives", "deviceharddrives_id"),
    "Item_DeviceNetworkCard": ("items_devicenetworkcards", "devicenetworkcards_id"),
    "Item_DeviceDrive": ("items_devicedrives", "devicedrives_id"),
    "Item_DeviceBattery": ("items_devicebatteries", "devicebatteries_id"),
    "Item_DeviceGraphicCard": ("items_devicegraphiccards", "devicegraphiccards_id"),
    "Item_DeviceSoundCard": ("items_devicesoundcards", "devicesoundcards_id"),
    "Item_DeviceControl": ("items_devicecontrols", "devicecontrols_id"),
    "Item_DevicePci": ("items_devicepcis", "devicepcis_id"),
    "Item_DeviceCase": ("items_devicecases", "devicecases_id"),
    "Item_DevicePowerSupply": ("items_devicepowersupplies", "devicepowersupplies_id"),
    "Item_DeviceGeneric": ("items_devicegenerics", "devicegenerics_id"),
    "Item_DeviceSimcard": ("items_devicesimcards", "devicesimcards_id"),
    "Item_DeviceSensor": ("items_devicesensors", "devicesensors_id"),
    "Item_DeviceCamera": ("items_devicecameras", "devicecameras_id"),
}
DEVICE_TYPES: Tuple[str, ...] = tuple(DEVICE_TABLES)

for _table_name, _fk in DEVICE_TABLES.values():
    _owned(
        _table_name,
        Column(_fk, Integer, nullable=False, default=0),
        Column("serial", String(255)),
        Column("otherserial", String(255)),
    )

# --- 5. 字段锁 ---
lockedfields = Table(
    "lockedfields", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("itemtype", String(100), nullable=False),
    Column("items_id", Integer, nullable=False, default=0),  # 全局锁固定为 0
    Column("field", String(50), nullable=False),
    Column("value", String(255)),
    Column("is_global", Boolean, nullable=False, default=False, server_default="0"),
    Column("date_mod", DateTime, server_default=func.now()),
    Column("date_creation", DateTime, server_default=func.now()),
    UniqueConstraint("itemtype", "items_id", "field", "is_global", name="unicity"),
)

# =========================================================================
# 类型 -> 表名
# =========================================================================
KIND_TABLES: Dict[str, str] = {
    "Computer": "computers",
    "NetworkEquipment": "networkequipments",
    "Printer": "printers",
    "Monitor": "monitors",
    "Peripheral": "peripherals",
    "Phone": "phones",
    "Computer_Item": "computers_items",
    "Item_Disk": "items_disks",
    "NetworkPort": "networkports",
    "NetworkName": "networknames",
    "IPAddress": "ipaddresses",
    "ItemVirtualMachine": "itemvirtualmachines",
    "Item_SoftwareVersion": "items_softwareversions",
    "Item_SoftwareLicense": "items_softwarelicenses",
    "DatabaseInstance": "databaseinstances",
    "Domain_Item": "domains_items",
    **{kind: table for kind, (table, _fk) in DEVICE_TABLES.items()},
}


def is_known_kind(kind: str) -> bool:
    return kind in KIND_TABLES


def table_for_kind(kind: str) -> Table:
    """itemtype -> Table，未知类型直接拒绝"""
    name = KIND_TABLES.get(kind)
    if name is None:
        raise UnknownItemTypeError(kind)
    return metadata.tables[name]


def register_kind_table(kind: str, table: Table) -> None:
    """插件扩展的类型需要先声明自己的表"""
    if table.metadata is not metadata:
        raise ValueError(f"Table {table.name} must be declared on the shared metadata")
    KIND_TABLES[kind] = table.name


def initialize(engine: Engine) -> None:
    """[初始化] 创建缺失的表结构"""
    metadata.create_all(engine, checkfirst=True)
