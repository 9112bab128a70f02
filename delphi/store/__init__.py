"""Storage for registry records and their indexes."""

from delphi.store.kv import InMemoryKeyValueStore, KeyValueStore, WriteBatch
from delphi.store.registry import RegistryStore, RegistryTables

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "RegistryStore",
    "RegistryTables",
    "WriteBatch",
]
