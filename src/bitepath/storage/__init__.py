"""Persisted grocery-list state shared across views."""

from bitepath.storage.kv import JsonFileStore, KeyValueStore, MemoryStore, StorageEvent
from bitepath.storage.stores import ManualItemStore, StruckItemStore
from bitepath.storage.views import GroceryListView, open_today_view, open_week_view

__all__ = [
    "GroceryListView",
    "JsonFileStore",
    "KeyValueStore",
    "ManualItemStore",
    "MemoryStore",
    "StorageEvent",
    "StruckItemStore",
    "open_today_view",
    "open_week_view",
]
