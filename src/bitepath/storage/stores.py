"""Persisted struck-item set and manual grocery items."""

import json
import uuid
from collections.abc import Callable

from pydantic import ValidationError

from bitepath.config import get_settings
from bitepath.logging_config import get_logger
from bitepath.schemas import ManualGroceryItem
from bitepath.storage.kv import KeyValueStore, StorageListener

logger = get_logger(__name__)


class StruckItemStore:
    """
    The global set of struck-off item keys.

    One persisted set is shared by every grocery-list view. Keys that are not
    on a view's current list stay in the set so they reappear struck when the
    item comes back.
    """

    def __init__(self, store: KeyValueStore, key: str | None = None):
        self.store = store
        self.key = key or get_settings().struck_items_key

    def decode(self, raw: str | None) -> set[str]:
        """Decode a persisted value; anything unreadable is an empty set."""
        if not raw:
            return set()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Corrupt struck-items value under {self.key!r}: {e}")
            return set()
        if not isinstance(data, list):
            logger.warning(f"Struck-items value under {self.key!r} is not a list")
            return set()
        return {item for item in data if isinstance(item, str)}

    def read(self) -> set[str]:
        """Read the current global struck set."""
        return self.decode(self.store.get(self.key))

    def toggle(self, unique_key: str) -> None:
        """Flip one key's membership and write the set back."""
        struck = self.read()
        if unique_key in struck:
            struck.discard(unique_key)
        else:
            struck.add(unique_key)
        self.store.set(self.key, json.dumps(sorted(struck)))

    def subscribe(self, listener: StorageListener) -> Callable[[], None]:
        return self.store.subscribe(listener)


class ManualItemStore:
    """User-added grocery items, kept in insertion order."""

    def __init__(self, store: KeyValueStore, key: str | None = None):
        self.store = store
        self.key = key or get_settings().manual_items_key

    def decode(self, raw: str | None) -> list[ManualGroceryItem]:
        """Decode a persisted value, skipping entries that do not validate."""
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Corrupt manual-items value under {self.key!r}: {e}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Manual-items value under {self.key!r} is not a list")
            return []

        items = []
        for entry in data:
            try:
                items.append(ManualGroceryItem.model_validate(entry))
            except ValidationError:
                logger.warning(f"Skipping invalid manual item: {entry!r}")
        return items

    def load(self) -> list[ManualGroceryItem]:
        """Read all manual items."""
        return self.decode(self.store.get(self.key))

    def add(self, name: str, quantity: str = "", unit: str = "") -> ManualGroceryItem:
        """
        Append a manual item.

        Raises:
            ValueError: If the name is blank.
        """
        if not name or not name.strip():
            raise ValueError("Item name is required.")

        item = ManualGroceryItem(
            id=f"manual-{uuid.uuid4().hex[:12]}",
            name=name.strip(),
            quantity=(quantity or "").strip(),
            unit=(unit or "").strip(),
        )
        items = self.load()
        items.append(item)
        self.store.set(self.key, json.dumps([i.model_dump() for i in items]))
        logger.info(f"Added manual grocery item {item.name!r}")
        return item
