import logging
import time
from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd

from . import settings, utils
from .schemas import InventoryItem, NewInventoryItem

logger = logging.getLogger(__name__)

ItemPayload = Union[NewInventoryItem, dict[str, Any]]

# Text columns must not be parsed as numbers (ids like "1", phone numbers like "+62...").
TEXT_COLUMNS = {"id": str, "name": str, "unit": str, "supplierWhatsapp": str}


def rows_to_items(df: pd.DataFrame) -> list[InventoryItem]:
    """Validates raw item rows. Raises pydantic.ValidationError on the first bad row."""
    if df.empty:
        return []
    clean_df = df.astype(object).where(df.notna(), None)
    return [InventoryItem(**row) for row in clean_df.to_dict("records")]


def _validate_payload(payload: ItemPayload) -> NewInventoryItem:
    if isinstance(payload, NewInventoryItem):
        return payload
    data = {key: value for key, value in payload.items() if key != "id"}
    return NewInventoryItem.model_validate(data)


class ItemFileError(ValueError):
    """The items file exists but cannot be read as a table of items."""


class ItemStore:
    """
    CSV-backed storage for inventory items, keyed by id.
    Every call reads the file again, so the file on disk is the only state.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else settings.DATA_DIR / settings.ITEMS_FILENAME

    def load_frame(self) -> pd.DataFrame:
        """
        Reads the items file. A missing or zero-byte file is an empty store.
        Raises ItemFileError for a file that exists but cannot be parsed, so no
        write path ever replaces records it failed to read.
        """
        if not self.path.exists() or self.path.stat().st_size == 0:
            return pd.DataFrame(columns=settings.ITEM_COLUMNS)
        df = utils.load_csv(self.path, dtype=TEXT_COLUMNS)
        if df is None:
            raise ItemFileError(f"Could not read items file {self.path}")
        return df.reindex(columns=settings.ITEM_COLUMNS)

    def _write(self, items: list[InventoryItem]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rows = [item.model_dump(by_alias=True) for item in items]
        pd.DataFrame(rows, columns=settings.ITEM_COLUMNS).to_csv(self.path, index=False)

    def count_items(self) -> int:
        return len(self.load_frame())

    def get_all_items(self) -> list[InventoryItem]:
        return rows_to_items(self.load_frame())

    def get_item(self, item_id: str) -> Optional[InventoryItem]:
        for item in self.get_all_items():
            if item.id == item_id:
                return item
        return None

    def seed_if_empty(self) -> bool:
        if self.count_items() > 0:
            return False
        seed = [InventoryItem(**row) for row in settings.SEED_ITEMS]
        self._write(seed)
        logger.info(f"🌱 Seeded {len(seed)} items into {self.path.name}.")
        return True

    def create_item(self, payload: ItemPayload) -> InventoryItem:
        new_item = _validate_payload(payload)
        items = self.get_all_items()

        # Ids are creation timestamps in milliseconds; bump on a same-millisecond clash.
        taken = {item.id for item in items}
        stamp = int(time.time() * 1000)
        while str(stamp) in taken:
            stamp += 1

        item = InventoryItem(id=str(stamp), **new_item.model_dump())
        items.append(item)
        self._write(items)
        logger.info(f"➕ Created item '{item.name}' ({item.id}).")
        return item

    def update_item(self, item_id: str, payload: ItemPayload) -> Optional[InventoryItem]:
        """Replaces an item's fields. The given `item_id` wins over any id in the payload."""
        items = self.get_all_items()
        for index, existing in enumerate(items):
            if existing.id == item_id:
                break
        else:
            logger.warning(f"Item {item_id} not found. Nothing updated.")
            return None

        updated = InventoryItem(id=item_id, **_validate_payload(payload).model_dump())
        items[index] = updated
        self._write(items)
        logger.info(f"✏️ Updated item '{updated.name}' ({item_id}).")
        return updated

    def delete_item(self, item_id: str) -> bool:
        items = self.get_all_items()
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            logger.warning(f"Item {item_id} not found. Nothing deleted.")
            return False
        self._write(remaining)
        logger.info(f"🗑️ Deleted item {item_id}.")
        return True
