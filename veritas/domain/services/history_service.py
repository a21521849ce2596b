"""Service keeping a capped, newest-first history of reports per identity."""

import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from ..models.fact_check_result import FactCheckResult
from ..models.history import HistoryItem, prepend_capped
from ..ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

HISTORY_KEY_PREFIX = "veritas_history"
DEFAULT_HISTORY_LIMIT = 15


class HistoryService:
    """Service for saving fact-check reports in a key-value store."""

    def __init__(self, store: KeyValueStore, max_items: int = DEFAULT_HISTORY_LIMIT):
        """Initialize the service.

        Args:
            store: Store holding one JSON list per identity
            max_items: Number of reports kept per identity
        """
        if max_items < 1:
            raise ValueError("History limit must be at least 1")
        self._store = store
        self._max_items = max_items

    @property
    def max_items(self) -> int:
        return self._max_items

    @staticmethod
    def key_for(identity: str) -> str:
        """Get the store key holding an identity's history."""
        return f"{HISTORY_KEY_PREFIX}:{identity}"

    def list(self, identity: str) -> List[HistoryItem]:
        """Get an identity's history, newest first.

        Stored data that cannot be read is logged and treated as empty.
        """
        raw = self._store.get(self.key_for(identity))
        if not raw:
            return []
        try:
            return [HistoryItem.model_validate(entry) for entry in json.loads(raw)]
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.error(f"❌ Could not read history for '{identity}': {e}")
            return []

    def get(self, identity: str, item_id: str) -> Optional[HistoryItem]:
        """Get one saved report by id."""
        return next((item for item in self.list(identity) if item.id == item_id), None)

    def record(
        self,
        identity: str,
        text: str,
        result: FactCheckResult,
        now_ms: Optional[int] = None,
    ) -> HistoryItem:
        """Save a report at the front of the history, dropping the oldest past the cap."""
        item = HistoryItem.create(text, result, now_ms=now_ms)
        items = prepend_capped(self.list(identity), item, self._max_items)
        self._save(identity, items)
        logger.info(f"💾 Saved report {item.id} for '{identity}' ({len(items)}/{self._max_items})")
        return item

    def clear(self, identity: str) -> None:
        """Remove an identity's whole history."""
        self._store.delete(self.key_for(identity))
        logger.info(f"🧹 Cleared history for '{identity}'")

    def _save(self, identity: str, items: List[HistoryItem]) -> None:
        self._store.set(self.key_for(identity), json.dumps([item.to_dict() for item in items]))
