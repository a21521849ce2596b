"""In-memory key-value store."""

from typing import Dict, Optional

from ...domain.ports.key_value_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Key-value store living only as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
