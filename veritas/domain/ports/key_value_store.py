"""Key-value storage interface for locally cached data."""

from typing import Optional, Protocol


class KeyValueStore(Protocol):
    """Protocol for string stores addressed by namespaced keys."""

    def get(self, key: str) -> Optional[str]:
        """Get the value stored under a key, or None."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous one."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""
        ...
