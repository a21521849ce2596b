"""Key-value store persisted as a single local JSON file."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from ...domain.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store backed by one JSON object on disk.

    The file is read once and rewritten atomically on every mutation.
    A missing file starts an empty store; an unreadable one is logged,
    kept aside with a ``.corrupt`` suffix and replaced on the next write.
    """

    def __init__(self, path: Union[str, Path]):
        """Initialize the store.

        Args:
            path: Location of the JSON file; parent directories are created on write
        """
        self._path = Path(path).expanduser()
        self._data: Dict[str, str] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def delete(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def _load(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            return {str(key): str(value) for key, value in data.items()}
        except (OSError, ValueError) as e:
            backup = self._path.with_suffix(self._path.suffix + ".corrupt")
            logger.error(f"❌ Could not read store file {self._path}: {e}; moving it to {backup}")
            try:
                self._path.replace(backup)
            except OSError as move_error:
                logger.warning(f"⚠️ Could not move unreadable store file: {move_error}")
            return {}

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
