"""Local key/value store backed by one JSON file per key."""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from pharmacy_consult.services.state import LocalStore


@dataclass
class JsonFileLocalStore(LocalStore):
    """Stores each key as ``<directory>/<key>.json``."""

    directory: Path

    @classmethod
    def create(cls, directory: str | Path) -> "JsonFileLocalStore":
        """Create the store, making the directory if needed."""
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        return cls(directory=path)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> object | None:
        """Return the decoded document, or None when the key is absent."""
        path = self._path(key)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def write(self, key: str, value: object) -> None:
        """Write the document atomically."""
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp_path, path)

    def delete(self, key: str) -> None:
        """Remove the key if present."""
        self._path(key).unlink(missing_ok=True)
