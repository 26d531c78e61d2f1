"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON file is the storage backend because:
1. The whole state is small (one document per user)
2. Users can inspect and back up their data directly
3. No database setup required

TRADEOFFS:
- Every save rewrites the whole file (fine at this size)
- No transactions, so writes go to a temp file that replaces the
  original, and a crash never leaves a half-written document

The implementation follows the abstract interface, so we can swap
to another backend later without changing the ledger.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from hydration.services.storage.interface import (
    CorruptStateError,
    StateStorageInterface,
    StorageError,
)


class JsonFileStorage(StateStorageInterface):
    """
    Stores the tracker state as one JSON document on disk.

    Transient OS errors (locked files, busy network drives) are retried
    before giving up.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[Any]:
        if not self._path.exists():
            return None
        try:
            text = self._read()
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}")
        except UnicodeDecodeError as e:
            raise CorruptStateError(f"State file {self._path} is not UTF-8 text: {e}")

        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"State file {self._path} is not valid JSON: {e}")

    def save(self, value: Any) -> None:
        try:
            payload = json.dumps(value, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"State is not JSON-serializable: {e}")

        try:
            self._write(payload)
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}")

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _read(self) -> str:
        return self._path.read_text(encoding="utf-8")

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
