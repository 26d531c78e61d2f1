"""In-memory storage, for tests and for sessions without a usable file."""

import copy
from typing import Any, Optional

from hydration.services.storage.interface import StateStorageInterface


class InMemoryStorage(StateStorageInterface):
    """Keeps a deep copy of the last saved document."""

    def __init__(self, initial: Optional[Any] = None):
        self._value = copy.deepcopy(initial)
        self.save_count = 0

    def load(self) -> Optional[Any]:
        return copy.deepcopy(self._value)

    def save(self, value: Any) -> None:
        self._value = copy.deepcopy(value)
        self.save_count += 1
