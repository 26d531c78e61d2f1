"""
Storage Services Package

Provides the abstract interface and concrete implementations for storing
the tracker state. Currently a JSON file on disk, but designed to be swappable.
"""

from hydration.services.storage.interface import (
    CorruptStateError,
    StateStorageInterface,
    StorageError,
)
from hydration.services.storage.json_file import JsonFileStorage
from hydration.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "StateStorageInterface",
    # Exceptions
    "CorruptStateError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
