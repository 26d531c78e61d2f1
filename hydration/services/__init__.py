"""Services package."""

from hydration.services.persistence import PersistenceGateway
from hydration.services.storage import (
    CorruptStateError,
    InMemoryStorage,
    JsonFileStorage,
    StateStorageInterface,
    StorageError,
)

__all__ = [
    # Persistence
    "PersistenceGateway",
    # Storage services
    "CorruptStateError",
    "InMemoryStorage",
    "JsonFileStorage",
    "StateStorageInterface",
    "StorageError",
]
