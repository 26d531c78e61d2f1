"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the JSON file for another backend later
2. Use in-memory storage for testing
3. Keep the ledger decoupled from storage implementation

The interface is intentionally tiny: the whole state is one JSON
document, loaded once at startup and saved after every change.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class StateStorageInterface(ABC):
    """
    Abstract interface for the tracker state document.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> Optional[Any]:
        """
        Load the stored document.

        Returns:
            The raw JSON value, or None if nothing has been stored yet

        Raises:
            StorageError: If the backend cannot be read
            CorruptStateError: If the stored document cannot be decoded
        """
        pass

    @abstractmethod
    def save(self, value: Any) -> None:
        """
        Replace the stored document.

        Args:
            value: JSON-serializable document

        Raises:
            StorageError: If save fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptStateError(StorageError):
    """Stored document exists but cannot be decoded."""
    pass