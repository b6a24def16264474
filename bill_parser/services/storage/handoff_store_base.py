"""
Abstract base class for handoff store implementations.

The handoff store is the only channel between the capture stage and the
edit stage: one stage writes a serialized bill under a well-known key, the
next stage reads it. Implementations are plain key-value stores without
locking; the flow is single-writer, single-reader.
"""

from abc import ABC, abstractmethod
from typing import Optional


class HandoffStoreBase(ABC):
    """
    Abstract base class for handoff storage.

    Implementations can use:
    - In-memory storage (default, lives as long as the process)
    - SQLite (survives restarts of the API or the CLI)
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the raw value stored under key.

        Args:
            key: Storage key

        Returns:
            Stored text, or None if nothing was written under key
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Write value under key, overwriting any previous value.

        Args:
            key: Storage key
            value: Serialized payload
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every stored value (used by tests and local resets)"""
        pass
