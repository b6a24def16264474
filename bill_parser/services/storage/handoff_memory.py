"""
In-memory handoff store (default backend).
Contents are lost when the process exits.
"""
from typing import Dict, Optional
from .handoff_store_base import HandoffStoreBase


class MemoryHandoffStore(HandoffStoreBase):
    def __init__(self):
        self._values: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        """Get the raw value for key"""
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        """Overwrite the value for key"""
        self._values[key] = value

    def clear(self) -> None:
        self._values.clear()
