"""
Reading and writing the bill document in the handoff store.

The stored payload is the JSON form of {items, total} with no version tag.
Anything that does not have exactly that shape is treated as absent.
"""

import json
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from ...core.config import settings
from ...core.errors import MalformedStoredDocument
from ...models.bill import BillDocument
from .handoff_store_base import HandoffStoreBase
from .handoff_memory import MemoryHandoffStore
from .handoff_sqlite import SQLiteHandoffStore


def encode_document(document: BillDocument) -> str:
    return json.dumps(document.model_dump(), ensure_ascii=False)


def decode_document(raw: str) -> BillDocument:
    """Strict decode. Raises MalformedStoredDocument for any unexpected shape."""
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedStoredDocument(f"Stored bill is not valid JSON: {e}")

    if not isinstance(payload, dict):
        raise MalformedStoredDocument("Stored bill is not a JSON object")

    try:
        return BillDocument.model_validate(payload)
    except ValidationError as e:
        raise MalformedStoredDocument(f"Stored bill has the wrong shape: {e.error_count()} error(s)")


def save_document(store: HandoffStoreBase, document: BillDocument, key: str | None = None) -> None:
    key = key or settings.handoff_key
    store.set(key, encode_document(document))
    logger.info("Bill document written to handoff store", key=key, items=len(document.items), total=document.total)


def load_document(store: HandoffStoreBase, key: str | None = None) -> Optional[BillDocument]:
    """Return the stored bill, or None when it is missing or malformed"""
    key = key or settings.handoff_key
    raw = store.get(key)
    if raw is None:
        return None

    try:
        return decode_document(raw)
    except MalformedStoredDocument as e:
        logger.warning("Ignoring malformed handoff document", key=key, reason=e.message)
        return None


def create_handoff_store(backend: str | None = None, db_path: str | None = None) -> HandoffStoreBase:
    """Build the store selected by HANDOFF_BACKEND"""
    backend = (backend or settings.handoff_backend).lower()
    if backend == "sqlite":
        return SQLiteHandoffStore(db_path or settings.handoff_db_path)
    if backend == "memory":
        return MemoryHandoffStore()
    raise ValueError(f"Unknown handoff backend '{backend}', expected 'memory' or 'sqlite'")
