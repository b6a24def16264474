"""
Edit stage: load the bill handed over by the capture stage, let the user
fix names and prices, and pass the result on to the split stage.
"""

from typing import Literal

from loguru import logger

from ..core.errors import NoDocumentLoaded
from ..models.bill import BillDocument, LineItem
from . import edit_ops
from .storage.handoff import load_document, save_document
from .storage.handoff_store_base import HandoffStoreBase
from .totals import ZERO_TOTAL, compute_total

EditState = Literal["empty", "loaded"]

EMPTY_HINT = "Your parsed bill will appear here. Upload an image to get started."


class EditStage:
    def __init__(self, store: HandoffStoreBase, handoff_key: str | None = None):
        self.store = store
        self.handoff_key = handoff_key
        self.state: EditState = "empty"
        self.edited = False
        self._items: list[LineItem] = []
        self._total = ZERO_TOTAL

    def open(self) -> EditState:
        """
        Enter the stage by reading the handoff store.

        A missing or malformed document leaves the stage empty; this never raises.
        """
        document = load_document(self.store, self.handoff_key)
        self.edited = False

        if document is None:
            self.state = "empty"
            self._items = []
            self._total = ZERO_TOTAL
            logger.info("Edit stage opened without a bill")
            return self.state

        self.state = "loaded"
        self._items = list(document.items)
        # The loaded total is shown as-is until the first edit
        self._total = document.total
        logger.info("Edit stage opened", items=len(self._items), total=self._total)
        return self.state

    @property
    def items(self) -> list[LineItem]:
        return list(self._items)

    @property
    def total(self) -> str:
        return self._total

    def _require_loaded(self):
        if self.state != "loaded":
            raise NoDocumentLoaded()

    def _apply(self, items: list[LineItem]) -> list[LineItem]:
        self._items = items
        self._total = compute_total(items)
        self.edited = True
        return self.items

    def update_field(self, index: int, field: edit_ops.EditableField, value: str) -> list[LineItem]:
        self._require_loaded()
        return self._apply(edit_ops.update_field(self._items, index, field, value))

    def add_item(self) -> list[LineItem]:
        self._require_loaded()
        return self._apply(edit_ops.add_item(self._items))

    def remove_item(self, index: int) -> list[LineItem]:
        self._require_loaded()
        return self._apply(edit_ops.remove_item(self._items, index))

    def current_document(self) -> BillDocument:
        return BillDocument(items=self._items, total=self._total)

    def confirm(self) -> BillDocument:
        """Write the current items and total back for the split stage"""
        self._require_loaded()
        document = self.current_document()
        save_document(self.store, document, self.handoff_key)
        logger.info("Bill confirmed for splitting", items=len(document.items), total=document.total)
        return document

    def snapshot(self) -> dict:
        return {
            "state": self.state,
            "items": [item.model_dump() for item in self._items],
            "total": self._total,
            "edited": self.edited,
            "hint": EMPTY_HINT if self.state == "empty" else None,
        }
