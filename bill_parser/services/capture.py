"""
Capture/upload stage: pick a bill image, preview it, send it to the parse
service and hand the resulting bill to the edit stage.

States:
    idle -> file_selected -> uploading -> success | failed

success and failed go back to file_selected when a new file is picked, or
to idle when the selection is cleared. Only one upload may be in flight.
"""

import base64
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from loguru import logger

from ..core.errors import (
    BillFlowError,
    InvalidFileType,
    NoFileSelected,
    TransportFault,
    UploadInProgress,
)
from ..models.bill import BillDocument
from .parse_client import ParseBillClient
from .parse_types import ParsedBill
from .storage.handoff import save_document
from .storage.handoff_store_base import HandoffStoreBase
from .totals import compute_total

CaptureState = Literal["idle", "file_selected", "uploading", "success", "failed"]

IMAGE_TYPE_PREFIX = "image/"


class CancellationToken:
    """Per-upload flag. Once cancelled, the upload's late response is dropped."""

    def __init__(self):
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Run callback on cancel (immediately if already cancelled)"""
        if self._cancelled:
            callback()
            return
        self._callbacks.append(callback)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


@dataclass(frozen=True)
class SelectedFile:
    filename: str
    content_type: str
    data: bytes

    def to_data_url(self) -> str:
        """Inline preview of the image, as a browser would show it"""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


def normalize_parsed_bill(parsed: ParsedBill) -> BillDocument:
    """
    Build the handoff document from a parse result.

    A total reported by the parse service is kept verbatim even if it
    disagrees with the items; otherwise it is computed from the items.
    """
    total = parsed.total if parsed.total is not None else compute_total(parsed.items)
    return BillDocument(items=list(parsed.items), total=total)


class CaptureStage:
    def __init__(self, store: HandoffStoreBase, client: ParseBillClient, handoff_key: str | None = None):
        self.store = store
        self.client = client
        self.handoff_key = handoff_key
        self.state: CaptureState = "idle"
        self.selected: Optional[SelectedFile] = None
        self.preview_url: Optional[str] = None
        self.error: Optional[str] = None
        self.document: Optional[BillDocument] = None
        self._token: Optional[CancellationToken] = None

    def select_file(self, filename: str, content_type: str | None, data: bytes) -> SelectedFile:
        """Select a picked or dropped file. Only image/* types are accepted."""
        if self.state == "uploading":
            raise UploadInProgress()

        if not content_type or not content_type.startswith(IMAGE_TYPE_PREFIX):
            self.selected = None
            self.preview_url = None
            self.state = "idle"
            error = InvalidFileType()
            self.error = error.message
            logger.warning("Rejected non-image file", filename=filename, content_type=content_type)
            raise error

        self.selected = SelectedFile(filename=filename, content_type=content_type, data=data)
        self.preview_url = self.selected.to_data_url()
        self.error = None
        self.state = "file_selected"
        logger.debug("Bill image selected", filename=filename, content_type=content_type, size_bytes=len(data))
        return self.selected

    def clear(self) -> None:
        """Remove the current selection and any displayed error"""
        if self.state == "uploading":
            raise UploadInProgress()
        self._reset_to_idle()

    async def upload(self, token: CancellationToken | None = None) -> Optional[BillDocument]:
        """
        Send the selected image to the parse service.

        On success the bill is written to the handoff store and returned.
        Returns None when the upload was cancelled before the response came
        back; nothing is stored in that case. Cancelling the token moves the
        stage to idle right away.

        Raises:
            NoFileSelected: nothing to upload
            UploadInProgress: another upload has not finished
            ParseFailed / TransportFault: the parse service call failed
        """
        if self.state == "uploading":
            raise UploadInProgress()
        if self.selected is None:
            error = NoFileSelected()
            self.error = error.message
            raise error

        token = token or CancellationToken()
        if token.cancelled:
            return None

        self._token = token
        selected = self.selected
        self.state = "uploading"
        self.error = None
        self.document = None
        token.add_callback(lambda: self._on_cancelled(token))

        try:
            parsed = await self.client.parse(selected.filename, selected.content_type, selected.data)
        except BillFlowError as e:
            if token.cancelled:
                logger.info("Discarding failure of cancelled upload", filename=selected.filename)
                return None
            self._fail(token, e.message)
            raise
        except BaseException:
            # Unexpected errors and task cancellation must not leave the stage uploading
            if not token.cancelled:
                self._fail(token, TransportFault.default_message)
            raise

        if token.cancelled:
            logger.info("Discarding response of cancelled upload", filename=selected.filename)
            return None

        document = normalize_parsed_bill(parsed)
        save_document(self.store, document, self.handoff_key)

        self._token = None
        self.document = document
        self.state = "success"
        return document

    def _fail(self, token: CancellationToken, message: str) -> None:
        if self._token is token:
            self._token = None
            self.state = "failed"
            self.error = message

    def _on_cancelled(self, token: CancellationToken) -> None:
        # Only the upload that owns the stage may move it back to idle
        if self._token is token and self.state == "uploading":
            self._reset_to_idle()
            logger.info("Upload cancelled")

    def _reset_to_idle(self) -> None:
        self._token = None
        self.selected = None
        self.preview_url = None
        self.error = None
        self.state = "idle"

    def cancel_upload(self) -> bool:
        """Cancel the in-flight upload, if any, and return to idle"""
        if self.state != "uploading" or self._token is None:
            return False

        self._token.cancel()
        return True

    def snapshot(self) -> dict:
        return {
            "state": self.state,
            "filename": self.selected.filename if self.selected else None,
            "content_type": self.selected.content_type if self.selected else None,
            "preview_url": self.preview_url,
            "error": self.error,
            "document": self.document.model_dump() if self.document else None,
        }
