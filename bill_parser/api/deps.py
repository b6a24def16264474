
from pydantic import BaseModel
from ..models.bill import BillDocument, LineItem
from ..services.capture import CaptureStage
from ..services.editor import EditStage
from ..services.parse_client import get_parse_client
from ..services.storage.handoff import create_handoff_store

# One user, one of each stage per process. Tests reset these via reset_stages().
handoff_store = create_handoff_store()
capture_stage = CaptureStage(handoff_store, get_parse_client())
edit_stage = EditStage(handoff_store)


def get_capture_stage() -> CaptureStage:
    return capture_stage


def get_edit_stage() -> EditStage:
    return edit_stage


def reset_stages() -> None:
    """Fresh stages over an empty store, re-reading settings"""
    global capture_stage, edit_stage
    handoff_store.clear()
    capture_stage = CaptureStage(handoff_store, get_parse_client())
    edit_stage = EditStage(handoff_store)


class CaptureResponse(BaseModel):
    state: str
    filename: str | None = None
    content_type: str | None = None
    preview_url: str | None = None
    error: str | None = None
    document: BillDocument | None = None


class UploadResponse(BaseModel):
    document: BillDocument | None = None
    cancelled: bool = False
    next_stage: str | None = None  # "edit" once a bill is stored


class EditResponse(BaseModel):
    state: str
    items: list[LineItem]
    total: str
    edited: bool
    hint: str | None = None


class ConfirmResponse(BaseModel):
    document: BillDocument
    next_stage: str = "split"
