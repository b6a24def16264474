from fastapi import APIRouter, Depends, File, UploadFile
from loguru import logger
from ..deps import CaptureResponse, UploadResponse, get_capture_stage
from ...services.capture import CaptureStage

router = APIRouter(prefix="/capture", tags=["capture"])


@router.get("", response_model=CaptureResponse)
async def get_capture(stage: CaptureStage = Depends(get_capture_stage)):
    """Current state of the capture stage (selection, preview, last error)"""
    return stage.snapshot()


@router.post("/file", response_model=CaptureResponse)
async def select_file(file: UploadFile = File(...), stage: CaptureStage = Depends(get_capture_stage)):
    """
    Select a bill image (file picker or drag-and-drop).

    Only image/* uploads are accepted; anything else returns 415 and leaves
    the stage idle with the error message in its snapshot.
    """
    content = await file.read()
    stage.select_file(file.filename or "bill", file.content_type, content)
    return stage.snapshot()


@router.delete("/file", response_model=CaptureResponse)
async def clear_file(stage: CaptureStage = Depends(get_capture_stage)):
    """Remove the selected bill"""
    stage.clear()
    return stage.snapshot()


@router.post("/upload", response_model=UploadResponse)
async def upload(stage: CaptureStage = Depends(get_capture_stage)):
    """
    Send the selected image to the parse service.

    On success the bill is stored for the edit stage and next_stage is "edit".
    If the upload was cancelled while waiting, nothing is stored and
    cancelled is true.
    """
    document = await stage.upload()
    if document is None:
        logger.info("Upload finished after cancellation, response discarded")
        return UploadResponse(cancelled=True)
    return UploadResponse(document=document, next_stage="edit")


@router.post("/cancel")
async def cancel(stage: CaptureStage = Depends(get_capture_stage)):
    """Cancel the in-flight upload, if any"""
    return {"cancelled": stage.cancel_upload(), "state": stage.state}
