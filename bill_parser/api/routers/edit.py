from fastapi import APIRouter, Depends
from ..deps import ConfirmResponse, EditResponse, get_edit_stage
from ...core.config import settings
from ...models.requests import ItemUpdateRequest
from ...services.editor import EditStage

router = APIRouter(tags=["edit"])


@router.post("/edit/open", response_model=EditResponse)
async def open_edit(stage: EditStage = Depends(get_edit_stage)):
    """Enter the edit stage by loading the stored bill (empty state if there is none)"""
    stage.open()
    return stage.snapshot()


@router.get("/edit", response_model=EditResponse)
async def get_edit(stage: EditStage = Depends(get_edit_stage)):
    return stage.snapshot()


@router.post("/edit/items", response_model=EditResponse)
async def add_item(stage: EditStage = Depends(get_edit_stage)):
    """Append a blank item priced 0.00"""
    stage.add_item()
    return stage.snapshot()


@router.patch("/edit/items/{index}", response_model=EditResponse)
async def update_item(index: int, req: ItemUpdateRequest, stage: EditStage = Depends(get_edit_stage)):
    """Change the name or price of one item; the total is recomputed"""
    stage.update_field(index, req.field, req.value)
    return stage.snapshot()


@router.delete("/edit/items/{index}", response_model=EditResponse)
async def remove_item(index: int, stage: EditStage = Depends(get_edit_stage)):
    stage.remove_item(index)
    return stage.snapshot()


@router.post("/edit/confirm", response_model=ConfirmResponse)
async def confirm(stage: EditStage = Depends(get_edit_stage)):
    """Store the edited bill for the split stage"""
    document = stage.confirm()
    return ConfirmResponse(document=document)


@router.get("/handoff")
async def get_handoff(stage: EditStage = Depends(get_edit_stage)):
    """Raw handoff payload as stored (for debugging)"""
    key = stage.handoff_key or settings.handoff_key
    return {"key": key, "raw": stage.store.get(key)}
