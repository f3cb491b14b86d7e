from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from app.modules.captions.schemas import (
    CaptionSessionResponse, RecognitionEvent, CaptionEdit, SimulatedCaptionResponse,
    DraftRequest, DraftResponse
)
from app.modules.captions.service import CaptionService, EXPORT_FILENAME
from app.modules.captions.transcript import simulated_caption_at
from app.core.dependencies import get_current_user
from typing import Dict, Optional

router = APIRouter(prefix="/captions", tags=["captions"])


def get_caption_service(user_data: Dict = Depends(get_current_user)) -> CaptionService:
    return CaptionService(user_data["id"])


@router.get("/session", response_model=CaptionSessionResponse)
async def get_session(
    current_time: Optional[float] = None,
    service: CaptionService = Depends(get_caption_service)
):
    """Captions so far; active_index is set when current_time is given"""
    return service.state(current_time)


@router.post("/session", response_model=CaptionSessionResponse)
async def reset_session(service: CaptionService = Depends(get_caption_service)):
    """Clear captions when a new video is selected"""
    return service.reset()


@router.delete("/session", status_code=204)
async def end_session(service: CaptionService = Depends(get_caption_service)):
    """Discard the caller's caption session"""
    service.end_session()
    return None


@router.post("/session/results", response_model=CaptionSessionResponse)
async def apply_recognition(
    event: RecognitionEvent,
    service: CaptionService = Depends(get_caption_service)
):
    """Apply one speech-recognition result event"""
    return service.apply_recognition(event)


@router.post("/session/simulated", response_model=CaptionSessionResponse)
async def load_simulated(service: CaptionService = Depends(get_caption_service)):
    return service.load_simulated()


@router.get("/simulated", response_model=SimulatedCaptionResponse)
async def get_simulated_caption(current_time: float = 0, duration: float = 0):
    """Demo caption for a playback position"""
    return SimulatedCaptionResponse(caption=simulated_caption_at(current_time, duration))


@router.put("/session/captions/{index}", response_model=CaptionSessionResponse)
async def edit_caption(
    index: int,
    edit: CaptionEdit,
    service: CaptionService = Depends(get_caption_service)
):
    """Edit a caption's text"""
    return service.edit_caption(index, edit.text)


@router.get("/draft", response_model=DraftResponse)
async def get_draft(service: CaptionService = Depends(get_caption_service)):
    """Last auto-saved notes"""
    return service.get_draft()


@router.put("/draft", response_model=DraftResponse)
async def save_draft(
    draft: DraftRequest,
    service: CaptionService = Depends(get_caption_service)
):
    return service.save_draft(draft.notes)


@router.post("/draft/restore", response_model=CaptionSessionResponse)
async def restore_draft(service: CaptionService = Depends(get_caption_service)):
    """Load the auto-saved notes back into the caption session"""
    return service.restore_draft()


@router.delete("/draft", status_code=204)
async def delete_draft(service: CaptionService = Depends(get_caption_service)):
    service.delete_draft()
    return None


@router.get("/export", response_class=PlainTextResponse)
async def export_notes(service: CaptionService = Depends(get_caption_service)):
    """Download captions as a text file"""
    return PlainTextResponse(
        service.export_notes(),
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
