from fastapi import APIRouter, Depends
from app.modules.sign_language.schemas import (
    ClassifyRequest, ClassifyResponse, TranslateRequest, TranslateResponse,
    GestureTableResponse, FrameRequest, FrameResponse, VideoRequest, VideoResponse,
    SessionStateResponse, HistoryEntry, TrainingStartRequest, TrainingResultResponse,
    ChallengeStartRequest, ProgressResponse
)
from app.modules.sign_language.service import SignLanguageService, classify, gesture_table
from app.modules.sign_language.translator import translate
from app.core.dependencies import get_current_user
from typing import List, Dict, Optional

router = APIRouter(prefix="/sign-language", tags=["sign-language"])


def get_sign_language_service(user_data: Dict = Depends(get_current_user)) -> SignLanguageService:
    return SignLanguageService(user_data["id"])


@router.get("/gestures", response_model=GestureTableResponse)
async def get_gestures():
    """Gesture codes and the phrases they translate to"""
    return gesture_table()


@router.post("/classify", response_model=ClassifyResponse)
async def classify_landmarks(
    request: ClassifyRequest,
    user_data: Dict = Depends(get_current_user)
):
    """Classify a single hand's landmarks without touching the session"""
    return classify(request.landmarks)


@router.post("/translate", response_model=TranslateResponse)
async def translate_sequence(
    request: TranslateRequest,
    user_data: Dict = Depends(get_current_user)
):
    """Translate a sequence of gesture codes"""
    return TranslateResponse(text=translate(request.gestures))


@router.get("/session", response_model=SessionStateResponse)
async def get_session(
    timestamp_ms: Optional[int] = None,
    service: SignLanguageService = Depends(get_sign_language_service)
):
    """Session state; pass the client clock used for frames as timestamp_ms"""
    return service.state(timestamp_ms)


@router.delete("/session", status_code=204)
async def end_session(service: SignLanguageService = Depends(get_sign_language_service)):
    """Discard the caller's translator session"""
    service.end_session()
    return None


@router.post("/session/frames", response_model=FrameResponse)
async def process_frame(
    frame: FrameRequest,
    service: SignLanguageService = Depends(get_sign_language_service)
):
    """Feed one video frame's hand landmarks into the live translator"""
    return service.process_frame(frame)


@router.post("/session/video", response_model=VideoResponse)
async def process_video(
    video: VideoRequest,
    service: SignLanguageService = Depends(get_sign_language_service)
):
    """Translate the landmark frames of an uploaded clip"""
    return service.process_video(video)


@router.post("/session/clear", response_model=SessionStateResponse)
async def clear_translation(service: SignLanguageService = Depends(get_sign_language_service)):
    """Clear the running translation (history is kept)"""
    return service.clear()


@router.get("/session/history", response_model=List[HistoryEntry])
async def get_history(service: SignLanguageService = Depends(get_sign_language_service)):
    return service.history()


@router.post("/session/history", response_model=HistoryEntry, status_code=201)
async def save_translation(service: SignLanguageService = Depends(get_sign_language_service)):
    """Save the current translation to history"""
    return service.save_translation()


@router.delete("/session/history", status_code=204)
async def clear_history(service: SignLanguageService = Depends(get_sign_language_service)):
    service.clear_history()
    return None


@router.post("/session/training/start", response_model=SessionStateResponse)
async def start_training(
    request: TrainingStartRequest,
    service: SignLanguageService = Depends(get_sign_language_service)
):
    """Start collecting landmark features for a gesture"""
    return service.start_training(request.gesture)


@router.post("/session/training/stop", response_model=TrainingResultResponse)
async def stop_training(service: SignLanguageService = Depends(get_sign_language_service)):
    """Stop training and return per-sample feature averages"""
    return service.stop_training()


@router.get("/session/progress", response_model=ProgressResponse)
async def get_progress(
    timestamp_ms: Optional[int] = None,
    service: SignLanguageService = Depends(get_sign_language_service)
):
    """Achievements, challenges, learning paths and practice stats"""
    return service.progress(timestamp_ms)


@router.post("/session/challenges/{challenge_id}/start", response_model=ProgressResponse)
async def start_challenge(
    challenge_id: str,
    request: Optional[ChallengeStartRequest] = None,
    service: SignLanguageService = Depends(get_sign_language_service)
):
    """Start a timed challenge"""
    return service.start_challenge(challenge_id, request.timestamp_ms if request else None)


@router.post("/session/lessons/{lesson_id}/start", response_model=ProgressResponse)
async def start_lesson(
    lesson_id: str,
    service: SignLanguageService = Depends(get_sign_language_service)
):
    """Enter practice mode for a lesson"""
    return service.start_lesson(lesson_id)
