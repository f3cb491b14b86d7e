"""Per-user caption transcripts and auto-saved notes drafts, held in process memory."""
import threading
import logging
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

from app.modules.captions.transcript import CaptionTranscript

logger = logging.getLogger(__name__)
_lock = threading.Lock()
_transcripts: Dict[str, CaptionTranscript] = {}
_drafts: Dict[str, Tuple[str, datetime]] = {}


def get_transcript(user_id: str) -> CaptionTranscript:
    with _lock:
        transcript = _transcripts.get(user_id)
        if transcript is None:
            transcript = CaptionTranscript()
            _transcripts[user_id] = transcript
        return transcript


def discard_transcript(user_id: str) -> bool:
    with _lock:
        return _transcripts.pop(user_id, None) is not None


def save_draft(user_id: str, notes: str) -> datetime:
    saved_at = datetime.now(timezone.utc)
    with _lock:
        _drafts[user_id] = (notes, saved_at)
    logger.debug(f"Auto-saved captions for user {user_id}")
    return saved_at


def get_draft(user_id: str) -> Optional[Tuple[str, datetime]]:
    with _lock:
        return _drafts.get(user_id)


def delete_draft(user_id: str) -> bool:
    with _lock:
        return _drafts.pop(user_id, None) is not None


def reset_store() -> None:
    with _lock:
        _transcripts.clear()
        _drafts.clear()
