import logging
import threading
import time
from datetime import datetime, timezone
from statistics import mean
from typing import Any, Dict, List, Optional, Sequence

from fastapi import HTTPException

from app.config.settings import settings
from app.modules.sign_language.classifier import detect_gesture, hand_features
from app.modules.sign_language.progress import PracticeTracker
from app.modules.sign_language.translator import GESTURE_TO_TEXT, translate

logger = logging.getLogger(__name__)

HAND_WITHOUT_GESTURE = "Hand detected - Try making a gesture!"
NO_GESTURES_IN_VIDEO = "Video processing completed. No gestures detected."

# Oldest entries are dropped past these sizes
MAX_DETECTED_GESTURES = 200
MAX_TRAINING_SAMPLES = 1000


def now_ms() -> int:
    return int(time.time() * 1000)


class TranslatorSession:
    """Live translation state for one user: debounced gesture stream, history, training and practice."""

    def __init__(self, user_id: str, debounce_ms: Optional[int] = None):
        self.user_id = user_id
        self.debounce_ms = settings.gesture_debounce_ms if debounce_ms is None else debounce_ms
        self.detected_gestures: List[str] = []
        self.current_gesture: Optional[str] = None
        self.last_gesture_ms: Optional[int] = None
        self.translated_text = ""
        self.hand_detected = False
        self.history: List[Dict[str, Any]] = []
        self.training_gesture: Optional[str] = None
        self.training_samples: List[Dict[str, float]] = []
        self.gesture_averages: Dict[str, List[float]] = {}
        self.tracker = PracticeTracker()

    def _debounced(self, timestamp_ms: int) -> bool:
        return self.last_gesture_ms is not None and timestamp_ms - self.last_gesture_ms < self.debounce_ms

    def current_gesture_at(self, timestamp_ms: int) -> Optional[str]:
        """The last accepted gesture, cleared once the debounce window has passed."""
        if self.current_gesture is None or not self._debounced(timestamp_ms):
            return None
        return self.current_gesture

    def process_frame(self, hands: Sequence[Sequence], timestamp_ms: int, track_progress: bool = True) -> Dict[str, Any]:
        """Classify the first detected hand and fold the result into the session."""
        self.hand_detected = bool(hands)
        gesture = None
        accepted = False
        if self.hand_detected:
            landmarks = hands[0]
            if self.training_gesture is not None:
                self._collect_training_sample(landmarks)
            gesture = detect_gesture(landmarks)
            if gesture is None:
                if track_progress:
                    self.tracker.record_miss()
                self.translated_text = HAND_WITHOUT_GESTURE
            elif not self._debounced(timestamp_ms):
                accepted = True
                self.last_gesture_ms = timestamp_ms
                self.current_gesture = gesture
                self.detected_gestures.append(gesture)
                del self.detected_gestures[:-MAX_DETECTED_GESTURES]
                self.translated_text = translate(self.detected_gestures)
                if track_progress:
                    self.tracker.record_gesture(gesture, timestamp_ms)
        return {
            "hand_detected": self.hand_detected,
            "gesture": gesture,
            "accepted": accepted,
            "current_gesture": self.current_gesture_at(timestamp_ms),
            "translated_text": self.translated_text,
        }

    def process_video(self, frames: Sequence) -> Dict[str, Any]:
        """Run a clip's frames through the debounced pipeline from a clean slate."""
        self.detected_gestures = []
        self.current_gesture = None
        self.last_gesture_ms = None
        for frame in frames:
            self.process_frame(frame.hands, frame.timestamp_ms, track_progress=False)
        if self.detected_gestures:
            self.translated_text = translate(self.detected_gestures)
        else:
            self.translated_text = NO_GESTURES_IN_VIDEO
        return {
            "gestures": list(self.detected_gestures),
            "translated_text": self.translated_text,
            "frames": len(frames),
        }

    def clear(self) -> None:
        """Clear the running translation; history is kept."""
        self.translated_text = ""
        self.detected_gestures = []
        self.current_gesture = None

    def save_translation(self) -> Dict[str, Any]:
        if not self.translated_text or not self.detected_gestures:
            raise HTTPException(status_code=400, detail="No translation to save")
        entry = {
            "text": self.translated_text,
            "gestures": list(self.detected_gestures),
            "timestamp": datetime.now(timezone.utc),
        }
        self.history.append(entry)
        return entry

    def clear_history(self) -> None:
        self.history = []

    # Training

    def start_training(self, gesture: str) -> None:
        if gesture not in GESTURE_TO_TEXT:
            raise HTTPException(status_code=400, detail=f"Unknown gesture code: {gesture}")
        self.training_gesture = gesture
        self.training_samples = []

    def _collect_training_sample(self, landmarks: Sequence) -> None:
        try:
            self.training_samples.append(hand_features(landmarks))
            del self.training_samples[:-MAX_TRAINING_SAMPLES]
        except ValueError as e:
            logger.debug(f"Training sample skipped: {e}")

    def stop_training(self) -> Dict[str, List[float]]:
        """Average each sample's features, grouped under the trained gesture."""
        if self.training_gesture is None:
            raise HTTPException(status_code=400, detail="Training is not running")
        averages = {self.training_gesture: [mean(s.values()) for s in self.training_samples]}
        logger.info(f"Training analysis for {self.training_gesture}: {len(self.training_samples)} samples")
        self.gesture_averages = averages
        self.training_gesture = None
        self.training_samples = []
        return averages


_lock = threading.Lock()
_sessions: Dict[str, TranslatorSession] = {}


def get_or_create(user_id: str) -> TranslatorSession:
    with _lock:
        session = _sessions.get(user_id)
        if session is None:
            session = TranslatorSession(user_id)
            _sessions[user_id] = session
            logger.debug(f"Created translator session for user {user_id}")
        return session


def discard(user_id: str) -> bool:
    with _lock:
        return _sessions.pop(user_id, None) is not None


def reset_sessions() -> None:
    with _lock:
        _sessions.clear()
