import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from app.modules.sign_language import session as sessions
from app.modules.sign_language.classifier import detect_gesture
from app.modules.sign_language.schemas import (
    ClassifyResponse, FrameRequest, FrameResponse, VideoRequest, VideoResponse,
    SessionStateResponse, TrainingResultResponse, ProgressResponse, HistoryEntry,
    GestureTableResponse, Landmark,
)
from app.modules.sign_language.translator import GESTURE_TO_TEXT, GESTURE_SEQUENCES

logger = logging.getLogger(__name__)


def gesture_table() -> GestureTableResponse:
    return GestureTableResponse(gesture_to_text=GESTURE_TO_TEXT, sequences=GESTURE_SEQUENCES)


def classify(landmarks: List[Landmark]) -> ClassifyResponse:
    gesture = detect_gesture(landmarks)
    return ClassifyResponse(gesture=gesture, text=GESTURE_TO_TEXT.get(gesture) if gesture else None)


class SignLanguageService:
    def __init__(self, user_id: str):
        self.user_id = user_id
        self.session = sessions.get_or_create(user_id)

    def state(self, timestamp_ms: Optional[int] = None) -> SessionStateResponse:
        s = self.session
        timestamp_ms = timestamp_ms if timestamp_ms is not None else sessions.now_ms()
        return SessionStateResponse(
            detected_gestures=s.detected_gestures,
            current_gesture=s.current_gesture_at(timestamp_ms),
            translated_text=s.translated_text,
            hand_detected=s.hand_detected,
            history=[HistoryEntry(**entry) for entry in s.history],
            training_gesture=s.training_gesture,
            training_samples=len(s.training_samples),
            gesture_averages=s.gesture_averages,
        )

    def process_frame(self, frame: FrameRequest) -> FrameResponse:
        timestamp_ms = frame.timestamp_ms if frame.timestamp_ms is not None else sessions.now_ms()
        return FrameResponse(**self.session.process_frame(frame.hands, timestamp_ms))

    def process_video(self, video: VideoRequest) -> VideoResponse:
        frames = sorted(video.frames, key=lambda f: f.timestamp_ms)
        result = self.session.process_video(frames)
        logger.info(f"Processed {len(frames)} video frames for user {self.user_id}: {result['gestures']}")
        return VideoResponse(**result)

    def clear(self) -> SessionStateResponse:
        self.session.clear()
        return self.state()

    def save_translation(self) -> HistoryEntry:
        return HistoryEntry(**self.session.save_translation())

    def history(self) -> List[HistoryEntry]:
        return [HistoryEntry(**entry) for entry in self.session.history]

    def clear_history(self) -> None:
        self.session.clear_history()

    def start_training(self, gesture: str) -> SessionStateResponse:
        self.session.start_training(gesture)
        return self.state()

    def stop_training(self) -> TrainingResultResponse:
        return TrainingResultResponse(gesture_averages=self.session.stop_training())

    def progress(self, timestamp_ms: Optional[int] = None) -> ProgressResponse:
        tracker = self.session.tracker
        timestamp_ms = timestamp_ms if timestamp_ms is not None else sessions.now_ms()
        tracker.expire_challenge(timestamp_ms)
        data: Dict[str, Any] = {
            "score": tracker.score,
            "streak": tracker.streak,
            "achievements": [asdict(a) for a in tracker.achievements],
            "challenges": [asdict(c) for c in tracker.challenges],
            "learning_paths": [asdict(p) for p in tracker.learning_paths],
            "user_progress": asdict(tracker.user_progress),
            "active_challenge": asdict(tracker.active_challenge) if tracker.active_challenge else None,
            "challenge_progress": tracker.challenge_progress,
            "challenge_time_left": tracker.challenge_time_left(timestamp_ms),
            "active_lesson": asdict(tracker.active_lesson) if tracker.active_lesson else None,
            "lesson_progress": tracker.lesson_progress,
            "practice_mode": tracker.practice_mode,
        }
        return ProgressResponse(**data)

    def start_challenge(self, challenge_id: str, timestamp_ms: Optional[int] = None) -> ProgressResponse:
        timestamp_ms = timestamp_ms if timestamp_ms is not None else sessions.now_ms()
        self.session.tracker.start_challenge(challenge_id, timestamp_ms)
        return self.progress(timestamp_ms)

    def start_lesson(self, lesson_id: str) -> ProgressResponse:
        lesson = self.session.tracker.start_lesson(lesson_id)
        self.session.translated_text = f"Practice: {lesson.title}"
        return self.progress()

    def end_session(self) -> bool:
        return sessions.discard(self.user_id)
