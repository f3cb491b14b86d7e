from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime


class Landmark(BaseModel):
    x: float
    y: float
    z: Optional[float] = None


class ClassifyRequest(BaseModel):
    landmarks: List[Landmark]


class ClassifyResponse(BaseModel):
    gesture: Optional[str] = None
    text: Optional[str] = None


class TranslateRequest(BaseModel):
    gestures: List[str]


class TranslateResponse(BaseModel):
    text: str


class GestureTableResponse(BaseModel):
    gesture_to_text: Dict[str, str]
    sequences: Dict[str, str]


class FrameRequest(BaseModel):
    hands: List[List[Landmark]] = []  # one landmark list per detected hand
    timestamp_ms: Optional[int] = None  # client clock (Date.now()); server time when omitted


class FrameResponse(BaseModel):
    hand_detected: bool
    gesture: Optional[str] = None
    accepted: bool
    current_gesture: Optional[str] = None
    translated_text: str


class VideoFrame(BaseModel):
    hands: List[List[Landmark]] = []
    timestamp_ms: int


class VideoRequest(BaseModel):
    frames: List[VideoFrame]


class VideoResponse(BaseModel):
    gestures: List[str]
    translated_text: str
    frames: int


class HistoryEntry(BaseModel):
    text: str
    gestures: List[str]
    timestamp: datetime


class SessionStateResponse(BaseModel):
    detected_gestures: List[str]
    current_gesture: Optional[str] = None
    translated_text: str
    hand_detected: bool
    history: List[HistoryEntry]
    training_gesture: Optional[str] = None
    training_samples: int
    gesture_averages: Dict[str, List[float]]


class TrainingStartRequest(BaseModel):
    gesture: str = Field(min_length=1)


class TrainingResultResponse(BaseModel):
    gesture_averages: Dict[str, List[float]]


class ChallengeStartRequest(BaseModel):
    timestamp_ms: Optional[int] = None


class AchievementSchema(BaseModel):
    id: str
    title: str
    description: str
    total: int
    reward: int
    progress: int
    unlocked: bool


class ChallengeSchema(BaseModel):
    id: str
    title: str
    description: str
    gestures: List[str]
    time_limit: int
    reward: int
    completed: bool


class LessonSchema(BaseModel):
    id: str
    title: str
    description: str
    gestures: List[str]
    duration: int
    completed: bool
    score: float
    attempts: int


class LearningPathSchema(BaseModel):
    id: str
    title: str
    description: str
    level: str
    lessons: List[LessonSchema]
    completed: bool
    progress: float


class UserProgressSchema(BaseModel):
    current_path: str
    completed_lessons: List[str]
    total_practice: int
    accuracy: float
    streak: int
    level: int
    experience: int


class ProgressResponse(BaseModel):
    score: int
    streak: int
    achievements: List[AchievementSchema]
    challenges: List[ChallengeSchema]
    learning_paths: List[LearningPathSchema]
    user_progress: UserProgressSchema
    active_challenge: Optional[ChallengeSchema] = None
    challenge_progress: List[str]
    challenge_time_left: Optional[int] = None
    active_lesson: Optional[LessonSchema] = None
    lesson_progress: float
    practice_mode: bool
