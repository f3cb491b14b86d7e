"""
Practice and gamification state for the sign translator: achievements,
streaks, timed challenges, learning paths and lesson progress.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from fastapi import HTTPException

logger = logging.getLogger(__name__)

CORRECT_EXPERIENCE = 10
INCORRECT_EXPERIENCE = 5
EXPERIENCE_PER_LEVEL = 100


@dataclass
class Achievement:
    id: str
    title: str
    description: str
    total: int
    reward: int
    progress: int = 0
    unlocked: bool = False


@dataclass
class Challenge:
    id: str
    title: str
    description: str
    gestures: List[str]
    time_limit: int  # seconds
    reward: int
    completed: bool = False


@dataclass
class Lesson:
    id: str
    title: str
    description: str
    gestures: List[str]
    duration: int  # minutes
    completed: bool = False
    score: float = 0
    attempts: int = 0


@dataclass
class LearningPath:
    id: str
    title: str
    description: str
    level: str  # beginner | intermediate | advanced
    lessons: List[Lesson]
    completed: bool = False
    progress: float = 0


@dataclass
class UserProgress:
    current_path: str = "basic-communication"
    completed_lessons: List[str] = field(default_factory=list)
    total_practice: int = 0
    accuracy: float = 0
    streak: int = 0
    level: int = 1
    experience: int = 0


def default_achievements() -> List[Achievement]:
    return [
        Achievement("first_gesture", "First Steps", "Successfully detect your first gesture", total=1, reward=10),
        Achievement("gesture_master", "Gesture Master", "Detect 50 gestures correctly", total=50, reward=50),
        Achievement("perfect_streak", "Perfect Streak", "Maintain a streak of 10 correct gestures", total=10, reward=30),
    ]


def default_challenges() -> List[Challenge]:
    return [
        Challenge("hello_world", "Hello World", "Perform the 'Hello' gesture", ["A"], time_limit=60, reward=20),
        Challenge("basic_phrases", "Basic Phrases", "Perform 'Hello', 'Thank you', and 'Please' in sequence",
                  ["A", "B", "C"], time_limit=90, reward=30),
    ]


def default_learning_paths() -> List[LearningPath]:
    return [
        LearningPath(
            "basic-communication", "Basic Communication",
            "Learn essential signs for everyday communication", "beginner",
            lessons=[
                Lesson("greetings", "Greetings", "Learn basic greeting signs", ["A", "B", "C"], duration=10),
                Lesson("common-phrases", "Common Phrases", "Essential phrases for daily conversation",
                       ["D", "E", "F"], duration=15),
            ],
        ),
        LearningPath(
            "advanced-conversation", "Advanced Conversation",
            "Master complex conversations in sign language", "intermediate",
            lessons=[
                Lesson("emotions", "Expressing Emotions", "Learn to express feelings and emotions",
                       ["G", "H", "I"], duration=20),
                Lesson("storytelling", "Storytelling", "Learn to tell stories in sign language",
                       ["J", "K", "L"], duration=25),
            ],
        ),
    ]


class PracticeTracker:
    def __init__(self):
        self.score = 0
        self.streak = 0
        self.achievements = default_achievements()
        self.challenges = default_challenges()
        self.learning_paths = default_learning_paths()
        self.user_progress = UserProgress()
        self.active_challenge: Optional[Challenge] = None
        self.challenge_started_ms: Optional[int] = None
        self.challenge_progress: List[str] = []
        self.active_lesson: Optional[Lesson] = None
        self.lesson_progress: float = 0

    @property
    def practice_mode(self) -> bool:
        return self.active_lesson is not None

    def record_gesture(self, gesture: str, timestamp_ms: int) -> None:
        """Apply an accepted gesture to streak, achievements, the active challenge and lesson."""
        self.streak += 1
        self._update_achievements()
        self.expire_challenge(timestamp_ms)
        if self.active_challenge:
            self._check_challenge(gesture)
        if self.active_lesson:
            self._practice(gesture)

    def record_miss(self) -> None:
        """A hand was visible but matched no gesture."""
        self.streak = 0

    def _update_achievements(self) -> None:
        for achievement in self.achievements:
            if achievement.unlocked:
                continue
            if achievement.id == "first_gesture":
                achievement.progress = 1
            elif achievement.id == "gesture_master":
                achievement.progress = min(achievement.progress + 1, achievement.total)
            elif achievement.id == "perfect_streak":
                achievement.progress = min(self.streak, achievement.total)
            if achievement.progress >= achievement.total:
                achievement.unlocked = True
                self.score += achievement.reward
                logger.debug(f"Achievement unlocked: {achievement.id}")

    # Challenges

    def _find_challenge(self, challenge_id: str) -> Challenge:
        for challenge in self.challenges:
            if challenge.id == challenge_id:
                return challenge
        raise HTTPException(status_code=404, detail="Challenge not found")

    def start_challenge(self, challenge_id: str, timestamp_ms: int) -> Challenge:
        challenge = self._find_challenge(challenge_id)
        self.active_challenge = challenge
        self.challenge_started_ms = timestamp_ms
        self.challenge_progress = []
        return challenge

    def challenge_time_left(self, timestamp_ms: int) -> Optional[int]:
        if not self.active_challenge or self.challenge_started_ms is None:
            return None
        elapsed = (timestamp_ms - self.challenge_started_ms) // 1000
        return max(self.active_challenge.time_limit - elapsed, 0)

    def expire_challenge(self, timestamp_ms: int) -> bool:
        """Drop the active challenge once its time limit has passed."""
        left = self.challenge_time_left(timestamp_ms)
        if left is None or left > 0:
            return False
        logger.debug(f"Challenge expired: {self.active_challenge.id}")
        self._end_challenge()
        return True

    def _end_challenge(self) -> None:
        self.active_challenge = None
        self.challenge_started_ms = None

    def _check_challenge(self, gesture: str) -> None:
        challenge = self.active_challenge
        self.challenge_progress.append(gesture)
        completed = all(
            i < len(self.challenge_progress) and self.challenge_progress[i] == g
            for i, g in enumerate(challenge.gestures)
        )
        if completed:
            self.score += challenge.reward
            challenge.completed = True
            self._end_challenge()

    # Lessons

    def _find_lesson(self, lesson_id: str):
        for path in self.learning_paths:
            for lesson in path.lessons:
                if lesson.id == lesson_id:
                    return path, lesson
        raise HTTPException(status_code=404, detail="Lesson not found")

    def start_lesson(self, lesson_id: str) -> Lesson:
        path, lesson = self._find_lesson(lesson_id)
        self.user_progress.current_path = path.id
        self.active_lesson = lesson
        self.lesson_progress = 0
        return lesson

    def _practice(self, gesture: str) -> None:
        lesson = self.active_lesson
        correct = gesture in lesson.gestures
        self._update_user_progress(correct)
        if correct:
            self.lesson_progress += 100 / len(lesson.gestures)
            if self.lesson_progress >= 100:
                self._complete_lesson(self.lesson_progress)

    def _update_user_progress(self, correct: bool) -> None:
        progress = self.user_progress
        total = progress.total_practice + 1
        progress.accuracy = (progress.accuracy * progress.total_practice + (1 if correct else 0)) / total
        progress.total_practice = total
        progress.streak = progress.streak + 1 if correct else 0
        progress.experience += CORRECT_EXPERIENCE if correct else INCORRECT_EXPERIENCE
        if progress.experience >= progress.level * EXPERIENCE_PER_LEVEL:
            progress.level += 1
            progress.experience = 0

    def _complete_lesson(self, score: float) -> None:
        path, lesson = self._find_lesson(self.active_lesson.id)
        lesson.completed = True
        lesson.score = max(lesson.score, score)
        lesson.attempts += 1
        done = len([l for l in path.lessons if l.completed])
        path.progress = done / len(path.lessons) * 100
        path.completed = path.progress == 100
        self.user_progress.completed_lessons.append(lesson.id)
        logger.debug(f"Lesson completed: {lesson.id}")
        self.active_lesson = None
        self.lesson_progress = 0
