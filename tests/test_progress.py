import pytest
from fastapi import HTTPException

from app.modules.sign_language.progress import PracticeTracker


@pytest.fixture
def tracker():
    return PracticeTracker()


def achievement(tracker, achievement_id):
    return next(a for a in tracker.achievements if a.id == achievement_id)


def test_first_gesture_unlocks_first_steps(tracker):
    tracker.record_gesture("A", 0)

    assert tracker.streak == 1
    assert achievement(tracker, "first_gesture").unlocked is True
    assert achievement(tracker, "gesture_master").progress == 1
    assert tracker.score == 10


def test_ten_in_a_row_unlocks_perfect_streak(tracker):
    for i in range(10):
        tracker.record_gesture("A", i * 1000)

    streak = achievement(tracker, "perfect_streak")
    assert streak.unlocked is True
    assert streak.progress == 10
    assert achievement(tracker, "gesture_master").unlocked is False
    assert tracker.score == 10 + 30


def test_miss_resets_streak(tracker):
    tracker.record_gesture("A", 0)
    tracker.record_gesture("B", 1000)
    tracker.record_miss()

    assert tracker.streak == 0
    tracker.record_gesture("C", 2000)
    assert achievement(tracker, "perfect_streak").progress == 1


def test_challenge_completes_in_order(tracker):
    tracker.start_challenge("basic_phrases", 0)
    for i, gesture in enumerate(["A", "B", "C"]):
        tracker.record_gesture(gesture, (i + 1) * 1000)

    challenge = next(c for c in tracker.challenges if c.id == "basic_phrases")
    assert challenge.completed is True
    assert tracker.active_challenge is None
    assert tracker.score == 10 + 30


def test_challenge_expires(tracker):
    tracker.start_challenge("hello_world", 0)
    assert tracker.challenge_time_left(30_000) == 30

    tracker.record_gesture("A", 61_000)

    challenge = next(c for c in tracker.challenges if c.id == "hello_world")
    assert challenge.completed is False
    assert tracker.active_challenge is None
    assert tracker.challenge_time_left(61_000) is None
    assert tracker.score == 10


def test_unknown_challenge_and_lesson(tracker):
    with pytest.raises(HTTPException) as exc:
        tracker.start_challenge("missing", 0)
    assert exc.value.status_code == 404

    with pytest.raises(HTTPException) as exc:
        tracker.start_lesson("missing")
    assert exc.value.status_code == 404


def test_lesson_completion(tracker):
    tracker.start_lesson("greetings")
    assert tracker.practice_mode is True
    assert tracker.user_progress.current_path == "basic-communication"

    for i, gesture in enumerate(["A", "B", "C"]):
        tracker.record_gesture(gesture, i * 1000)

    path = tracker.learning_paths[0]
    lesson = path.lessons[0]
    assert lesson.completed is True
    assert lesson.attempts == 1
    assert lesson.score == pytest.approx(100)
    assert path.progress == pytest.approx(50)
    assert path.completed is False
    assert tracker.user_progress.completed_lessons == ["greetings"]
    assert tracker.user_progress.total_practice == 3
    assert tracker.user_progress.accuracy == 1
    assert tracker.user_progress.experience == 30
    assert tracker.practice_mode is False


def test_wrong_gesture_during_lesson(tracker):
    tracker.start_lesson("greetings")
    tracker.record_gesture("D", 0)

    progress = tracker.user_progress
    assert tracker.lesson_progress == 0
    assert progress.accuracy == 0
    assert progress.streak == 0
    assert progress.experience == 5


def test_level_up_resets_experience(tracker):
    tracker.start_lesson("emotions")
    tracker.user_progress.experience = 95

    tracker.record_gesture("G", 0)

    assert tracker.user_progress.level == 2
    assert tracker.user_progress.experience == 0
    assert tracker.user_progress.current_path == "advanced-conversation"
