"""
Rule-based hand gesture classifier over MediaPipe hand landmarks.

Landmarks arrive as the 21-point list produced by the browser hand model,
with coordinates normalized to the video frame. Only x and y are used.
"""
import math
from typing import Dict, Optional, Sequence

HAND_LANDMARK_COUNT = 21

WRIST = 0
THUMB_TIP = 4
INDEX_TIP = 8
MIDDLE_TIP = 12
RING_TIP = 16
PINKY_TIP = 20

# Distances below CLOSE count as touching, above OPEN as spread apart.
# Anything in between is left unclassified.
CLOSE = 0.1
OPEN = 0.2


def distance(a, b) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def _is_complete(landmarks: Optional[Sequence]) -> bool:
    return bool(landmarks) and len(landmarks) >= HAND_LANDMARK_COUNT


def detect_gesture(landmarks: Optional[Sequence]) -> Optional[str]:
    """Map one hand's landmarks to a gesture code, or None when no rule matches."""
    if not _is_complete(landmarks):
        return None

    thumb = landmarks[THUMB_TIP]
    thumb_index = distance(thumb, landmarks[INDEX_TIP])
    thumb_middle = distance(thumb, landmarks[MIDDLE_TIP])

    if thumb_index < CLOSE and thumb_middle < CLOSE:
        return "A"  # fist
    if thumb_index > OPEN and thumb_middle < CLOSE:
        return "B"  # point
    if thumb_index < CLOSE and thumb_middle > OPEN:
        return "C"  # peace
    if thumb_index > OPEN and thumb_middle > OPEN:
        return "D"  # open hand
    return None


def hand_features(landmarks: Sequence) -> Dict[str, float]:
    """Fingertip spacing and fingertip height above the wrist, used for training samples."""
    if not _is_complete(landmarks):
        raise ValueError(f"Expected {HAND_LANDMARK_COUNT} landmarks, got {len(landmarks or [])}")

    wrist = landmarks[WRIST]
    thumb = landmarks[THUMB_TIP]
    index = landmarks[INDEX_TIP]
    middle = landmarks[MIDDLE_TIP]
    ring = landmarks[RING_TIP]
    pinky = landmarks[PINKY_TIP]

    return {
        "thumb_to_index": distance(thumb, index),
        "index_to_middle": distance(index, middle),
        "middle_to_ring": distance(middle, ring),
        "ring_to_pinky": distance(ring, pinky),
        "thumb_to_wrist": abs(thumb.y - wrist.y),
        "index_to_wrist": abs(index.y - wrist.y),
        "middle_to_wrist": abs(middle.y - wrist.y),
    }
