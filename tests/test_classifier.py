import pytest

from app.modules.sign_language.classifier import (
    HAND_LANDMARK_COUNT, THUMB_TIP, INDEX_TIP, MIDDLE_TIP, WRIST,
    detect_gesture, hand_features,
)
from app.modules.sign_language.schemas import Landmark


def make_hand(index=(0.5, 0.5), middle=(0.5, 0.5), wrist=(0.5, 0.5), thumb=(0.5, 0.5)):
    """21 landmarks at the centre; thumb, index, middle tips and wrist placed as given."""
    hand = [Landmark(x=0.5, y=0.5) for _ in range(HAND_LANDMARK_COUNT)]
    hand[THUMB_TIP] = Landmark(x=thumb[0], y=thumb[1])
    hand[INDEX_TIP] = Landmark(x=index[0], y=index[1])
    hand[MIDDLE_TIP] = Landmark(x=middle[0], y=middle[1])
    hand[WRIST] = Landmark(x=wrist[0], y=wrist[1])
    return hand


def test_fist_is_a():
    """Index and middle tips touching the thumb classify as A."""
    assert detect_gesture(make_hand(index=(0.55, 0.5), middle=(0.5, 0.55))) == "A"


def test_point_is_b():
    assert detect_gesture(make_hand(index=(0.8, 0.5), middle=(0.55, 0.5))) == "B"


def test_peace_is_c():
    assert detect_gesture(make_hand(index=(0.55, 0.5), middle=(0.5, 0.8))) == "C"


def test_open_hand_is_d():
    assert detect_gesture(make_hand(index=(0.8, 0.5), middle=(0.5, 0.8))) == "D"


def test_between_thresholds_is_unclassified():
    """A thumb-index distance of 0.15 is neither close nor open."""
    assert detect_gesture(make_hand(index=(0.65, 0.5), middle=(0.5, 0.5))) is None


def test_thresholds_are_strict():
    """Distances of exactly 0.1 or 0.2 are neither close nor open."""
    assert detect_gesture(make_hand(thumb=(0, 0), index=(0.1, 0), middle=(0, 0))) is None
    assert detect_gesture(make_hand(thumb=(0, 0), index=(0.2, 0), middle=(0, 0))) is None
    assert detect_gesture(make_hand(thumb=(0, 0), index=(0.25, 0), middle=(0, 0.2))) is None


def test_incomplete_hand_is_unclassified():
    assert detect_gesture([]) is None
    assert detect_gesture(None) is None
    assert detect_gesture(make_hand()[:10]) is None


def test_hand_features():
    hand = make_hand(index=(0.5, 0.2), middle=(0.6, 0.2), wrist=(0.5, 0.9))
    features = hand_features(hand)

    assert set(features) == {
        "thumb_to_index", "index_to_middle", "middle_to_ring", "ring_to_pinky",
        "thumb_to_wrist", "index_to_wrist", "middle_to_wrist",
    }
    assert features["thumb_to_index"] == pytest.approx(0.3)
    assert features["index_to_middle"] == pytest.approx(0.1)
    assert features["index_to_wrist"] == pytest.approx(0.7)
    assert features["thumb_to_wrist"] == pytest.approx(abs(hand[THUMB_TIP].y - 0.9))


def test_hand_features_rejects_incomplete_hand():
    with pytest.raises(ValueError):
        hand_features(make_hand()[:5])
