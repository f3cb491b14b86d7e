from typing import Dict, Sequence

UNKNOWN_GESTURE = "Unknown gesture"

GESTURE_TO_TEXT: Dict[str, str] = {
    "A": "Hello",
    "B": "Thank you",
    "C": "Please",
    "D": "Goodbye",
    "E": "Yes",
    "F": "No",
    "G": "Help",
    "H": "Water",
    "I": "Food",
    "J": "Bathroom",
}

# Keyed by the last two gesture codes, joined
GESTURE_SEQUENCES: Dict[str, str] = {
    "AB": "Hello, thank you",
    "AC": "Hello, please",
    "AD": "Hello, goodbye",
    "AE": "Hello, yes",
    "AF": "Hello, no",
}


def translate(gestures: Sequence[str]) -> str:
    """Phrase for the tail of a gesture sequence; two-code phrases win over single codes."""
    if not gestures:
        return UNKNOWN_GESTURE
    sequence = "".join(gestures[-2:])
    if sequence in GESTURE_SEQUENCES:
        return GESTURE_SEQUENCES[sequence]
    return GESTURE_TO_TEXT.get(gestures[-1], UNKNOWN_GESTURE)
