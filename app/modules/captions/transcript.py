"""
Caption timeline built from browser speech-recognition results, plus the
plain-text notes format used for auto-save and export:

    [m:ss - m:ss] caption text

with one blank line between captions.
"""
import math
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from app.config.settings import settings

NOTES_SEPARATOR = "\n\n"
_NOTE_LINE = re.compile(r"\[(\d+:\d+) - (\d+:\d+)\] (.+)")

SIMULATED_CAPTIONS = [
    "This is a simulated caption for demonstration purposes.",
    "In a real implementation, this would be replaced with actual speech-to-text results.",
    "The captions would be synchronized with the video playback.",
]


@dataclass
class CaptionEntry:
    text: str
    start_time: float
    end_time: float
    is_edited: bool = False


@dataclass
class RecognitionResult:
    transcript: str
    is_final: bool


def format_time(seconds: float) -> str:
    minutes = math.floor(seconds / 60)
    remaining = math.floor(seconds % 60)
    return f"{minutes}:{remaining:02d}"


def time_to_seconds(value: str) -> int:
    minutes, seconds = value.split(":")
    return int(minutes) * 60 + int(seconds)


def render_notes(entries: Sequence[CaptionEntry]) -> str:
    return NOTES_SEPARATOR.join(
        f"[{format_time(e.start_time)} - {format_time(e.end_time)}] {e.text}" for e in entries
    )


def parse_notes(text: str) -> List[CaptionEntry]:
    """Inverse of render_notes; blocks that don't match the format are dropped."""
    entries = []
    for block in (text or "").split(NOTES_SEPARATOR):
        match = _NOTE_LINE.search(block)
        if not match:
            continue
        start, end, caption = match.groups()
        entries.append(CaptionEntry(caption, time_to_seconds(start), time_to_seconds(end), is_edited=True))
    return entries


def simulated_captions(seconds_each: Optional[int] = None) -> List[CaptionEntry]:
    """Fixed demo captions for browsers without speech recognition."""
    step = settings.simulated_caption_seconds if seconds_each is None else seconds_each
    return [CaptionEntry(text, i * step, (i + 1) * step) for i, text in enumerate(SIMULATED_CAPTIONS)]


def simulated_caption_at(current_time: float, duration: float) -> str:
    """Demo caption for a playback position, advancing evenly over the clip."""
    count = len(SIMULATED_CAPTIONS)
    if not duration or duration <= 0:
        return SIMULATED_CAPTIONS[0]
    index = 0
    while index < count - 1 and current_time > duration * (index + 1) / count:
        index += 1
    return SIMULATED_CAPTIONS[index]


class CaptionTranscript:
    def __init__(self, seconds_per_char: Optional[float] = None):
        self.seconds_per_char = settings.caption_seconds_per_char if seconds_per_char is None else seconds_per_char
        self.entries: List[CaptionEntry] = []
        self.final_transcript = ""
        self.current_caption = ""

    def apply_results(self, result_index: int, results: Sequence[RecognitionResult], current_time: float) -> List[CaptionEntry]:
        """Fold one recognition event into the timeline. Returns the entries it added."""
        added = []
        interim = ""
        for result in results[result_index:]:
            if result.is_final:
                self.final_transcript += result.transcript + " "
                entry = CaptionEntry(
                    text=result.transcript,
                    start_time=max(0.0, current_time - len(result.transcript) * self.seconds_per_char),
                    end_time=current_time,
                )
                if self.entries:
                    self.entries[-1].end_time = entry.start_time
                self.entries.append(entry)
                added.append(entry)
            else:
                interim += result.transcript
        self.current_caption = self.final_transcript + interim
        return added

    def active_index(self, current_time: float) -> int:
        for i, entry in enumerate(self.entries):
            if entry.start_time <= current_time <= entry.end_time:
                return i
        return -1

    def edit(self, index: int, text: str) -> CaptionEntry:
        if index < 0 or index >= len(self.entries):
            raise IndexError(index)
        self.entries[index].text = text
        self.entries[index].is_edited = True
        return self.entries[index]

    def load(self, entries: List[CaptionEntry]) -> None:
        self.entries = entries

    def reset(self) -> None:
        self.entries = []
        self.final_transcript = ""
        self.current_caption = ""

    def notes(self) -> str:
        return render_notes(self.entries)
