import logging
from typing import Optional
from fastapi import HTTPException

from app.modules.captions import store
from app.modules.captions.schemas import (
    CaptionSchema, CaptionSessionResponse, RecognitionEvent, DraftResponse
)
from app.modules.captions.transcript import (
    RecognitionResult, parse_notes, render_notes, simulated_captions
)

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "lecture-notes.txt"


class CaptionService:
    def __init__(self, user_id: str):
        self.user_id = user_id
        self.transcript = store.get_transcript(user_id)

    def _auto_save(self) -> bool:
        if not self.transcript.entries:
            return False
        store.save_draft(self.user_id, self.transcript.notes())
        return True

    def state(self, current_time: Optional[float] = None, auto_saved: bool = False) -> CaptionSessionResponse:
        return CaptionSessionResponse(
            captions=[CaptionSchema.model_validate(e) for e in self.transcript.entries],
            current_caption=self.transcript.current_caption,
            active_index=self.transcript.active_index(current_time) if current_time is not None else -1,
            auto_saved=auto_saved,
        )

    def reset(self) -> CaptionSessionResponse:
        """Start over for a new video"""
        self.transcript.reset()
        return self.state()

    def end_session(self) -> bool:
        """Drop the caption session; the auto-saved draft is kept"""
        return store.discard_transcript(self.user_id)

    def apply_recognition(self, event: RecognitionEvent) -> CaptionSessionResponse:
        results = [RecognitionResult(r.transcript, r.is_final) for r in event.results]
        if event.result_index > len(results):
            raise HTTPException(status_code=400, detail="result_index is past the end of results")
        self.transcript.apply_results(event.result_index, results, event.current_time)
        return self.state(event.current_time, auto_saved=self._auto_save())

    def load_simulated(self) -> CaptionSessionResponse:
        """Fallback captions when the browser has no speech recognition"""
        logger.info(f"Speech recognition not available for user {self.user_id}, using simulated captions")
        self.transcript.reset()
        self.transcript.load(simulated_captions())
        self.transcript.current_caption = self.transcript.entries[0].text
        return self.state(auto_saved=self._auto_save())

    def edit_caption(self, index: int, text: str) -> CaptionSessionResponse:
        try:
            self.transcript.edit(index, text)
        except IndexError:
            raise HTTPException(status_code=404, detail="Caption not found")
        return self.state(auto_saved=self._auto_save())

    def get_draft(self) -> DraftResponse:
        draft = store.get_draft(self.user_id)
        if draft is None:
            raise HTTPException(status_code=404, detail="No saved captions")
        notes, saved_at = draft
        return DraftResponse(
            notes=notes,
            captions=[CaptionSchema.model_validate(e) for e in parse_notes(notes)],
            saved_at=saved_at,
        )

    def save_draft(self, notes: str) -> DraftResponse:
        saved_at = store.save_draft(self.user_id, notes)
        return DraftResponse(
            notes=notes,
            captions=[CaptionSchema.model_validate(e) for e in parse_notes(notes)],
            saved_at=saved_at,
        )

    def restore_draft(self) -> CaptionSessionResponse:
        """Load saved captions back into the session"""
        draft = self.get_draft()
        entries = parse_notes(draft.notes)
        if entries:
            self.transcript.reset()
            self.transcript.load(entries)
        return self.state()

    def delete_draft(self) -> bool:
        return store.delete_draft(self.user_id)

    def export_notes(self) -> str:
        if not self.transcript.entries:
            raise HTTPException(status_code=400, detail="No captions to export")
        return render_notes(self.transcript.entries)
