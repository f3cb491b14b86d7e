from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class CaptionSchema(BaseModel):
    text: str
    start_time: float
    end_time: float
    is_edited: bool = False

    class Config:
        from_attributes = True


class RecognitionResultSchema(BaseModel):
    transcript: str
    is_final: bool = False


class RecognitionEvent(BaseModel):
    result_index: int = Field(default=0, ge=0)
    results: List[RecognitionResultSchema]
    current_time: float = Field(ge=0)  # video playback position in seconds


class CaptionEdit(BaseModel):
    text: str = Field(min_length=1)


class CaptionSessionResponse(BaseModel):
    captions: List[CaptionSchema]
    current_caption: str
    active_index: int = -1
    auto_saved: bool = False


class SimulatedCaptionResponse(BaseModel):
    caption: str


class DraftRequest(BaseModel):
    notes: str


class DraftResponse(BaseModel):
    notes: str
    captions: List[CaptionSchema]
    saved_at: Optional[datetime] = None
