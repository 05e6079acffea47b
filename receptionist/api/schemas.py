# receptionist/api/schemas.py
from __future__ import annotations

from typing import Optional, List

from pydantic import BaseModel, Field

from receptionist.intake.schema import PatientRecord
from receptionist.intake.state import Turn


class TurnSchema(BaseModel):
    id: str
    sender: str
    text: str

    @classmethod
    def from_turn(cls, turn: Turn) -> "TurnSchema":
        return cls(id=turn.id, sender=turn.sender.value, text=turn.text)


class StartIntakeResponse(BaseModel):
    session_id: str
    stage: str
    turns: List[TurnSchema]


class IntakeMessageRequest(BaseModel):
    session_id: str
    message: str = Field(..., max_length=2000)


class IntakeMessageResponse(BaseModel):
    turns: List[TurnSchema]
    stage: str
    is_complete: bool
    summary: Optional[str]


class TranscriptResponse(BaseModel):
    session_id: str
    turns: List[TurnSchema]


class SummaryResponse(BaseModel):
    session_id: str
    stage: str
    patient: PatientRecord
    summary: Optional[str]
