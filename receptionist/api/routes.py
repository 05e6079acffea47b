# receptionist/api/routes.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException

from receptionist.intake.state import ConversationState
from receptionist.services import IntakeSessionService, SessionNotFoundError
from .schemas import (
    IntakeMessageRequest,
    IntakeMessageResponse,
    StartIntakeResponse,
    SummaryResponse,
    TranscriptResponse,
    TurnSchema,
)

router = APIRouter()

_service = IntakeSessionService()


def _require_session(session_id: str) -> ConversationState:
    try:
        return _service.get_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=404,
            detail="Intake session not found. Start a new intake session.",
        )


@router.post("/intake/start", response_model=StartIntakeResponse)
def start_intake() -> StartIntakeResponse:
    """
    Start a new intake conversation; the agent greets first.
    """
    state = _service.start_session()

    return StartIntakeResponse(
        session_id=state.id,
        stage=state.stage.value,
        turns=[TurnSchema.from_turn(t) for t in state.log],
    )


@router.post("/intake/message", response_model=IntakeMessageResponse)
async def intake_message(payload: IntakeMessageRequest) -> IntakeMessageResponse:
    state = _require_session(payload.session_id)

    turns = await _service.handle_turn(payload.session_id, payload.message)

    return IntakeMessageResponse(
        turns=[TurnSchema.from_turn(t) for t in turns],
        stage=state.stage.value,
        is_complete=state.is_complete,
        summary=state.record.summary(),
    )


@router.get("/intake/{session_id}/transcript", response_model=TranscriptResponse)
def get_transcript(session_id: str) -> TranscriptResponse:
    state = _require_session(session_id)
    return TranscriptResponse(
        session_id=session_id,
        turns=[TurnSchema.from_turn(t) for t in state.log],
    )


@router.get("/intake/{session_id}/summary", response_model=SummaryResponse)
def get_summary(session_id: str) -> SummaryResponse:
    state = _require_session(session_id)
    return SummaryResponse(
        session_id=session_id,
        stage=state.stage.value,
        patient=state.record,
        summary=state.record.summary(),
    )


@router.delete("/intake/{session_id}", status_code=204)
def end_intake(session_id: str) -> None:
    try:
        _service.end_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Intake session not found.")
