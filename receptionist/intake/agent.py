# receptionist/intake/agent.py
from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional

from receptionist.config import Settings, get_settings
from receptionist.intake.extractors import EXTRACTORS, RECORD_FIELDS
from receptionist.intake.interrupts import find_interrupt
from receptionist.intake.schema import PatientRecord
from receptionist.intake.stages import Stage
from receptionist.intake.state import (
    ConversationState,
    PendingReply,
    Sender,
    Turn,
)
from receptionist.intake.text import normalize_whitespace, to_match_key

logger = logging.getLogger("receptionist-intake")


class ReceptionistAgent:
    """
    ReceptionistAgent drives the scripted appointment intake.

    Stages:
      - greeting response
      - name
      - age
      - presenting issue
      - preferred slot
      - done (terminal)

    Every user turn is first checked against the interrupt table (hours,
    fees, ...). A hit is answered without touching the stage or the
    record, followed by a reminder of the pending question. Otherwise the
    current stage's extractor either accepts the utterance and the stage
    moves on, or asks again.

    The agent never starts timers. Replies that should arrive a little
    later are queued on the state and released by drain() or deliver().
    """

    GREETING = "Namaste ji! Main {clinic} Clinic se bol rahi hoon. Aap kaise hain ji?"

    # Next stage after a successful extraction.
    TRANSITIONS: Dict[Stage, Stage] = {
        Stage.GREETING_RESPONSE: Stage.ASK_NAME,
        Stage.ASK_NAME: Stage.ASK_AGE,
        Stage.ASK_AGE: Stage.ASK_ISSUE,
        Stage.ASK_ISSUE: Stage.ASK_SLOT,
        Stage.ASK_SLOT: Stage.DONE,
        Stage.DONE: Stage.DONE,
    }

    # Reply sent when the stage is entered through the normal flow.
    ADVANCE_REPLIES: Dict[Stage, str] = {
        Stage.ASK_NAME: "Bahut accha ji! Main note kar leti hoon. Aapka poora naam bataiye ji.",
        Stage.ASK_AGE: "Dhanyavaad {name} ji! Aapki umar kya hai ji?",
        Stage.ASK_ISSUE: "Samajh gayi ji. Kaunsi samasya ke liye appointment lena chahte hain ji?",
        Stage.ASK_SLOT: "Theek hai ji. Aapko appointment ke liye kaunsa din aur time convenient rahega ji?",
        Stage.DONE: "Bahut badhiya ji! Main {slot} ke liye appointment block kar rahi hoon ji.",
    }

    BOOKING_CONFIRMATION = (
        "Aapka appointment confirm kar diya gaya hai. Clinic ka address aur "
        "timing WhatsApp/SMS me bhej diya jayega ji."
    )
    BOOKING_CLOSING = "Kya aapko kisi aur cheez me madad chahiye ji? Main yahin hoon ji."
    DONE_REPLY = (
        "Dhanyavaad ji! Agar aapko aur koi sawaal ya reschedule karna ho to "
        "bas bata dijiye ji."
    )
    DONE_INTERRUPT_FILLER = (
        "Main yahin hoon ji, jab bhi aap ready hon appointment details "
        "confirm karne ke liye bataiye ji."
    )

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self) -> tuple[ConversationState, str]:
        """
        Open a new conversation and return:
          - the fresh state (stage greeting-response)
          - the greeting the agent opened with
        """
        state = ConversationState()
        greeting = self.GREETING.format(clinic=self.settings.clinic_name)
        self._emit(state, greeting)
        logger.info(f"Conversation {state.id} started")
        return state, greeting

    def step(self, state: ConversationState, user_text: str) -> List[Turn]:
        """
        Handle one submitted utterance and return every turn appended to
        the log by this call. Staggered replies stay queued in
        state.pending until drain() or deliver() releases them.

        Whitespace-only input is dropped: no turn, no state change.
        """
        text = normalize_whitespace(user_text)
        if not text:
            return []

        start = len(state.log)

        # Replies still pending from the previous turn land before this one
        self.drain(state)

        state.log.append(Turn(sender=Sender.USER, text=text))

        entry = find_interrupt(
            to_match_key(text), mode=self.settings.interrupt_match_mode
        )
        if entry is not None:
            logger.info(f"Conversation {state.id}: '{entry.topic}' interrupt at {state.stage.value}")
            self._answer_interrupt(state, entry.response)
        else:
            self._advance(state, text)

        return state.log.since(start)

    def drain(self, state: ConversationState) -> List[Turn]:
        """
        Deliver every pending reply right away, in queue order.
        """
        delivered: List[Turn] = []
        while state.pending:
            reply = state.pending.popleft()
            turn = self._append_agent_turn(state, reply.producer())
            if turn is not None:
                delivered.append(turn)
        return delivered

    async def deliver(self, state: ConversationState) -> List[Turn]:
        """
        Deliver pending replies in queue order, sleeping each reply's delay
        (scaled by the reply_pacing setting) before appending it.
        """
        delivered: List[Turn] = []
        while state.pending:
            reply = state.pending[0]
            delay = reply.delay * self.settings.reply_pacing
            if delay > 0:
                await asyncio.sleep(delay)
            # A concurrent step() may have flushed this reply and queued its own
            if not state.pending or state.pending[0] is not reply:
                break
            state.pending.popleft()
            turn = self._append_agent_turn(state, reply.producer())
            if turn is not None:
                delivered.append(turn)
        return delivered

    def stage_prompt(self, stage: Stage, record: PatientRecord) -> Optional[str]:
        """
        The question pending at `stage`, used to steer the user back after
        an interrupt. greeting-response has none.
        """
        if stage == Stage.ASK_NAME:
            return "Main note kar leti hoon ji. Aapka poora naam bataiye ji."
        if stage == Stage.ASK_AGE:
            prefix = f"{record.name} ji, " if record.name else ""
            return f"{prefix}aapki umar kya hai ji?"
        if stage == Stage.ASK_ISSUE:
            return (
                "Kaunsi samasya ke liye appointment lena chahte hain ji? "
                "(jaise bal girna, dard, skin problem)"
            )
        if stage == Stage.ASK_SLOT:
            return "Aapko appointment ke liye kaunsa din aur time convenient rahega ji?"
        return None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _answer_interrupt(self, state: ConversationState, response: str) -> None:
        self._emit(state, response)

        if state.stage == Stage.DONE:
            self._emit(state, self.DONE_INTERRUPT_FILLER)
            return

        reminder = self.stage_prompt(state.stage, state.record)
        if reminder:
            self._schedule(state, self.settings.reminder_delay, reminder)

    def _advance(self, state: ConversationState, text: str) -> None:
        """
        Run the current stage's extractor and either move on or re-ask.
        """
        current = state.stage

        if current == Stage.DONE:
            self._emit(state, self.DONE_REPLY)
            return

        extractor = EXTRACTORS.get(current)
        if extractor is not None:
            result = extractor(text)
            if not result.ok:
                logger.debug(f"Conversation {state.id}: re-asking at {current.value}")
                self._emit(state, result.reprompt)
                return
            setattr(state.record, RECORD_FIELDS[current], result.value)

        state.stage = self.TRANSITIONS[current]
        logger.info(f"Conversation {state.id}: {current.value} -> {state.stage.value}")

        self._emit(
            state,
            self.ADVANCE_REPLIES[state.stage].format(
                name=state.record.name, slot=state.record.slot
            ),
        )

        if state.stage == Stage.DONE:
            self._schedule(state, self.settings.confirmation_delay, self.BOOKING_CONFIRMATION)
            self._schedule(state, self.settings.closing_delay, self.BOOKING_CLOSING)

    def _emit(self, state: ConversationState, text: str) -> None:
        # step() drains the queue first, so nothing is pending here
        self._append_agent_turn(state, text)

    def _schedule(self, state: ConversationState, delay: float, text: str) -> None:
        state.pending.append(PendingReply(delay=delay, producer=lambda: text))

    def _append_agent_turn(self, state: ConversationState, text: str) -> Optional[Turn]:
        clean = text.strip()
        if not clean:
            return None
        return state.log.append(Turn(sender=Sender.AGENT, text=clean))
