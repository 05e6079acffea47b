# receptionist/services/intake_session.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from receptionist.config import Settings
from receptionist.intake.agent import ReceptionistAgent
from receptionist.intake.state import ConversationState, Turn

logger = logging.getLogger("receptionist-sessions")


class SessionNotFoundError(KeyError):
    pass


class IntakeSessionService:
    """
    Service that coordinates:
      - opening conversations and keeping them in memory by id
      - driving the ReceptionistAgent for each submitted message
      - pacing the agent's staggered replies on the event loop
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.agent = ReceptionistAgent(settings)
        self._sessions: Dict[str, ConversationState] = {}

    def start_session(self) -> ConversationState:
        state, _ = self.agent.start()
        self._sessions[state.id] = state
        return state

    def get_session(self, session_id: str) -> ConversationState:
        state = self._sessions.get(session_id)
        if state is None:
            raise SessionNotFoundError(session_id)
        return state

    async def handle_turn(self, session_id: str, message: str) -> List[Turn]:
        """
        Handle a single user message:
          - step the agent (user turn + immediate replies)
          - wait out and append any staggered replies

        Returns every turn this message added to the transcript, in order.
        """
        state = self.get_session(session_id)

        turns = self.agent.step(state, message)
        if not turns:
            logger.debug(f"Session {session_id}: ignored blank message")
            return []

        turns.extend(await self.agent.deliver(state))
        return turns

    def end_session(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
        logger.info(f"Session {session_id} closed")
