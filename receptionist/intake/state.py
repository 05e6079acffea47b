# receptionist/intake/state.py
from __future__ import annotations

import uuid
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Deque, Iterator, List

from receptionist.intake.stages import Stage
from receptionist.intake.schema import PatientRecord


def generate_id() -> str:
    return str(uuid.uuid4())


class Sender(str, Enum):
    AGENT = "agent"
    USER = "user"


@dataclass(frozen=True)
class Turn:
    sender: Sender
    text: str
    id: str = field(default_factory=generate_id)


class ConversationLog:
    """
    Append-only, ordered sequence of turns. Nothing in here ever removes
    or replaces an existing entry.
    """

    def __init__(self) -> None:
        self._turns: List[Turn] = []

    def append(self, turn: Turn) -> Turn:
        self._turns.append(turn)
        return turn

    def since(self, index: int) -> List[Turn]:
        return list(self._turns[index:])

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(list(self._turns))

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]


@dataclass(frozen=True)
class PendingReply:
    """
    An agent reply waiting to be appended. `delay` is measured from the
    previous reply in the queue, `producer` builds the text at delivery.
    """

    delay: float
    producer: Callable[[], str]


@dataclass
class ConversationState:
    """
    Everything one conversation owns: current stage, collected record,
    transcript and the queue of staggered replies not yet delivered.
    """

    id: str = field(default_factory=generate_id)
    stage: Stage = Stage.GREETING_RESPONSE
    record: PatientRecord = field(default_factory=PatientRecord)
    log: ConversationLog = field(default_factory=ConversationLog)
    pending: Deque[PendingReply] = field(default_factory=deque)

    @property
    def is_complete(self) -> bool:
        return self.stage == Stage.DONE
