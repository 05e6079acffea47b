# receptionist/intake/__init__.py
from .agent import ReceptionistAgent
from .schema import PatientRecord
from .stages import Stage
from .state import ConversationState, ConversationLog, Sender, Turn

__all__ = [
    "ReceptionistAgent",
    "PatientRecord",
    "Stage",
    "ConversationState",
    "ConversationLog",
    "Sender",
    "Turn",
]
