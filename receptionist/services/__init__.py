# receptionist/services/__init__.py
from .intake_session import IntakeSessionService, SessionNotFoundError

__all__ = ["IntakeSessionService", "SessionNotFoundError"]
