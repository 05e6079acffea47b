# receptionist/intake/stages.py
from enum import Enum


class Stage(str, Enum):
    GREETING_RESPONSE = "greeting-response"
    ASK_NAME = "ask-name"
    ASK_AGE = "ask-age"
    ASK_ISSUE = "ask-issue"
    ASK_SLOT = "ask-slot"
    DONE = "done"
