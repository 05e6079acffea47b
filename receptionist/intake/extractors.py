# receptionist/intake/extractors.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from receptionist.intake.stages import Stage
from receptionist.intake.text import title_case_name

NAME_TOKEN = re.compile("[a-zA-Z\u0900-\u097F'.-]+")
AGE_DIGITS = re.compile(r"(\d{1,3})", re.ASCII)

MIN_AGE = 1
MAX_AGE = 120
MIN_ISSUE_LENGTH = 4
MIN_SLOT_LENGTH = 3

NAME_REPROMPT = (
    "Mujhe aapka poora naam theek se samajh nahi aaya ji. "
    "Kripya apna first aur last name bataiye ji."
)
AGE_MISSING_REPROMPT = (
    "Maaf kijiye ji, mujhe aapki umar samajh nahi aayi. "
    "Kripya pure ank me batayein, jaise 32 ji."
)
AGE_RANGE_REPROMPT = (
    "Kya aap apni sahi umar bata sakte hain ji? "
    "1 se 120 ke beech me koi bhi ank chalega ji."
)
ISSUE_REPROMPT = (
    "Kripya thoda detail me batayein ji ki aapko kis takleef ke liye "
    "salaah chahiye ji."
)
SLOT_REPROMPT = (
    "Kripya koi specific din aur time suggest kijiye ji, "
    "jaise 'Somwaar dopahar 3 baje' ji."
)


@dataclass(frozen=True)
class Extraction:
    """
    Outcome of validating one utterance for one stage: either a value to
    store, or the re-prompt to send while the stage stays put.
    """

    value: Optional[str] = None
    reprompt: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.value is not None


def extract_name(text: str) -> Extraction:
    # Tokens outside the name alphabet (digits, emoji...) are dropped, not fatal
    words = [word for word in text.split(" ") if NAME_TOKEN.fullmatch(word)]
    if len(words) < 2:
        return Extraction(reprompt=NAME_REPROMPT)
    return Extraction(value=title_case_name(" ".join(words)))


def extract_age(text: str) -> Extraction:
    match = AGE_DIGITS.search(text)
    if match is None:
        return Extraction(reprompt=AGE_MISSING_REPROMPT)

    age = int(match.group(1))
    if age < MIN_AGE or age > MAX_AGE:
        return Extraction(reprompt=AGE_RANGE_REPROMPT)
    return Extraction(value=str(age))


def extract_issue(text: str) -> Extraction:
    if len(text) < MIN_ISSUE_LENGTH:
        return Extraction(reprompt=ISSUE_REPROMPT)
    return Extraction(value=text[0].upper() + text[1:])


def extract_slot(text: str) -> Extraction:
    if len(text) < MIN_SLOT_LENGTH:
        return Extraction(reprompt=SLOT_REPROMPT)
    return Extraction(value=text)


EXTRACTORS: Dict[Stage, Callable[[str], Extraction]] = {
    Stage.ASK_NAME: extract_name,
    Stage.ASK_AGE: extract_age,
    Stage.ASK_ISSUE: extract_issue,
    Stage.ASK_SLOT: extract_slot,
}

# Which PatientRecord field each extracting stage owns
RECORD_FIELDS: Dict[Stage, str] = {
    Stage.ASK_NAME: "name",
    Stage.ASK_AGE: "age",
    Stage.ASK_ISSUE: "issue",
    Stage.ASK_SLOT: "slot",
}
