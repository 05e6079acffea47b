# receptionist/intake/interrupts.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class InterruptEntry:
    topic: str
    keywords: Tuple[str, ...]
    response: str


# Scanned in declaration order; the first topic with any keyword hit wins.
INTERRUPT_TABLE: Tuple[InterruptEntry, ...] = (
    InterruptEntry(
        topic="services",
        keywords=("service", "treatment", "kya milta", "kis kis"),
        response=(
            "Humare clinic me skin, hair care, pain management aur wellness "
            "consultations milte hain ji."
        ),
    ),
    InterruptEntry(
        topic="hours",
        keywords=("timing", "time", "kab", "open", "opening", "band"),
        response="Clinic daily subah 9 baje se shaam 7 baje tak khula rehta hai ji.",
    ),
    InterruptEntry(
        topic="doctor",
        keywords=("doctor", "dr", "specialist"),
        response=(
            "Humare senior consultant Dr. Meera Sharma ji personally "
            "appointments handle karti hain ji."
        ),
    ),
    InterruptEntry(
        topic="fees",
        keywords=("fee", "fees", "cost", "paisa", "charges", "price"),
        response=(
            "Consultation ki fee 600 rupaye hai ji, jo visit ke samay clinic "
            "par submit hoti hai ji."
        ),
    ),
    InterruptEntry(
        topic="location",
        keywords=("address", "location", "kahan", "map"),
        response=(
            "Clinic ka address WhatsApp/SMS dwara turant bhej diya jayega ji. "
            "Landmark: Central Metro ke paas, Sector 12 ji."
        ),
    ),
    InterruptEntry(
        topic="parking",
        keywords=("parking",),
        response="Clinic ke paas hi visitors ke liye parking facility available hai ji.",
    ),
)


def _substring_hit(keyword: str, key: str) -> bool:
    return keyword in key


def _token_hit(keyword: str, key: str) -> bool:
    return re.search(rf"(?<!\w){re.escape(keyword)}(?!\w)", key) is not None


def find_interrupt(
    key: str,
    table: Sequence[InterruptEntry] = INTERRUPT_TABLE,
    mode: str = "substring",
) -> Optional[InterruptEntry]:
    """
    Return the first entry whose keywords hit the lower-cased utterance.

    mode="substring" matches anywhere inside the text, so short keywords
    over-match ("dr" fires inside "address"). mode="token" only accepts
    hits bounded by non-word characters.
    """
    hit = _token_hit if mode == "token" else _substring_hit
    for entry in table:
        if any(hit(keyword, key) for keyword in entry.keywords):
            return entry
    return None
