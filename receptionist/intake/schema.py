# receptionist/intake/schema.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


SUMMARY_SEPARATOR = " | "


class PatientRecord(BaseModel):
    """
    Structured result of one intake conversation.

    Every field starts empty and is only written by the stage that asks
    for it. A repeated stage may overwrite its own field.
    """

    name: str = ""
    age: str = ""
    issue: str = ""
    slot: str = ""

    def is_empty(self) -> bool:
        return not (self.name or self.age or self.issue or self.slot)

    def summary(self) -> Optional[str]:
        """
        One-line appointment note, e.g.

          Naam: Rita Verma ji | Umar: 28 saal | Samasya: Baal girna

        Returns None while nothing has been collected.
        """
        if self.is_empty():
            return None

        parts = [
            self.name and f"Naam: {self.name} ji",
            self.age and f"Umar: {self.age} saal",
            self.issue and f"Samasya: {self.issue}",
            self.slot and f"Preferred time: {self.slot}",
        ]
        return SUMMARY_SEPARATOR.join(part for part in parts if part)
