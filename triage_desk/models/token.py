"""Token data models."""

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    ROUTINE = "ROUTINE"
    EMERGENCY = "EMERGENCY"


@dataclass
class Token:
    """One queued or triaged visit.

    doctor_id is None for emergency tokens; slot_id is None for walk-ins and
    emergency tokens.
    """

    token_id: int
    patient_id: int
    kind: TokenKind
    doctor_id: int | None = None
    slot_id: int | None = None

    def as_dict(self) -> dict[str, int | str | None]:
        """Return the token as a dictionary."""
        return {
            "token_id": self.token_id,
            "patient_id": self.patient_id,
            "doctor_id": self.doctor_id,
            "slot_id": self.slot_id,
            "kind": self.kind.value,
        }
