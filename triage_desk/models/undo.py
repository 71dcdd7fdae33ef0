"""Undo log records and operation outcomes."""

from dataclasses import dataclass
from enum import Enum

from triage_desk.models.token import Token, TokenKind


class UndoKind(str, Enum):
    REGISTER_PATIENT = "REGISTER_PATIENT"
    DELETE_PATIENT = "DELETE_PATIENT"
    ADD_SLOT = "ADD_SLOT"
    DELETE_SLOT = "DELETE_SLOT"
    BOOK_ROUTINE = "BOOK_ROUTINE"
    BOOK_WALKIN = "BOOK_WALKIN"
    EMERGENCY_IN = "EMERGENCY_IN"
    SERVE_ROUTINE = "SERVE_ROUTINE"
    SERVE_EMERGENCY = "SERVE_EMERGENCY"


@dataclass(frozen=True)
class UndoAction:
    """What is needed to reverse one mutation. Only the fields for its kind are set."""

    kind: UndoKind
    patient_id: int | None = None
    doctor_id: int | None = None
    slot_id: int | None = None
    token_id: int | None = None
    severity: int | None = None


class ServeStatus(str, Enum):
    SERVED = "served"
    NOTHING_TO_SERVE = "nothing_to_serve"


@dataclass
class ServeResult:
    """Outcome of serve_next."""

    status: ServeStatus
    kind: TokenKind | None = None
    patient_id: int | None = None
    token_id: int | None = None
    doctor_id: int | None = None
    slot_id: int | None = None

    @property
    def served(self) -> bool:
        return self.status is ServeStatus.SERVED


class UndoStatus(str, Enum):
    UNDONE = "undone"
    NOTHING_TO_UNDO = "nothing_to_undo"
    UNSUPPORTED = "unsupported"


@dataclass
class UndoResult:
    """Outcome of undo."""

    status: UndoStatus
    message: str
    action: UndoAction | None = None
    token: Token | None = None  # token recreated by reversing a serve
