"""Request and response models for the HTTP surface."""

from datetime import datetime

from pydantic import BaseModel, Field

from triage_desk.models.token import TokenKind
from triage_desk.models.undo import ServeStatus, UndoKind, UndoStatus


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    timestamp: datetime
    version: str


class PatientCreate(BaseModel):
    """Request model for registering a patient."""

    id: int
    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0)
    severity: int = 0


class PatientUpdate(BaseModel):
    """Request model for a partial patient update."""

    name: str | None = Field(default=None, min_length=1)
    age: int | None = Field(default=None, ge=0)
    severity: int | None = None


class PatientResponse(BaseModel):
    id: int
    name: str
    age: int
    severity: int
    visits: int


class DoctorCreate(BaseModel):
    """Request model for adding a doctor."""

    id: int
    name: str = Field(..., min_length=1)
    specialization: str
    queue_capacity: int | None = Field(default=None, gt=0)


class DoctorResponse(BaseModel):
    id: int
    name: str
    specialization: str
    queue_capacity: int


class SlotCreate(BaseModel):
    """Request model for adding a slot. start/end are free-form labels."""

    slot_id: int
    start: str
    end: str


class SlotResponse(BaseModel):
    slot_id: int
    start: str
    end: str
    booked: bool


class CancelSlotResponse(BaseModel):
    cancelled: bool


class BookingRequest(BaseModel):
    patient_id: int
    doctor_id: int


class TriageRequest(BaseModel):
    """Request model for emergency triage. Lower severity is more urgent."""

    patient_id: int
    severity: int


class TokenResponse(BaseModel):
    token_id: int
    patient_id: int
    doctor_id: int | None
    slot_id: int | None
    kind: TokenKind


class ServeResponse(BaseModel):
    status: ServeStatus
    kind: TokenKind | None = None
    patient_id: int | None = None
    token_id: int | None = None
    doctor_id: int | None = None


class UndoResponse(BaseModel):
    status: UndoStatus
    message: str
    action: UndoKind | None = None
    token: TokenResponse | None = None


class DoctorReportResponse(BaseModel):
    doctor_id: int
    name: str
    specialization: str
    pending: int
    next_free_slot: SlotResponse | None
    served: int


class SummaryResponse(BaseModel):
    total_served: int
    total_pending: int
    emergency_queued: int
