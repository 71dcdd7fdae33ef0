"""API endpoints for the scheduling desk."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from triage_desk import __version__
from triage_desk.errors import CapacityExceeded, DeskError, DuplicateDoctor, NotFound
from triage_desk.models.patient import Patient
from triage_desk.models.schemas import (
    BookingRequest,
    CancelSlotResponse,
    DoctorCreate,
    DoctorReportResponse,
    DoctorResponse,
    HealthResponse,
    PatientCreate,
    PatientResponse,
    PatientUpdate,
    ServeResponse,
    SlotCreate,
    SlotResponse,
    SummaryResponse,
    TokenResponse,
    TriageRequest,
    UndoResponse,
)
from triage_desk.models.token import Token
from triage_desk.services import reports
from triage_desk.services.desk import get_engine
from triage_desk.services.scheduling import SchedulingEngine
from triage_desk.structures.slot_list import Slot
from triage_desk.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _http_error(e: DeskError) -> HTTPException:
    """Translate a rejected desk operation into an HTTP error."""
    if isinstance(e, NotFound):
        status_code = 404
    elif isinstance(e, (CapacityExceeded, DuplicateDoctor)):
        status_code = 409
    else:
        status_code = 400
    logger.warning(f"Rejected request: {e}")
    return HTTPException(status_code=status_code, detail=str(e))


def _patient_response(patient: Patient) -> PatientResponse:
    return PatientResponse(
        id=patient.id, name=patient.name, age=patient.age, severity=patient.severity, visits=patient.visits
    )


def _token_response(token: Token) -> TokenResponse:
    return TokenResponse.model_validate(token.as_dict())


def _slot_response(slot: Slot) -> SlotResponse:
    return SlotResponse(slot_id=slot.slot_id, start=slot.start, end=slot.end, booked=slot.booked)


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        version=__version__,
    )


@router.post("/patients", response_model=PatientResponse, status_code=201, tags=["Patients"])
async def register_patient(
    request: PatientCreate, engine: SchedulingEngine = Depends(get_engine)
) -> PatientResponse:
    """Register a patient. An existing id is overwritten."""
    patient = engine.register_patient(request.id, request.name, request.age, request.severity)
    return _patient_response(patient)


@router.get("/patients/{patient_id}", response_model=PatientResponse, tags=["Patients"])
async def get_patient(patient_id: int, engine: SchedulingEngine = Depends(get_engine)) -> PatientResponse:
    try:
        return _patient_response(engine.get_patient(patient_id))
    except DeskError as e:
        raise _http_error(e) from e


@router.patch("/patients/{patient_id}", response_model=PatientResponse, tags=["Patients"])
async def update_patient(
    patient_id: int, request: PatientUpdate, engine: SchedulingEngine = Depends(get_engine)
) -> PatientResponse:
    try:
        patient = engine.update_patient(patient_id, name=request.name, age=request.age, severity=request.severity)
    except DeskError as e:
        raise _http_error(e) from e
    return _patient_response(patient)


@router.delete("/patients/{patient_id}", status_code=204, tags=["Patients"])
async def delete_patient(patient_id: int, engine: SchedulingEngine = Depends(get_engine)) -> None:
    try:
        engine.delete_patient(patient_id)
    except DeskError as e:
        raise _http_error(e) from e


@router.post("/doctors", response_model=DoctorResponse, status_code=201, tags=["Doctors"])
async def add_doctor(request: DoctorCreate, engine: SchedulingEngine = Depends(get_engine)) -> DoctorResponse:
    try:
        doctor = engine.add_doctor(request.id, request.name, request.specialization, request.queue_capacity)
    except DeskError as e:
        raise _http_error(e) from e
    return DoctorResponse(
        id=doctor.id, name=doctor.name, specialization=doctor.specialization, queue_capacity=doctor.queue_capacity
    )


@router.post("/doctors/{doctor_id}/slots", response_model=SlotResponse, status_code=201, tags=["Doctors"])
async def add_slot(
    doctor_id: int, request: SlotCreate, engine: SchedulingEngine = Depends(get_engine)
) -> SlotResponse:
    try:
        engine.add_slot(doctor_id, request.slot_id, request.start, request.end)
    except DeskError as e:
        raise _http_error(e) from e
    return SlotResponse(slot_id=request.slot_id, start=request.start, end=request.end, booked=False)


@router.delete("/doctors/{doctor_id}/slots/{slot_id}", response_model=CancelSlotResponse, tags=["Doctors"])
async def cancel_slot(
    doctor_id: int, slot_id: int, engine: SchedulingEngine = Depends(get_engine)
) -> CancelSlotResponse:
    try:
        cancelled = engine.cancel_slot(doctor_id, slot_id)
    except DeskError as e:
        raise _http_error(e) from e
    return CancelSlotResponse(cancelled=cancelled)


@router.get("/doctors/{doctor_id}/slots", response_model=list[SlotResponse], tags=["Doctors"])
async def list_slots(doctor_id: int, engine: SchedulingEngine = Depends(get_engine)) -> list[SlotResponse]:
    try:
        return [_slot_response(slot) for slot in reports.doctor_slots(engine, doctor_id)]
    except DeskError as e:
        raise _http_error(e) from e


@router.get("/doctors/{doctor_id}/queue", response_model=list[TokenResponse], tags=["Doctors"])
async def list_queue(doctor_id: int, engine: SchedulingEngine = Depends(get_engine)) -> list[TokenResponse]:
    """Queued routine tokens for a doctor, head first."""
    try:
        return [_token_response(token) for token in reports.doctor_queue(engine, doctor_id)]
    except DeskError as e:
        raise _http_error(e) from e


@router.post("/bookings", response_model=TokenResponse, status_code=201, tags=["Queue"])
async def book_routine(request: BookingRequest, engine: SchedulingEngine = Depends(get_engine)) -> TokenResponse:
    """Book the doctor's lowest free slot, or queue a walk-in when none is free."""
    try:
        token = engine.book_routine(request.patient_id, request.doctor_id)
    except DeskError as e:
        raise _http_error(e) from e
    return _token_response(token)


@router.post("/triage", response_model=TokenResponse, status_code=201, tags=["Queue"])
async def triage_in(request: TriageRequest, engine: SchedulingEngine = Depends(get_engine)) -> TokenResponse:
    try:
        token = engine.triage_in(request.patient_id, request.severity)
    except DeskError as e:
        raise _http_error(e) from e
    return _token_response(token)


@router.post("/serve", response_model=ServeResponse, tags=["Queue"])
async def serve_next(engine: SchedulingEngine = Depends(get_engine)) -> ServeResponse:
    """Serve the next patient. Emergencies always preempt routine visits."""
    result = engine.serve_next()
    return ServeResponse(
        status=result.status,
        kind=result.kind,
        patient_id=result.patient_id,
        token_id=result.token_id,
        doctor_id=result.doctor_id,
    )


@router.post("/undo", response_model=UndoResponse, tags=["Queue"])
async def undo(engine: SchedulingEngine = Depends(get_engine)) -> UndoResponse:
    """Reverse the most recent mutating operation."""
    try:
        result = engine.undo()
    except DeskError as e:
        raise _http_error(e) from e
    return UndoResponse(
        status=result.status,
        message=result.message,
        action=result.action.kind if result.action else None,
        token=_token_response(result.token) if result.token else None,
    )


@router.get("/reports/doctors", response_model=list[DoctorReportResponse], tags=["Reports"])
async def doctor_reports(engine: SchedulingEngine = Depends(get_engine)) -> list[DoctorReportResponse]:
    return [
        DoctorReportResponse(
            doctor_id=report.doctor_id,
            name=report.name,
            specialization=report.specialization,
            pending=report.pending,
            next_free_slot=_slot_response(report.next_free_slot) if report.next_free_slot else None,
            served=report.served,
        )
        for report in reports.doctor_reports(engine)
    ]


@router.get("/reports/summary", response_model=SummaryResponse, tags=["Reports"])
async def summary(engine: SchedulingEngine = Depends(get_engine)) -> SummaryResponse:
    totals = reports.summary(engine)
    return SummaryResponse(
        total_served=totals.total_served,
        total_pending=totals.total_pending,
        emergency_queued=totals.emergency_queued,
    )


@router.get("/reports/top-patients", response_model=list[PatientResponse], tags=["Reports"])
async def top_patients(
    k: int | None = Query(default=None, gt=0), engine: SchedulingEngine = Depends(get_engine)
) -> list[PatientResponse]:
    return [_patient_response(patient) for patient in reports.top_patients(engine, k)]


@router.get("/tokens", response_model=list[TokenResponse], tags=["Reports"])
async def active_tokens(engine: SchedulingEngine = Depends(get_engine)) -> list[TokenResponse]:
    return [_token_response(token) for token in reports.active_tokens(engine)]
