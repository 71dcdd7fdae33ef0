"""Read-only reports over the scheduling engine."""

from dataclasses import dataclass

from triage_desk.models.patient import Patient
from triage_desk.models.token import Token
from triage_desk.services.scheduling import SchedulingEngine
from triage_desk.structures.slot_list import Slot


@dataclass
class DoctorReport:
    """Per-doctor load."""

    doctor_id: int
    name: str
    specialization: str
    pending: int
    next_free_slot: Slot | None
    served: int


@dataclass
class Summary:
    """Desk-wide totals."""

    total_served: int
    total_pending: int
    emergency_queued: int


def doctor_reports(engine: SchedulingEngine) -> list[DoctorReport]:
    """One report per doctor, in ascending doctor id order."""
    return [
        DoctorReport(
            doctor_id=doctor.id,
            name=doctor.name,
            specialization=doctor.specialization,
            pending=doctor.queue.count(),
            next_free_slot=doctor.slots.find_next_free(),
            served=doctor.served_count,
        )
        for doctor in engine.doctors
    ]


def summary(engine: SchedulingEngine) -> Summary:
    return Summary(
        total_served=engine.total_served,
        total_pending=engine.total_pending(),
        emergency_queued=engine.emergency.size,
    )


def top_patients(engine: SchedulingEngine, k: int | None = None) -> list[Patient]:
    """The k most frequently served patients, most visits first.

    Ties keep directory order.
    """
    if k is None:
        k = engine.config.top_k_default
    if k <= 0:
        return []
    ranked = sorted(engine.patients.all(), key=lambda patient: patient.visits, reverse=True)
    return ranked[:k]


def active_tokens(engine: SchedulingEngine) -> list[Token]:
    return engine.tokens.all()


def doctor_slots(engine: SchedulingEngine, doctor_id: int) -> list[Slot]:
    """Slots as stored, newest first."""
    return list(engine.doctors.get(doctor_id).slots)


def doctor_queue(engine: SchedulingEngine, doctor_id: int) -> list[Token]:
    """Queued tokens for a doctor, head to tail."""
    doctor = engine.doctors.get(doctor_id)
    return [engine.tokens.get(token_id) for token_id in doctor.queue.to_list()]
