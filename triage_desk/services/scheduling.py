"""Scheduling engine: booking, triage, serve policy and undo."""

from collections.abc import Callable

from triage_desk.config import DeskConfig
from triage_desk.errors import DeskError, DuplicateDoctor, EmergencyHeapFull, QueueFull
from triage_desk.models.doctor import Doctor
from triage_desk.models.patient import Patient
from triage_desk.models.token import Token, TokenKind
from triage_desk.models.undo import (
    ServeResult,
    ServeStatus,
    UndoAction,
    UndoKind,
    UndoResult,
    UndoStatus,
)
from triage_desk.services.doctors import DoctorRegistry
from triage_desk.services.patients import InMemoryPatientDirectory, PatientDirectory
from triage_desk.services.tokens import TokenStore
from triage_desk.services.undo_log import UndoLog
from triage_desk.structures.emergency_heap import EmergencyHeap
from triage_desk.utils.logging import get_logger

logger = get_logger(__name__)


class SchedulingEngine:
    """Owns every queue, the emergency heap, the token store and the undo log.

    A token id is in the token store exactly when it sits in one doctor's
    routine queue or in the emergency heap. Every public method either
    completes, pushing one undo record if it mutated state, or raises a
    DeskError having changed nothing.
    """

    def __init__(self, config: DeskConfig | None = None, patients: PatientDirectory | None = None):
        self.config = config or DeskConfig()
        self.patients: PatientDirectory = patients if patients is not None else InMemoryPatientDirectory()
        self.doctors = DoctorRegistry()
        self.tokens = TokenStore()
        self.emergency = EmergencyHeap(self.config.emergency_heap_capacity)
        self.undo_log = UndoLog()
        self.total_served = 0

        self._undo_handlers: dict[UndoKind, Callable[[UndoAction], UndoResult]] = {
            UndoKind.REGISTER_PATIENT: self._undo_register_patient,
            UndoKind.DELETE_PATIENT: self._undo_without_snapshot,
            UndoKind.ADD_SLOT: self._undo_add_slot,
            UndoKind.DELETE_SLOT: self._undo_without_snapshot,
            UndoKind.BOOK_ROUTINE: self._undo_booking,
            UndoKind.BOOK_WALKIN: self._undo_booking,
            UndoKind.EMERGENCY_IN: self._undo_emergency_in,
            UndoKind.SERVE_ROUTINE: self._undo_serve_routine,
            UndoKind.SERVE_EMERGENCY: self._undo_serve_emergency,
        }

    def total_pending(self) -> int:
        """Routine tokens across all doctors plus emergency entries."""
        return sum(doctor.queue.count() for doctor in self.doctors) + self.emergency.size

    # Patients

    def register_patient(self, patient_id: int, name: str, age: int, severity: int = 0) -> Patient:
        """Create or overwrite a patient record."""
        patient = Patient(id=patient_id, name=name, age=age, severity=severity)
        self.patients.upsert(patient)
        self.undo_log.push(UndoAction(UndoKind.REGISTER_PATIENT, patient_id=patient_id))
        logger.info(f"Patient registered: {patient_id}")
        return patient

    def update_patient(
        self,
        patient_id: int,
        name: str | None = None,
        age: int | None = None,
        severity: int | None = None,
    ) -> Patient:
        """Update the given fields in place. Not recorded in the undo log."""
        patient = self.patients.get(patient_id)
        if name is not None:
            patient.name = name
        if age is not None:
            patient.age = age
        if severity is not None:
            patient.severity = severity
        self.patients.upsert(patient)
        logger.info(f"Patient updated: {patient_id}")
        return patient

    def delete_patient(self, patient_id: int) -> None:
        """Delete a patient. The record is not kept, so this cannot be undone."""
        self.patients.get(patient_id)
        self.patients.delete(patient_id)
        self.undo_log.push(UndoAction(UndoKind.DELETE_PATIENT, patient_id=patient_id))
        logger.info(f"Patient deleted: {patient_id}")

    def get_patient(self, patient_id: int) -> Patient:
        return self.patients.get(patient_id)

    # Doctors and slots

    def add_doctor(self, doctor_id: int, name: str, specialization: str, queue_capacity: int | None = None) -> Doctor:
        """Register a doctor.

        Raises:
            DuplicateDoctor: If the id is already registered; the existing doctor is kept.
        """
        capacity = queue_capacity if queue_capacity is not None else self.config.routine_queue_capacity
        doctor = Doctor(id=doctor_id, name=name, specialization=specialization, queue_capacity=capacity)
        if not self.doctors.add(doctor):
            logger.warning(f"Doctor {doctor_id} already exists")
            raise DuplicateDoctor(doctor_id)
        logger.info(f"Doctor added: {doctor_id} ({specialization}, queue capacity {capacity})")
        return doctor

    def add_slot(self, doctor_id: int, slot_id: int, start: str, end: str) -> None:
        doctor = self.doctors.get(doctor_id)
        doctor.slots.add_slot(slot_id, start, end)
        self.undo_log.push(UndoAction(UndoKind.ADD_SLOT, doctor_id=doctor_id, slot_id=slot_id))
        logger.info(f"Slot added to doctor {doctor_id}: {slot_id} ({start}-{end})")

    def cancel_slot(self, doctor_id: int, slot_id: int) -> bool:
        """Remove a slot from a doctor's schedule. Returns False if there is no such slot."""
        doctor = self.doctors.get(doctor_id)
        if not doctor.slots.delete_slot(slot_id):
            logger.warning(f"Slot {slot_id} not found for doctor {doctor_id}")
            return False
        self.undo_log.push(UndoAction(UndoKind.DELETE_SLOT, doctor_id=doctor_id, slot_id=slot_id))
        logger.info(f"Slot cancelled: {slot_id} from doctor {doctor_id}")
        return True

    # Booking and triage

    def book_routine(self, patient_id: int, doctor_id: int) -> Token:
        """Queue a routine visit with a doctor.

        The doctor's lowest free slot is booked for the visit. Without a free
        slot the patient is queued as a walk-in.

        Raises:
            DoctorNotFound: If the doctor is not registered.
            QueueFull: If the doctor's routine queue is at capacity. The slot
                stays free and no token is stored.
        """
        doctor = self.doctors.get(doctor_id)
        slot = doctor.slots.find_next_free()

        if slot is not None:
            slot.booked = True
            token = self.tokens.new_token(patient_id, TokenKind.ROUTINE, doctor_id=doctor_id, slot_id=slot.slot_id)
        else:
            token = self.tokens.new_token(patient_id, TokenKind.ROUTINE, doctor_id=doctor_id)

        if not doctor.queue.enqueue(token.token_id):
            if slot is not None:
                slot.booked = False
            logger.warning(f"Routine queue full for doctor {doctor_id}; booking for patient {patient_id} rejected")
            raise QueueFull(doctor_id)

        self.tokens.add(token)
        if slot is not None:
            self.undo_log.push(
                UndoAction(
                    UndoKind.BOOK_ROUTINE,
                    patient_id=patient_id,
                    doctor_id=doctor_id,
                    slot_id=slot.slot_id,
                    token_id=token.token_id,
                )
            )
            logger.info(f"Booked slot {slot.slot_id} with doctor {doctor_id}: token {token.token_id}")
        else:
            self.undo_log.push(
                UndoAction(UndoKind.BOOK_WALKIN, patient_id=patient_id, doctor_id=doctor_id, token_id=token.token_id)
            )
            logger.info(f"Booked walk-in with doctor {doctor_id}: token {token.token_id}")
        return token

    def triage_in(self, patient_id: int, severity: int) -> Token:
        """Place a patient in the emergency heap. Lower severity is more urgent.

        Raises:
            EmergencyHeapFull: If the heap is at capacity. No token is stored.
        """
        token = self.tokens.new_token(patient_id, TokenKind.EMERGENCY)
        if not self.emergency.insert(token.token_id, patient_id, severity):
            logger.warning(f"Emergency heap full; triage of patient {patient_id} rejected")
            raise EmergencyHeapFull()

        self.tokens.add(token)
        self.undo_log.push(
            UndoAction(UndoKind.EMERGENCY_IN, patient_id=patient_id, token_id=token.token_id, severity=severity)
        )
        logger.info(f"Emergency inserted: token {token.token_id} severity {severity}")
        return token

    # Serving

    def serve_next(self) -> ServeResult:
        """Serve the next patient.

        Emergencies always go first, most urgent severity first. Otherwise the
        head of the first non-empty routine queue is served, scanning doctors
        in ascending id order.
        """
        if not self.emergency.is_empty():
            return self._serve_emergency()

        for doctor in self.doctors:
            if not doctor.queue.is_empty():
                return self._serve_routine(doctor)

        logger.info("No patients to serve")
        return ServeResult(status=ServeStatus.NOTHING_TO_SERVE)

    def _serve_emergency(self) -> ServeResult:
        token_id = self.emergency.extract_min()
        token = self.tokens.get(token_id)

        self.patients.increment_visits(token.patient_id)
        self.total_served += 1
        self.tokens.remove(token_id)
        # Severity is gone with the heap entry; undo falls back to config.fallback_severity.
        self.undo_log.push(UndoAction(UndoKind.SERVE_EMERGENCY, patient_id=token.patient_id, token_id=token_id))
        logger.info(f"Served EMERGENCY patient {token.patient_id} (token {token_id})")
        return ServeResult(
            status=ServeStatus.SERVED,
            kind=TokenKind.EMERGENCY,
            patient_id=token.patient_id,
            token_id=token_id,
        )

    def _serve_routine(self, doctor: Doctor) -> ServeResult:
        token_id = doctor.queue.dequeue()
        token = self.tokens.get(token_id)

        if token.slot_id is not None:
            doctor.slots.set_booked(token.slot_id, False)
        self.patients.increment_visits(token.patient_id)
        self.tokens.remove(token_id)
        self.total_served += 1
        doctor.served_count += 1
        self.undo_log.push(
            UndoAction(
                UndoKind.SERVE_ROUTINE,
                patient_id=token.patient_id,
                doctor_id=doctor.id,
                slot_id=token.slot_id,
                token_id=token_id,
            )
        )
        logger.info(f"Served ROUTINE patient {token.patient_id} with doctor {doctor.id} (token {token_id})")
        return ServeResult(
            status=ServeStatus.SERVED,
            kind=TokenKind.ROUTINE,
            patient_id=token.patient_id,
            token_id=token_id,
            doctor_id=doctor.id,
            slot_id=token.slot_id,
        )

    # Undo

    def undo(self) -> UndoResult:
        """Reverse the most recent mutation.

        Raises:
            CapacityExceeded: If reversing a serve would overflow the queue or
                heap. The record is put back on the log and nothing changes.
        """
        action = self.undo_log.pop()
        if action is None:
            logger.info("Nothing to undo")
            return UndoResult(status=UndoStatus.NOTHING_TO_UNDO, message="Nothing to undo")

        try:
            result = self._undo_handlers[action.kind](action)
        except DeskError:
            self.undo_log.push(action)
            raise

        logger.info(f"Undo {action.kind.value}: {result.message}")
        return result

    def _undo_register_patient(self, action: UndoAction) -> UndoResult:
        self.patients.delete(action.patient_id)
        return UndoResult(
            status=UndoStatus.UNDONE,
            message=f"Patient registration removed: {action.patient_id}",
            action=action,
        )

    def _undo_without_snapshot(self, action: UndoAction) -> UndoResult:
        logger.warning(f"Cannot undo {action.kind.value}: no snapshot retained")
        return UndoResult(
            status=UndoStatus.UNSUPPORTED,
            message=f"Cannot undo {action.kind.value}: no snapshot retained",
            action=action,
        )

    def _undo_add_slot(self, action: UndoAction) -> UndoResult:
        doctor = self.doctors.get(action.doctor_id)
        doctor.slots.delete_slot(action.slot_id)
        return UndoResult(
            status=UndoStatus.UNDONE,
            message=f"Slot {action.slot_id} removed from doctor {action.doctor_id}",
            action=action,
        )

    def _undo_booking(self, action: UndoAction) -> UndoResult:
        doctor = self.doctors.get(action.doctor_id)
        doctor.queue.remove_token(action.token_id)
        if action.kind is UndoKind.BOOK_ROUTINE:
            doctor.slots.set_booked(action.slot_id, False)
        self.tokens.remove(action.token_id)
        return UndoResult(
            status=UndoStatus.UNDONE,
            message=f"Booking undone (token {action.token_id})",
            action=action,
        )

    def _undo_emergency_in(self, action: UndoAction) -> UndoResult:
        self.emergency.remove_token(action.token_id)
        self.tokens.remove(action.token_id)
        return UndoResult(
            status=UndoStatus.UNDONE,
            message=f"Emergency insertion undone (token {action.token_id})",
            action=action,
        )

    def _undo_serve_emergency(self, action: UndoAction) -> UndoResult:
        severity = action.severity if action.severity is not None else self.config.fallback_severity
        token = self.tokens.new_token(action.patient_id, TokenKind.EMERGENCY)
        if not self.emergency.insert(token.token_id, action.patient_id, severity):
            logger.warning(f"Emergency heap full; cannot restore patient {action.patient_id}")
            raise EmergencyHeapFull()

        self.tokens.add(token)
        self.total_served = max(0, self.total_served - 1)
        return UndoResult(
            status=UndoStatus.UNDONE,
            message=f"Emergency service undone, reinserted token {token.token_id} at severity {severity}",
            action=action,
            token=token,
        )

    def _undo_serve_routine(self, action: UndoAction) -> UndoResult:
        doctor = self.doctors.get(action.doctor_id)
        token = self.tokens.new_token(
            action.patient_id, TokenKind.ROUTINE, doctor_id=action.doctor_id, slot_id=action.slot_id
        )
        if not doctor.queue.enqueue_front(token.token_id):
            logger.warning(f"Routine queue full for doctor {doctor.id}; cannot restore patient {action.patient_id}")
            raise QueueFull(doctor.id)

        self.tokens.add(token)
        if action.slot_id is not None:
            doctor.slots.set_booked(action.slot_id, True)
        self.total_served = max(0, self.total_served - 1)
        return UndoResult(
            status=UndoStatus.UNDONE,
            message=f"Routine service undone, token {token.token_id} back at the front of doctor {doctor.id}'s queue",
            action=action,
            token=token,
        )
