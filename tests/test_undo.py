"""Tests for undo reversal."""

import pytest

from triage_desk.errors import EmergencyHeapFull, PatientNotFound, QueueFull
from triage_desk.models.token import TokenKind
from triage_desk.models.undo import UndoKind, UndoStatus


def snapshot(engine, doctor_id: int):
    doctor = engine.doctors.get(doctor_id)
    return (
        doctor.slots.free_count(),
        doctor.queue.to_list(),
        [token.as_dict() for token in engine.tokens.all()],
    )


class TestUndoBasics:
    """Tests for the undo log itself."""

    def test_empty_log_is_not_an_error(self, engine):
        """Test that undo with nothing recorded reports so."""
        result = engine.undo()
        assert result.status is UndoStatus.NOTHING_TO_UNDO

    def test_each_undo_consumes_one_record(self, clinic):
        """Test strict last-in-first-out reversal."""
        clinic.book_routine(1, 1)
        clinic.triage_in(2, severity=3)

        assert clinic.undo().action.kind is UndoKind.EMERGENCY_IN
        assert clinic.undo().action.kind is UndoKind.BOOK_ROUTINE
        assert clinic.undo().action.kind is UndoKind.REGISTER_PATIENT

    def test_undo_register_patient(self, engine):
        """Test that undoing a registration removes the patient."""
        engine.register_patient(1, "Alice", 30)
        result = engine.undo()

        assert result.status is UndoStatus.UNDONE
        with pytest.raises(PatientNotFound):
            engine.get_patient(1)

    def test_undo_add_slot(self, clinic):
        """Test that undoing a slot addition removes it."""
        clinic.add_slot(1, 3, "11:00", "11:30")
        clinic.undo()
        assert clinic.doctors.get(1).slots.find(3) is None


class TestUnsupportedUndo:
    """Tests for deletions, which keep no snapshot."""

    def test_undo_delete_patient_is_unsupported(self, clinic):
        """Test that the deleted patient stays deleted and the record is consumed."""
        clinic.delete_patient(3)
        result = clinic.undo()

        assert result.status is UndoStatus.UNSUPPORTED
        assert "no snapshot" in result.message
        with pytest.raises(PatientNotFound):
            clinic.get_patient(3)
        assert clinic.undo_log.peek().kind is UndoKind.REGISTER_PATIENT

    def test_undo_delete_slot_is_unsupported(self, clinic):
        """Test that a cancelled slot is not restored."""
        clinic.cancel_slot(1, 2)
        result = clinic.undo()

        assert result.status is UndoStatus.UNSUPPORTED
        assert clinic.doctors.get(1).slots.find(2) is None


class TestUndoBooking:
    """Tests for reversing bookings and triage."""

    def test_booking_round_trip(self, clinic):
        """Test that book then undo restores slots, queue and token store."""
        clinic.book_routine(2, 1)
        before = snapshot(clinic, 1)

        clinic.book_routine(1, 1)
        result = clinic.undo()

        assert result.status is UndoStatus.UNDONE
        assert snapshot(clinic, 1) == before

    def test_undo_booking_keeps_earlier_tokens(self, clinic):
        """Test that only the undone token leaves the queue."""
        first = clinic.book_routine(1, 1)
        second = clinic.book_routine(2, 1)

        clinic.undo()

        assert clinic.doctors.get(1).queue.to_list() == [first.token_id]
        assert second.token_id not in clinic.tokens
        assert clinic.doctors.get(1).slots.find(2).booked is False
        assert clinic.doctors.get(1).slots.find(1).booked is True

    def test_walk_in_round_trip(self, clinic):
        """Test that undoing a walk-in leaves slots untouched."""
        clinic.book_routine(1, 1)
        clinic.book_routine(2, 1)
        before = snapshot(clinic, 1)

        clinic.book_routine(3, 1)
        assert clinic.undo().action.kind is UndoKind.BOOK_WALKIN
        assert snapshot(clinic, 1) == before

    def test_undo_emergency_in(self, engine):
        """Test that undoing a triage removes the entry from inside the heap."""
        engine.triage_in(1, severity=1)
        engine.triage_in(2, severity=10)
        engine.triage_in(3, severity=2)
        engine.triage_in(4, severity=11)
        target = engine.triage_in(5, severity=3)
        assert [entry.token_id for entry in engine.emergency.entries()] == [1, 5, 3, 4, 2]

        result = engine.undo()

        assert result.action.token_id == target.token_id
        assert target.token_id not in engine.tokens
        assert engine.emergency.severity_of(target.token_id) is None
        assert [engine.emergency.extract_min() for _ in range(4)] == [1, 3, 2, 4]


class TestUndoServe:
    """Tests for reversing a serve."""

    def test_routine_serve_round_trip(self, clinic):
        """Test that the patient returns to the head of the queue and the slot is rebooked."""
        original = clinic.book_routine(1, 1)
        waiting = clinic.book_routine(2, 1)
        clinic.serve_next()
        slot = clinic.doctors.get(1).slots.find(1)
        assert slot.booked is False

        result = clinic.undo()

        assert result.status is UndoStatus.UNDONE
        restored = result.token
        assert restored.token_id != original.token_id
        assert restored.patient_id == 1
        assert restored.slot_id == 1
        assert restored.kind is TokenKind.ROUTINE
        assert clinic.doctors.get(1).queue.to_list() == [restored.token_id, waiting.token_id]
        assert slot.booked is True
        assert clinic.total_served == 0

    def test_walk_in_serve_round_trip(self, engine):
        """Test undoing the serve of a token without a slot."""
        engine.add_doctor(1, "Rao", "General")
        engine.book_routine(1, 1)
        engine.serve_next()

        restored = engine.undo().token
        assert restored.slot_id is None
        assert engine.doctors.get(1).queue.to_list() == [restored.token_id]

    def test_emergency_serve_uses_fallback_severity(self, engine):
        """Test the known approximation: the original severity is not recovered."""
        engine.triage_in(7, severity=1)
        engine.serve_next()

        result = engine.undo()

        assert result.token.kind is TokenKind.EMERGENCY
        assert result.token.patient_id == 7
        assert engine.emergency.peek_severity() == engine.config.fallback_severity == 5
        assert result.token.token_id in engine.tokens
        assert engine.total_served == 0

    def test_total_served_floors_at_zero(self, engine):
        """Test that undo never drives the served total negative."""
        engine.triage_in(7, severity=1)
        engine.serve_next()
        engine.total_served = 0

        engine.undo()
        assert engine.total_served == 0

    def test_undo_serve_onto_full_queue_changes_nothing(self, engine):
        """Test that a reinsertion that would overflow the queue is refused and kept undoable."""
        engine.add_doctor(1, "Rao", "General", queue_capacity=1)
        engine.add_slot(1, 1, "10:00", "10:30")
        engine.book_routine(1, 1)
        engine.serve_next()
        doctor = engine.doctors.get(1)
        doctor.queue.enqueue(999)
        token_count = len(engine.tokens)

        with pytest.raises(QueueFull):
            engine.undo()

        assert doctor.queue.to_list() == [999]
        assert doctor.slots.find(1).booked is False
        assert len(engine.tokens) == token_count
        assert engine.total_served == 1
        assert engine.undo_log.peek().kind is UndoKind.SERVE_ROUTINE

    def test_undo_serve_onto_full_heap_changes_nothing(self, engine):
        """Test that an emergency reinsertion into a full heap is refused and kept undoable."""
        engine.emergency.capacity = 1
        engine.triage_in(1, severity=2)
        engine.serve_next()
        engine.emergency.insert(999, 9, 0)

        with pytest.raises(EmergencyHeapFull):
            engine.undo()

        assert engine.emergency.size == 1
        assert len(engine.tokens) == 0
        assert engine.undo_log.peek().kind is UndoKind.SERVE_EMERGENCY
