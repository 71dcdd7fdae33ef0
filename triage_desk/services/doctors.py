"""Doctor registry."""

from collections.abc import Iterator

from triage_desk.errors import DoctorNotFound
from triage_desk.models.doctor import Doctor


class DoctorRegistry:
    """Id-keyed doctors, enumerated in ascending id order.

    The enumeration order is what serve_next uses to pick between doctors, so
    it must not depend on registration order.
    """

    def __init__(self):
        self._doctors: dict[int, Doctor] = {}

    def __contains__(self, doctor_id: int) -> bool:
        return doctor_id in self._doctors

    def __len__(self) -> int:
        return len(self._doctors)

    def __iter__(self) -> Iterator[Doctor]:
        for doctor_id in sorted(self._doctors):
            yield self._doctors[doctor_id]

    def add(self, doctor: Doctor) -> bool:
        """Register a doctor. Returns False, changing nothing, if the id is taken."""
        if doctor.id in self._doctors:
            return False
        self._doctors[doctor.id] = doctor
        return True

    def get(self, doctor_id: int) -> Doctor:
        doctor = self._doctors.get(doctor_id)
        if doctor is None:
            raise DoctorNotFound(doctor_id)
        return doctor
