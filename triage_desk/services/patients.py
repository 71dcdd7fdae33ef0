"""Patient directory interface and in-memory implementation."""

from typing import Protocol

from triage_desk.errors import PatientNotFound
from triage_desk.models.patient import Patient


class PatientDirectory(Protocol):
    """Interface for patient record storage.

    The scheduling engine only relies on lookup by id and on bumping the visit
    count when a patient is served.
    """

    def upsert(self, patient: Patient) -> None: ...

    def get(self, patient_id: int) -> Patient:
        """Return the patient or raise PatientNotFound."""
        ...

    def find(self, patient_id: int) -> Patient | None: ...

    def delete(self, patient_id: int) -> bool: ...

    def increment_visits(self, patient_id: int) -> bool:
        """Bump the visit count. Returns False when the patient is unknown."""
        ...

    def all(self) -> list[Patient]: ...


class InMemoryPatientDirectory:
    """Dictionary-backed patient directory. Last write wins on upsert."""

    def __init__(self):
        self.patients: dict[int, Patient] = {}

    def upsert(self, patient: Patient) -> None:
        self.patients[patient.id] = patient

    def get(self, patient_id: int) -> Patient:
        patient = self.patients.get(patient_id)
        if patient is None:
            raise PatientNotFound(patient_id)
        return patient

    def find(self, patient_id: int) -> Patient | None:
        return self.patients.get(patient_id)

    def delete(self, patient_id: int) -> bool:
        if patient_id in self.patients:
            del self.patients[patient_id]
            return True
        return False

    def increment_visits(self, patient_id: int) -> bool:
        patient = self.patients.get(patient_id)
        if patient is None:
            return False
        patient.visits += 1
        return True

    def all(self) -> list[Patient]:
        return list(self.patients.values())
