"""Exception taxonomy for the scheduling desk."""


class DeskError(Exception):
    """Base class for rejected desk operations."""


class NotFound(DeskError):
    """A referenced record does not exist."""


class DoctorNotFound(NotFound):
    def __init__(self, doctor_id: int):
        super().__init__(f"Doctor {doctor_id} not found")
        self.doctor_id = doctor_id


class PatientNotFound(NotFound):
    def __init__(self, patient_id: int):
        super().__init__(f"Patient {patient_id} not found")
        self.patient_id = patient_id


class TokenNotFound(NotFound):
    def __init__(self, token_id: int):
        super().__init__(f"Token {token_id} not found")
        self.token_id = token_id


class CapacityExceeded(DeskError):
    """A bounded queue or heap is full. Nothing was changed."""


class QueueFull(CapacityExceeded):
    def __init__(self, doctor_id: int):
        super().__init__(f"Routine queue full for doctor {doctor_id}")
        self.doctor_id = doctor_id


class EmergencyHeapFull(CapacityExceeded):
    def __init__(self):
        super().__init__("Emergency heap full")


class DuplicateDoctor(DeskError):
    def __init__(self, doctor_id: int):
        super().__init__(f"Doctor {doctor_id} already exists")
        self.doctor_id = doctor_id
