"""Patient data models."""

from dataclasses import dataclass


@dataclass
class Patient:
    """Patient business model."""

    id: int
    name: str
    age: int
    severity: int = 0  # last-known severity
    visits: int = 0
