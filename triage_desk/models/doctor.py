"""Doctor data models."""

from dataclasses import dataclass, field

from triage_desk.structures.routine_queue import RoutineQueue
from triage_desk.structures.slot_list import SlotList


@dataclass
class Doctor:
    """A doctor owning one slot list and one bounded routine queue."""

    id: int
    name: str
    specialization: str
    queue_capacity: int
    slots: SlotList = field(default_factory=SlotList)
    served_count: int = 0
    queue: RoutineQueue = field(init=False)

    def __post_init__(self) -> None:
        self.queue = RoutineQueue(self.queue_capacity)
