"""Per-doctor singly linked list of bookable slots."""

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(eq=False)
class Slot:
    """A bookable time unit. start/end are opaque labels."""

    slot_id: int
    start: str
    end: str
    booked: bool = False
    next: "Slot | None" = None

    def __repr__(self) -> str:
        state = "BOOKED" if self.booked else "FREE"
        return f"Slot({self.slot_id}: {self.start}-{self.end} {state})"


class SlotList:
    """Slots for one doctor, newest first.

    Slot ids are expected to be unique per doctor; duplicates are not rejected
    and lookups act on the first match from the head.
    """

    def __init__(self):
        self.head: Slot | None = None

    def __iter__(self) -> Iterator[Slot]:
        current = self.head
        while current is not None:
            yield current
            current = current.next

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def add_slot(self, slot_id: int, start: str, end: str) -> Slot:
        slot = Slot(slot_id=slot_id, start=start, end=end)
        slot.next = self.head
        self.head = slot
        return slot

    def delete_slot(self, slot_id: int) -> bool:
        previous: Slot | None = None
        current = self.head
        while current is not None:
            if current.slot_id == slot_id:
                if previous is None:
                    self.head = current.next
                else:
                    previous.next = current.next
                return True
            previous = current
            current = current.next
        return False

    def find(self, slot_id: int) -> Slot | None:
        for slot in self:
            if slot.slot_id == slot_id:
                return slot
        return None

    def find_next_free(self) -> Slot | None:
        """Free slot with the lowest id, or None."""
        best: Slot | None = None
        for slot in self:
            if not slot.booked and (best is None or slot.slot_id < best.slot_id):
                best = slot
        return best

    def set_booked(self, slot_id: int, booked: bool) -> bool:
        slot = self.find(slot_id)
        if slot is None:
            return False
        slot.booked = booked
        return True

    def free_count(self) -> int:
        return sum(1 for slot in self if not slot.booked)
