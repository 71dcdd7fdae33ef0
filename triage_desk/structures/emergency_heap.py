"""Bounded array-backed min-heap for emergency triage."""

from dataclasses import dataclass


@dataclass
class HeapEntry:
    """One triaged entry. Lower severity is more urgent."""

    token_id: int
    patient_id: int
    severity: int


class EmergencyHeap:
    """Fixed-capacity binary min-heap keyed by severity.

    Ties between equal severities resolve by heap structure, so equal-severity
    entries are not guaranteed to come out in insertion order.
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError("Emergency heap capacity must be positive")
        self.capacity = capacity
        self._heap: list[HeapEntry] = []

    @property
    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    def is_full(self) -> bool:
        return len(self._heap) >= self.capacity

    def insert(self, token_id: int, patient_id: int, severity: int) -> bool:
        """Add an entry. Returns False, changing nothing, when full."""
        if self.is_full():
            return False
        self._heap.append(HeapEntry(token_id=token_id, patient_id=patient_id, severity=severity))
        self._sift_up(len(self._heap) - 1)
        return True

    def extract_min(self) -> int | None:
        """Remove the most urgent entry and return its token id, or None when empty."""
        if not self._heap:
            return None
        root = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last
            self._sift_down(0)
        return root.token_id

    def remove_token(self, token_id: int) -> bool:
        """Remove the entry for token_id wherever it sits in the array."""
        index = self._index_of(token_id)
        if index is None:
            return False

        last = self._heap.pop()
        if index < len(self._heap):
            self._heap[index] = last
            # The moved entry may belong above or below its new position.
            index = self._sift_up(index)
            self._sift_down(index)
        return True

    def peek(self) -> HeapEntry | None:
        return self._heap[0] if self._heap else None

    def peek_token_id(self) -> int | None:
        return self._heap[0].token_id if self._heap else None

    def peek_patient_id(self) -> int | None:
        return self._heap[0].patient_id if self._heap else None

    def peek_severity(self) -> int | None:
        return self._heap[0].severity if self._heap else None

    def severity_of(self, token_id: int) -> int | None:
        index = self._index_of(token_id)
        return None if index is None else self._heap[index].severity

    def entries(self) -> list[HeapEntry]:
        """Entries in array order (not priority order)."""
        return list(self._heap)

    def _index_of(self, token_id: int) -> int | None:
        for i, entry in enumerate(self._heap):
            if entry.token_id == token_id:
                return i
        return None

    def _sift_up(self, i: int) -> int:
        heap = self._heap
        while i > 0:
            parent = (i - 1) // 2
            if heap[i].severity >= heap[parent].severity:
                break
            heap[i], heap[parent] = heap[parent], heap[i]
            i = parent
        return i

    def _sift_down(self, i: int) -> None:
        heap = self._heap
        size = len(heap)
        while True:
            smallest = i
            left, right = 2 * i + 1, 2 * i + 2
            if left < size and heap[left].severity < heap[smallest].severity:
                smallest = left
            if right < size and heap[right].severity < heap[smallest].severity:
                smallest = right
            if smallest == i:
                return
            heap[i], heap[smallest] = heap[smallest], heap[i]
            i = smallest
