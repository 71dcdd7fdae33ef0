"""Bounded ring-buffer queue of routine token ids."""

_EMPTY = -1


class RoutineQueue:
    """Fixed-capacity FIFO of token ids for one doctor.

    Both cursors are -1 while the queue is empty. Removing the last element
    resets them rather than leaving them pointing at a stale cell.
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError("Routine queue capacity must be positive")
        self.capacity = capacity
        self._items: list[int | None] = [None] * capacity
        self._front = _EMPTY
        self._rear = _EMPTY

    def is_empty(self) -> bool:
        return self._front == _EMPTY

    def is_full(self) -> bool:
        if self.is_empty():
            return False
        return (self._rear + 1) % self.capacity == self._front

    def count(self) -> int:
        """Number of queued ids, derived from the cursors."""
        if self.is_empty():
            return 0
        if self._rear >= self._front:
            return self._rear - self._front + 1
        return self.capacity - self._front + self._rear + 1

    def __len__(self) -> int:
        return self.count()

    def enqueue(self, token_id: int) -> bool:
        """Append at the tail. Returns False, changing nothing, when full."""
        if self.is_full():
            return False
        if self.is_empty():
            self._front = 0
        self._rear = (self._rear + 1) % self.capacity
        self._items[self._rear] = token_id
        return True

    def enqueue_front(self, token_id: int) -> bool:
        """Insert at the head. Returns False, changing nothing, when full."""
        if self.is_full():
            return False
        if self.is_empty():
            self._front = self._rear = 0
            self._items[0] = token_id
            return True
        self._front = (self._front - 1) % self.capacity
        self._items[self._front] = token_id
        return True

    def dequeue(self) -> int | None:
        """Remove and return the head id, or None when empty."""
        if self.is_empty():
            return None
        token_id = self._items[self._front]
        self._items[self._front] = None
        if self._front == self._rear:
            self._front = self._rear = _EMPTY
        else:
            self._front = (self._front + 1) % self.capacity
        return token_id

    def peek(self) -> int | None:
        return None if self.is_empty() else self._items[self._front]

    def remove_token(self, token_id: int) -> bool:
        """Remove the first occurrence of token_id, keeping the others in order.

        Drains the queue and re-enqueues everything except the match.
        """
        if self.is_empty():
            return False

        kept: list[int] = []
        found = False
        while not self.is_empty():
            current = self.dequeue()
            if current == token_id and not found:
                found = True
                continue
            kept.append(current)

        for current in kept:
            self.enqueue(current)
        return found

    def to_list(self) -> list[int]:
        """Snapshot of the queued ids, head to tail."""
        result: list[int] = []
        if self.is_empty():
            return result
        i = self._front
        while True:
            result.append(self._items[i])
            if i == self._rear:
                break
            i = (i + 1) % self.capacity
        return result
