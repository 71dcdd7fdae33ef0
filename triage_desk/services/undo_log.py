"""Stack of reversible action records."""

from triage_desk.models.undo import UndoAction


class UndoLog:
    """LIFO log of undo records. Only the most recent record is ever reversed."""

    def __init__(self):
        self._actions: list[UndoAction] = []

    def __len__(self) -> int:
        return len(self._actions)

    def is_empty(self) -> bool:
        return not self._actions

    def push(self, action: UndoAction) -> None:
        self._actions.append(action)

    def pop(self) -> UndoAction | None:
        if not self._actions:
            return None
        return self._actions.pop()

    def peek(self) -> UndoAction | None:
        return self._actions[-1] if self._actions else None
