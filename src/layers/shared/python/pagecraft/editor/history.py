"""Linear undo/redo history of whole-state snapshots."""

from typing import Generic, TypeVar

T = TypeVar("T")


class UndoStack(Generic[T]):
    """Undo/redo history over snapshots of any state type.

    Invariant: ``0 <= cursor < len(history)``; the current state is
    ``history[cursor]``. Pushing after an undo discards the redo branch.

    Snapshots are stored as given; callers must not mutate a state after
    pushing it.
    """

    def __init__(self, initial: T, max_size: int | None = None):
        """Initialize the stack.

        Args:
            initial: Initial state.
            max_size: Maximum snapshots kept (None for unbounded).
        """
        if max_size is not None and max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._history: list[T] = [initial]
        self._cursor = 0

    @property
    def current(self) -> T:
        """The state at the cursor."""
        return self._history[self._cursor]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def history(self) -> list[T]:
        """Copy of the snapshot list, oldest first."""
        return list(self._history)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._history) - 1

    def push(self, state: T) -> T:
        """Record a new state, discarding any redo branch.

        Args:
            state: New current state.

        Returns:
            The pushed state.
        """
        del self._history[self._cursor + 1:]
        self._history.append(state)
        self._cursor = len(self._history) - 1

        if self.max_size is not None and len(self._history) > self.max_size:
            overflow = len(self._history) - self.max_size
            del self._history[:overflow]
            self._cursor -= overflow

        return state

    def undo(self) -> T:
        """Step back one state. No-op at the oldest state."""
        if self.can_undo:
            self._cursor -= 1
        return self.current

    def redo(self) -> T:
        """Step forward one state. No-op at the newest state."""
        if self.can_redo:
            self._cursor += 1
        return self.current

    def reset(self, initial: T) -> None:
        """Discard all history and start over from a state."""
        self._history = [initial]
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._history)
