"""Debounced autosave status.

Each change marks the session as saving and restarts a single-shot timer;
the status flips to saved only when the delay passes with no further change.
"""

import threading
from enum import Enum
from typing import Callable, Protocol

import structlog

from pagecraft.config import get_autosave_delay

logger = structlog.get_logger()


class AutosaveStatus(str, Enum):
    """Autosave indicator states."""

    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"


class Cancellable(Protocol):
    """Minimal timer interface (satisfied by threading.Timer)."""

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Cancellable]


def _thread_timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


class AutosaveTimer:
    """Debounce timer owned by one editing session."""

    def __init__(
        self,
        delay: float | None = None,
        timer_factory: TimerFactory | None = None,
        on_saved: Callable[[], None] | None = None,
    ):
        """Initialize the timer.

        Args:
            delay: Debounce delay in seconds (PAGECRAFT_AUTOSAVE_DELAY if None).
            timer_factory: Builds a startable, cancellable timer.
            on_saved: Called when a debounce period completes.
        """
        self.delay = delay if delay is not None else get_autosave_delay()
        self._timer_factory = timer_factory or _thread_timer
        self._on_saved = on_saved
        self._lock = threading.Lock()
        self._timer: Cancellable | None = None
        self._generation = 0
        self._closed = False
        self._status = AutosaveStatus.IDLE

    @property
    def status(self) -> AutosaveStatus:
        return self._status

    @property
    def pending(self) -> bool:
        """Check whether a debounce period is running."""
        return self._timer is not None

    def touch(self) -> None:
        """Record a change: status becomes saving and the timer restarts."""
        with self._lock:
            if self._closed:
                logger.debug("Autosave touched after close")
                return
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            generation = self._generation
            self._status = AutosaveStatus.SAVING
            self._timer = self._timer_factory(self.delay, lambda: self._expire(generation))
            self._timer.start()

    def _expire(self, generation: int) -> None:
        with self._lock:
            # A later touch() or close() superseded this timer
            if self._closed or generation != self._generation:
                return
            self._timer = None
            self._status = AutosaveStatus.SAVED

        logger.debug("Autosave complete", generation=generation)
        if self._on_saved is not None:
            self._on_saved()

    def cancel(self) -> None:
        """Stop the running timer, leaving the status as is."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1

    def close(self) -> None:
        """Cancel the timer and ignore further changes."""
        self.cancel()
        self._closed = True

    def __enter__(self) -> "AutosaveTimer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
