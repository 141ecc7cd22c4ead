"""Debounced autosave of the editor state.

A burst of edits produces a single write, made once the editor has been
quiet for the debounce delay. A write still pending when the process dies
is lost; the store is not required to survive that.
"""

import logging
import threading
from typing import Callable, Optional

from .constants import LayoutConstants
from .persistence import StatePersistence
from .state import EditorState, EditorStore

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


class Debouncer:
    """Runs ``callback`` once, ``delay`` seconds after the last trigger.

    Each trigger cancels the pending run and schedules a new one.
    """

    def __init__(self, delay: float, callback: Callable[[], None],
                 timer_factory: TimerFactory = threading.Timer):
        self._delay = delay
        self._callback = callback
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def trigger(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = self._timer_factory(self._delay, lambda: self._fire(timer))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> bool:
        """Run a pending callback now instead of waiting.

        Returns:
            True if a callback was pending and has run.
        """
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
        self._callback()
        return True

    def _fire(self, timer) -> None:
        with self._lock:
            # Superseded by a later trigger
            if self._timer is not timer:
                return
            self._timer = None
        self._callback()


class Autosave:
    """Persists the store's snapshot after each quiet period while dirty."""

    def __init__(self, store: EditorStore, persistence: StatePersistence,
                 delay: float = LayoutConstants.AUTOSAVE_DELAY,
                 timer_factory: TimerFactory = threading.Timer):
        self._store = store
        self._persistence = persistence
        self._debouncer = Debouncer(delay, self.save_now, timer_factory)
        self._unsubscribe: Optional[Callable[[], None]] = store.subscribe(self._on_change)

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def _on_change(self, state: EditorState) -> None:
        if state.is_dirty:
            logger.debug("State changed, autosave rescheduled")
            self._debouncer.trigger()

    def save_now(self) -> bool:
        return self._persistence.save(self._store.snapshot())

    def flush(self) -> bool:
        return self._debouncer.flush()

    def close(self) -> None:
        """Stop watching the store and drop any pending write."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._debouncer.cancel()
