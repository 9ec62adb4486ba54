"""Wall-clock tick source for interactive sessions."""

import logging
import threading
from typing import Callable, Optional

from ..config.schemas import TICK_INTERVAL

logger = logging.getLogger(__name__)


class PeriodicScheduler:
    """Calls a callback every ``interval`` seconds on one background thread.

    Each callback runs to completion before the next wait starts, so calls
    never overlap. ``stop`` returns only after the thread has exited, unless
    it is called from inside the callback itself.
    """

    def __init__(self, interval: float = TICK_INTERVAL, name: str = "lotka-lab-ticker"):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.name = name
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._lock = threading.Lock()

    @property
    def is_active(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and not self._stop_event.is_set()
        )

    def start(self, callback: Callable[[], bool]) -> None:
        """Begin calling ``callback`` periodically. No-op if already active.

        The loop ends when ``stop`` is called or the callback returns False.
        """
        stop_event = threading.Event()

        def run():
            while not stop_event.wait(self.interval):
                try:
                    if callback() is False:
                        stop_event.set()
                except Exception:
                    logger.exception("Scheduled tick failed; stopping scheduler")
                    stop_event.set()

        with self._lock:
            if self.is_active:
                return
            self._stop_event = stop_event
            self._thread = threading.Thread(target=run, name=self.name, daemon=True)
            self._thread.start()
        logger.debug("Scheduler started with interval %.3fs", self.interval)

    def stop(self) -> None:
        """Stop ticking. Idempotent."""
        with self._lock:
            self._stop_event.set()
            thread, self._thread = self._thread, None
        if thread is None:
            return
        # callbacks may call stop(); never join while holding the lock
        if thread is not threading.current_thread():
            thread.join()
        logger.debug("Scheduler stopped")
