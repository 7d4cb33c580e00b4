import logging
from threading import Event, Lock, Thread
from typing import Callable, Optional

from timekeeper.config import settings

logger = logging.getLogger(__name__)


class IntervalClock:
    """Background thread calling ``callback`` once per interval.

    Interval based, so it drifts with scheduling latency; the timer session
    counts ticks rather than reading wall-clock time.
    """

    def __init__(self, interval: Optional[float] = None):
        self.interval = interval if interval is not None else settings.TIMER_TICK_SECONDS
        self._lock = Lock()
        self._thread: Optional[Thread] = None
        self._stop_event: Optional[Event] = None

    @property
    def running(self) -> bool:
        with self._lock:
            return self._stop_event is not None

    def start(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if self._stop_event is not None:
                return
            stop_event = Event()
            thread = Thread(
                target=self._run,
                args=(callback, stop_event),
                name="timekeeper-timer",
                daemon=True,
            )
            self._stop_event = stop_event
            self._thread = thread
        thread.start()

    def stop(self) -> None:
        # never joins, the caller may hold a lock the tick callback is waiting on
        with self._lock:
            stop_event = self._stop_event
            self._stop_event = None
            self._thread = None
        if stop_event is not None:
            stop_event.set()

    def _run(self, callback: Callable[[], None], stop_event: Event) -> None:
        while not stop_event.wait(self.interval):
            try:
                callback()
            except Exception:
                logger.exception("Timer tick failed")
