"""Shared timer session.

One session per process, observed by any number of listeners. The session
owns a single tick source, so adding observers never changes how fast the
elapsed counter grows. Elapsed seconds are the authoritative duration; the
``started_at`` anchor is informational only.
"""

import enum
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from threading import Lock
from typing import Callable, Optional, Union

from timekeeper.schemas.time_entry import NO_TASK
from timekeeper.timer.clock import IntervalClock

logger = logging.getLogger(__name__)

_UNSET = object()


class TimerStateError(Exception):
    """Transition not allowed from the current phase."""


class ProjectSelectionRequired(TimerStateError):
    """The timer needs a project before it can start or be saved."""


class TimerPhase(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


@dataclass(frozen=True)
class TimerState:
    phase: TimerPhase = TimerPhase.IDLE
    elapsed_seconds: int = 0
    project_id: Optional[int] = None
    task_id: Union[int, str, None] = NO_TASK
    description: str = ""
    started_at: Optional[datetime] = None

    @property
    def is_running(self) -> bool:
        return self.phase is TimerPhase.RUNNING

    @property
    def has_project(self) -> bool:
        return self.project_id not in (None, "")


Listener = Callable[[TimerState], None]


def format_elapsed(seconds: int) -> str:
    hours, rem = divmod(max(int(seconds), 0), 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class TimerSession:
    def __init__(self, clock=None):
        self._clock = clock if clock is not None else IntervalClock()
        self._lock = Lock()
        self._state = TimerState()
        self._listeners: list[Listener] = []
        # bumped whenever the tick source is (re)started or halted, so a tick
        # scheduled by an earlier source can never land
        self._generation = 0

    # ---------- observation ----------

    @property
    def state(self) -> TimerState:
        with self._lock:
            return self._state

    def formatted(self) -> str:
        return format_elapsed(self.state.elapsed_seconds)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: TimerState) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(state)
            except Exception:
                logger.warning("Timer listener %r failed", listener, exc_info=True)

    # ---------- tick source ----------

    def _start_ticking(self) -> None:
        self._generation += 1
        generation = self._generation
        self._clock.start(lambda: self._advance(generation))

    def _stop_ticking(self) -> None:
        self._generation += 1
        self._clock.stop()

    def _advance(self, generation: Optional[int]) -> bool:
        with self._lock:
            if generation is not None and generation != self._generation:
                return False
            if self._state.phase is not TimerPhase.RUNNING:
                return False
            self._state = replace(self._state, elapsed_seconds=self._state.elapsed_seconds + 1)
            state = self._state
        self._notify(state)
        return True

    def tick(self) -> bool:
        """Add one second if running. Returns whether the counter moved."""
        return self._advance(None)

    # ---------- transitions ----------

    def start(
        self,
        project_id: Optional[int],
        task_id: Union[int, str, None] = NO_TASK,
        description: str = "",
        reset_time: bool = True,
    ) -> TimerState:
        if project_id in (None, ""):
            raise ProjectSelectionRequired("Select a project before starting the timer")

        with self._lock:
            current = self._state
            if current.phase is TimerPhase.STOPPED:
                # stopped time is only released by a save or an explicit reset
                raise TimerStateError("Save or reset the stopped timer before starting again")

            keep_time = not reset_time and current.elapsed_seconds > 0
            self._state = TimerState(
                phase=TimerPhase.RUNNING,
                elapsed_seconds=current.elapsed_seconds if keep_time else 0,
                project_id=project_id,
                task_id=task_id if task_id not in (None, "") else NO_TASK,
                description=description or "",
                started_at=current.started_at if keep_time else datetime.now(timezone.utc),
            )
            if current.phase is TimerPhase.RUNNING and not keep_time:
                # a zeroed counter gets a fresh source, so its first second is a full interval
                self._stop_ticking()
                self._start_ticking()
            elif current.phase is not TimerPhase.RUNNING:
                self._start_ticking()
            state = self._state

        self._notify(state)
        return state

    def pause(self) -> TimerState:
        with self._lock:
            if self._state.phase is not TimerPhase.RUNNING:
                raise TimerStateError("Timer is not running")
            self._stop_ticking()
            self._state = replace(self._state, phase=TimerPhase.PAUSED)
            state = self._state

        self._notify(state)
        return state

    def resume(self) -> TimerState:
        with self._lock:
            if self._state.phase is not TimerPhase.PAUSED:
                raise TimerStateError("Timer is not paused")
            self._state = replace(self._state, phase=TimerPhase.RUNNING)
            self._start_ticking()
            state = self._state

        self._notify(state)
        return state

    def stop(self) -> TimerState:
        """Halt ticking and keep elapsed until the entry is saved."""
        with self._lock:
            if self._state.phase not in (TimerPhase.RUNNING, TimerPhase.PAUSED):
                raise TimerStateError("Timer is not active")
            if self._state.phase is TimerPhase.RUNNING:
                self._stop_ticking()
            self._state = replace(self._state, phase=TimerPhase.STOPPED)
            state = self._state

        self._notify(state)
        return state

    def update(self, project_id=_UNSET, task_id=_UNSET, description=_UNSET) -> TimerState:
        """Rebind project, task or description without touching elapsed time."""
        changes = {}
        if project_id is not _UNSET:
            changes["project_id"] = project_id
        if task_id is not _UNSET:
            changes["task_id"] = task_id if task_id not in (None, "") else NO_TASK
        if description is not _UNSET:
            changes["description"] = description or ""

        with self._lock:
            if (
                self._state.phase is TimerPhase.RUNNING
                and "project_id" in changes
                and changes["project_id"] in (None, "")
            ):
                raise ProjectSelectionRequired("A running timer must stay bound to a project")
            self._state = replace(self._state, **changes)
            state = self._state

        self._notify(state)
        return state

    def reset(self, expected: Optional[TimerState] = None) -> bool:
        """Return to idle.

        With ``expected``, only resets if the session still holds exactly that
        state, so a save that finishes late cannot wipe a newer session.
        """
        with self._lock:
            if expected is not None and self._state != expected:
                return False
            if self._state.phase is TimerPhase.RUNNING:
                self._stop_ticking()
            self._state = TimerState()
            state = self._state

        self._notify(state)
        return True

    def finish(self, saved: TimerState) -> bool:
        """Return to idle once ``saved`` has been persisted.

        Edits to the stopped run while its save was in flight do not keep it
        alive. A run that was reset and started again is left alone.
        """
        with self._lock:
            current = self._state
            if (
                current.phase is not TimerPhase.STOPPED
                or current.started_at != saved.started_at
                or current.elapsed_seconds != saved.elapsed_seconds
            ):
                return False
            self._state = TimerState()
            state = self._state

        self._notify(state)
        return True


_default_session: Optional[TimerSession] = None
_default_session_lock = Lock()


def get_timer_session() -> TimerSession:
    """Process-wide session shared by every consumer."""
    global _default_session
    with _default_session_lock:
        if _default_session is None:
            _default_session = TimerSession()
        return _default_session
