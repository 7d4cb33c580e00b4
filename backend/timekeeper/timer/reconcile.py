import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx

from timekeeper.schemas.time_entry import NO_TASK
from timekeeper.timer.client import ApiClientError, TimekeeperClient
from timekeeper.timer.session import (
    ProjectSelectionRequired,
    TimerPhase,
    TimerSession,
    TimerState,
    TimerStateError,
)

logger = logging.getLogger(__name__)


class ReconciliationError(Exception):
    """The time entry could not be saved; the session still holds the time."""


def build_time_entry_payload(state: TimerState, now: Optional[datetime] = None) -> dict:
    """Request body for a stopped session.

    ``duration_seconds`` is the tick counter and ``start_time`` is derived
    from it, so ``end_time - start_time`` equals the duration exactly.
    """
    if not state.has_project:
        raise ProjectSelectionRequired("Select a project before saving the time entry")

    end_time = now or datetime.now(timezone.utc)
    if end_time.tzinfo is None:
        end_time = end_time.replace(tzinfo=timezone.utc)
    start_time = end_time - timedelta(seconds=state.elapsed_seconds)

    task_id = state.task_id
    if task_id in (None, "", NO_TASK):
        task_id = None

    return {
        "project_id": state.project_id,
        "task_id": task_id,
        "description": state.description or None,
        "start_time": start_time.isoformat(),
        "end_time": end_time.isoformat(),
        "duration_seconds": state.elapsed_seconds,
    }


class TimeEntryReconciler:
    def __init__(self, session: TimerSession, client: TimekeeperClient):
        self.session = session
        self.client = client

    def stop_and_reconcile(self, now: Optional[datetime] = None) -> dict:
        if self.session.state.phase in (TimerPhase.RUNNING, TimerPhase.PAUSED):
            self.session.stop()
        return self.reconcile(now)

    def reconcile(self, now: Optional[datetime] = None) -> dict:
        """Persist the stopped session as a time entry, then reset it.

        On failure the session keeps its elapsed time so the caller can
        retry; nothing is discarded.
        """
        state = self.session.state
        if state.phase is not TimerPhase.STOPPED:
            raise TimerStateError("Stop the timer before saving the time entry")

        payload = build_time_entry_payload(state, now)
        try:
            entry = self.client.create_time_entry(payload)
        except (ApiClientError, httpx.HTTPError) as exc:
            logger.exception(
                "Failed to save %s seconds for project %s",
                state.elapsed_seconds, state.project_id
            )
            raise ReconciliationError("Time entry was not saved, the timer kept its time") from exc

        if not self.session.finish(state):
            logger.warning("Timer was restarted while saving, leaving the new run untouched")
        logger.info("Saved time entry %s (%s seconds)", entry.get("id"), state.elapsed_seconds)
        return entry
