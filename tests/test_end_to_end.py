"""End-to-end: timer session reconciled through the real API."""

from datetime import datetime

import pytest

from timekeeper.timer.client import ApiClientError, TimekeeperClient
from timekeeper.timer.reconcile import ReconciliationError, TimeEntryReconciler
from timekeeper.timer.session import TimerPhase, TimerState


def test_five_ticks_then_stop_records_five_seconds(client, alice_api, session, clock):
    project = alice_api.create_project("Website", color="#F4D03F")
    assert alice_api.list_projects()[0]["total_time_seconds"] == 0

    session.start(project["id"])
    for _ in range(5):
        clock.advance()
        assert session.state.is_running
    entry = TimeEntryReconciler(session, alice_api).stop_and_reconcile()

    assert entry["duration_seconds"] == 5
    start = datetime.fromisoformat(entry["start_time"])
    end = datetime.fromisoformat(entry["end_time"])
    assert (end - start).total_seconds() == 5
    assert session.state == TimerState()

    listed = alice_api.list_projects()[0]
    assert listed["total_time_seconds"] == 5
    assert listed["total_entries"] == 1


def test_task_binding_is_persisted(client, alice_api, session, clock):
    project = alice_api.create_project("Website")
    task = alice_api.create_task(project["id"], "Copy")

    session.start(project["id"], task_id=task["id"], description="headline")
    clock.advance(2)
    TimeEntryReconciler(session, alice_api).stop_and_reconcile()

    entry = alice_api.list_time_entries()[0]
    assert entry["task_id"] == task["id"]
    assert entry["task_name"] == "Copy"
    assert entry["description"] == "headline"


def test_rejected_save_keeps_time_for_retry(client, alice_api, bob_headers, session, clock):
    foreign = client.post("/projects", json={"name": "Bob's"}, headers=bob_headers).json()["project"]
    own = alice_api.create_project("Mine")

    session.start(foreign["id"])
    clock.advance(4)
    reconciler = TimeEntryReconciler(session, alice_api)

    with pytest.raises(ReconciliationError) as exc_info:
        reconciler.stop_and_reconcile()

    assert isinstance(exc_info.value.__cause__, ApiClientError)
    assert exc_info.value.__cause__.status_code == 403
    assert session.state.phase is TimerPhase.STOPPED
    assert session.state.elapsed_seconds == 4

    session.update(project_id=own["id"])
    entry = reconciler.reconcile()

    assert entry["project_id"] == own["id"]
    assert entry["duration_seconds"] == 4


def test_client_surfaces_api_errors(client):
    api = TimekeeperClient(firebase_uid="ghost", http=client)

    with pytest.raises(ApiClientError) as exc_info:
        api.list_projects()

    assert exc_info.value.status_code == 404
    assert exc_info.value.error == "User not found"


def test_client_registers_and_deletes_task(client):
    api = TimekeeperClient(firebase_uid="carol-uid", http=client)
    user = api.register_user("carol@example.com", display_name="Carol")
    assert api.get_user()["id"] == user["id"]

    project = api.create_project("Garden")
    task = api.create_task(project["id"], "Weed")
    api.delete_task(task["id"])

    assert api.list_project_tasks(project["id"]) == []


def test_db_status(client):
    response = client.get("/db-status")

    assert response.status_code == 200
    status = response.json()["status"]
    assert status["isConnected"] is True
    assert status["tablesExist"] is True
    assert status["tableCount"] == 4
