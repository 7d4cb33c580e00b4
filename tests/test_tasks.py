"""Tests for tasks: owner chain through the project, hard delete, stats."""

import pytest


@pytest.fixture
def alice_task(client, alice_headers, alice_project):
    response = client.post(
        "/tasks",
        json={"project_id": alice_project["id"], "name": "Landing page", "description": "hero"},
        headers=alice_headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["task"]


class TestCreate:

    def test_create_task_under_own_project(self, client, alice_headers, alice_project, alice_task):
        assert alice_task["project_id"] == alice_project["id"]
        assert alice_task["name"] == "Landing page"
        assert alice_task["is_completed"] is False

        tasks = client.get(f"/projects/{alice_project['id']}/tasks", headers=alice_headers).json()["tasks"]
        assert [t["id"] for t in tasks] == [alice_task["id"]]

    def test_create_under_foreign_project_is_forbidden(self, client, alice_project, bob_headers):
        response = client.post(
            "/tasks",
            json={"project_id": alice_project["id"], "name": "Sneaky"},
            headers=bob_headers,
        )

        assert response.status_code == 403

    def test_create_under_missing_project_is_not_found(self, client, alice_headers):
        response = client.post("/tasks", json={"project_id": 404, "name": "Orphan"}, headers=alice_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "Project not found"

    def test_missing_fields_are_bad_request(self, client, alice_headers, alice_project):
        no_name = client.post("/tasks", json={"project_id": alice_project["id"]}, headers=alice_headers)
        no_project = client.post("/tasks", json={"name": "x"}, headers=alice_headers)

        assert no_name.status_code == 400
        assert no_project.status_code == 400
        assert no_project.json()["error"] == "project_id is required"


class TestRead:

    def test_all_tasks_span_projects_with_project_details(self, client, alice_headers, alice_task):
        other = client.post("/projects", json={"name": "Ops", "color": "#00FF00"}, headers=alice_headers).json()
        client.post("/tasks", json={"project_id": other["project"]["id"], "name": "Deploy"}, headers=alice_headers)

        tasks = client.get("/tasks", headers=alice_headers).json()["tasks"]

        by_name = {t["name"]: t for t in tasks}
        assert set(by_name) == {"Landing page", "Deploy"}
        assert by_name["Deploy"]["project_name"] == "Ops"
        assert by_name["Deploy"]["project_color"] == "#00FF00"
        assert by_name["Landing page"]["project_name"] == "Website"

    def test_all_tasks_excludes_other_users(self, client, alice_task, bob_headers):
        assert client.get("/tasks", headers=bob_headers).json()["tasks"] == []

    def test_foreign_task_is_forbidden(self, client, alice_task, bob_headers):
        task_id = alice_task["id"]

        for response in (
            client.get(f"/tasks/{task_id}", headers=bob_headers),
            client.put(f"/tasks/{task_id}", json={"is_completed": True}, headers=bob_headers),
            client.delete(f"/tasks/{task_id}", headers=bob_headers),
        ):
            assert response.status_code == 403
            assert response.json()["error"] == "Unauthorized access to task"

    def test_missing_task_is_not_found(self, client, alice_headers):
        response = client.get("/tasks/12345", headers=alice_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "Task not found"


class TestUpdate:

    def test_complete_task_and_stats(self, client, alice_headers, alice_project, alice_task):
        client.post("/tasks", json={"project_id": alice_project["id"], "name": "Footer"}, headers=alice_headers)

        response = client.put(f"/tasks/{alice_task['id']}", json={"is_completed": True}, headers=alice_headers)

        assert response.status_code == 200
        assert response.json()["task"]["is_completed"] is True
        assert response.json()["task"]["name"] == "Landing page"

        stats = client.get(f"/projects/{alice_project['id']}/task-stats", headers=alice_headers).json()
        assert stats == {"success": True, "stats": {"total": 2, "completed": 1, "pending": 1}}

    def test_null_completion_flag_is_rejected(self, client, alice_headers, alice_task):
        response = client.put(f"/tasks/{alice_task['id']}", json={"is_completed": None}, headers=alice_headers)

        assert response.status_code == 400


class TestDelete:

    def test_delete_removes_task_from_project(self, client, alice_headers, alice_project, alice_task):
        response = client.delete(f"/tasks/{alice_task['id']}", headers=alice_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Task deleted successfully"}
        tasks = client.get(f"/projects/{alice_project['id']}/tasks", headers=alice_headers).json()["tasks"]
        assert tasks == []
        assert client.get(f"/tasks/{alice_task['id']}", headers=alice_headers).status_code == 404

    def test_time_entries_survive_task_delete(self, client, alice_headers, alice_project, alice_task):
        client.post(
            "/time-entries",
            json={
                "project_id": alice_project["id"],
                "task_id": alice_task["id"],
                "start_time": "2026-03-02T10:00:00+00:00",
                "end_time": "2026-03-02T10:01:00+00:00",
                "duration_seconds": 60,
            },
            headers=alice_headers,
        )

        client.delete(f"/tasks/{alice_task['id']}", headers=alice_headers)

        entries = client.get("/time-entries", headers=alice_headers).json()["timeEntries"]
        assert len(entries) == 1
        assert entries[0]["task_id"] is None
        assert entries[0]["duration_seconds"] == 60
