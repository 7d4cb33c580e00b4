"""Tests for user registration, lookup and settings."""

from conftest import auth, register


class TestRegistration:
    """POST /users upserts on the identity provider subject id."""

    def test_register_creates_user_with_default_preferences(self, client):
        response = client.post(
            "/users",
            json={"firebase_uid": "uid-1", "email": "one@example.com", "display_name": "One"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User created successfully"
        user = body["user"]
        assert user["firebase_uid"] == "uid-1"
        assert user["email"] == "one@example.com"
        assert user["display_name"] == "One"
        assert user["timezone"] == "UTC"
        assert user["time_format"] == "24h"
        assert user["theme"] == "dark"

    def test_register_twice_returns_existing_user(self, client):
        first = register(client, "uid-1", "one@example.com")

        response = client.post("/users", json={"firebase_uid": "uid-1", "email": "one@example.com"})

        assert response.status_code == 200
        assert response.json()["message"] == "User already exists"
        assert response.json()["user"]["id"] == first["id"]

    def test_missing_email_is_bad_request(self, client):
        response = client.post("/users", json={"firebase_uid": "uid-1"})

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert "email is required" in response.json()["errors"]

    def test_invalid_email_is_bad_request(self, client):
        response = client.post("/users", json={"firebase_uid": "uid-1", "email": "not-an-email"})

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestLookup:
    """GET /users?firebase_uid=..."""

    def test_lookup_by_firebase_uid(self, client, alice):
        response = client.get("/users", params={"firebase_uid": "alice-uid"})

        assert response.status_code == 200
        assert response.json()["user"]["id"] == alice["id"]

    def test_lookup_without_parameter_is_bad_request(self, client):
        response = client.get("/users")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Missing firebase_uid parameter"}

    def test_lookup_unknown_user_is_not_found(self, client):
        response = client.get("/users", params={"firebase_uid": "nobody"})

        assert response.status_code == 404
        assert response.json()["error"] == "User not found"


class TestSettings:
    """PUT and DELETE /users/me."""

    def test_update_preferences(self, client, alice_headers):
        response = client.put(
            "/users/me",
            json={"theme": "light", "time_format": "12h", "timezone": "Europe/Berlin"},
            headers=alice_headers,
        )

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["theme"] == "light"
        assert user["time_format"] == "12h"
        assert user["timezone"] == "Europe/Berlin"
        assert user["display_name"] == "Alice"

    def test_invalid_time_format_is_rejected(self, client, alice_headers):
        response = client.put("/users/me", json={"time_format": "36h"}, headers=alice_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Time format must be 12h or 24h"

    def test_missing_bearer_is_unauthenticated(self, client, alice):
        response = client.put("/users/me", json={"theme": "light"})

        assert response.status_code == 401
        assert response.json()["error"] == "Missing or invalid authorization header"

    def test_unknown_subject_is_not_found(self, client):
        response = client.put("/users/me", json={"theme": "light"}, headers=auth("ghost"))

        assert response.status_code == 404
        assert response.json()["error"] == "User not found"

    def test_delete_account_removes_user_and_data(self, client, alice_headers, alice_project):
        client.post(
            "/time-entries",
            json={
                "project_id": alice_project["id"],
                "start_time": "2026-01-01T09:00:00+00:00",
                "end_time": "2026-01-01T09:30:00+00:00",
                "duration_seconds": 1800,
            },
            headers=alice_headers,
        )

        response = client.delete("/users/me", headers=alice_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "User deleted successfully"}
        assert client.get("/users", params={"firebase_uid": "alice-uid"}).status_code == 404
        assert client.get("/projects", headers=alice_headers).status_code == 404
