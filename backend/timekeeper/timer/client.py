from typing import Any, Optional

import httpx

from timekeeper.config import settings


class ApiClientError(Exception):
    def __init__(self, status_code: int, error: str, message: Optional[str] = None):
        super().__init__(f"{status_code}: {error}")
        self.status_code = status_code
        self.error = error
        self.message = message


class TimekeeperClient:
    """Thin JSON client for the Timekeeper HTTP API.

    Pass an existing ``httpx.Client`` (a FastAPI ``TestClient`` works too) to
    share a connection pool, otherwise one is created for ``base_url``.
    """

    def __init__(
        self,
        firebase_uid: Optional[str] = None,
        base_url: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.firebase_uid = firebase_uid
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(base_url=base_url or settings.API_BASE_URL, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _headers(self) -> dict:
        if not self.firebase_uid:
            return {}
        return {"Authorization": f"Bearer {self.firebase_uid}"}

    def _request(self, method: str, path: str, **kwargs: Any) -> dict:
        response = self._http.request(method, path, headers=self._headers(), **kwargs)
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.is_error or not payload.get("success"):
            raise ApiClientError(
                response.status_code,
                payload.get("error") or response.reason_phrase,
                payload.get("message"),
            )
        return payload

    # ---------- users ----------

    def register_user(self, email: str, display_name: Optional[str] = None, avatar_url: Optional[str] = None) -> dict:
        body = {
            "firebase_uid": self.firebase_uid,
            "email": email,
            "display_name": display_name,
            "avatar_url": avatar_url,
        }
        return self._request("POST", "/users", json=body)["user"]

    def get_user(self) -> dict:
        return self._request("GET", "/users", params={"firebase_uid": self.firebase_uid})["user"]

    def update_settings(self, **changes: Any) -> dict:
        return self._request("PUT", "/users/me", json=changes)["user"]

    # ---------- projects ----------

    def list_projects(self) -> list[dict]:
        return self._request("GET", "/projects")["projects"]

    def create_project(self, name: str, description: Optional[str] = None, color: Optional[str] = None) -> dict:
        body = {"name": name, "description": description, "color": color}
        return self._request("POST", "/projects", json=body)["project"]

    def get_project(self, project_id: int) -> dict:
        return self._request("GET", f"/projects/{project_id}")["project"]

    def update_project(self, project_id: int, **changes: Any) -> dict:
        return self._request("PUT", f"/projects/{project_id}", json=changes)["project"]

    def delete_project(self, project_id: int) -> None:
        self._request("DELETE", f"/projects/{project_id}")

    def list_project_tasks(self, project_id: int) -> list[dict]:
        return self._request("GET", f"/projects/{project_id}/tasks")["tasks"]

    def list_project_time_entries(self, project_id: int) -> list[dict]:
        return self._request("GET", f"/projects/{project_id}/time-entries")["timeEntries"]

    # ---------- tasks ----------

    def list_tasks(self) -> list[dict]:
        return self._request("GET", "/tasks")["tasks"]

    def create_task(self, project_id: int, name: str, description: Optional[str] = None) -> dict:
        body = {"project_id": project_id, "name": name, "description": description}
        return self._request("POST", "/tasks", json=body)["task"]

    def update_task(self, task_id: int, **changes: Any) -> dict:
        return self._request("PUT", f"/tasks/{task_id}", json=changes)["task"]

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/tasks/{task_id}")

    # ---------- time entries ----------

    def create_time_entry(self, body: dict) -> dict:
        return self._request("POST", "/time-entries", json=body)["timeEntry"]

    def list_time_entries(self) -> list[dict]:
        return self._request("GET", "/time-entries")["timeEntries"]
