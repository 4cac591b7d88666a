"""HTTP client for the Taskboard REST API."""
from typing import Any, Dict, List, Optional

import httpx

TOKEN_HEADER = "x-auth-token"


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str, details: dict = None):
        self.status_code = status_code
        self.message = message
        self.details = details or {}
        super().__init__(f"{status_code}: {message}")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return body.get("error") or body.get("msg") or response.reason_phrase
    return response.reason_phrase


class TaskboardClient:
    """Thin wrapper over httpx that keeps the auth token.

    Any 401 response drops the held token, so a stale session is never reused.
    Pass ``http_client`` to reuse an existing httpx.Client (its base_url must
    point at the API root, e.g. ``http://localhost:5000/api``).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000/api",
        token: Optional[str] = None,
        timeout: float = 10.0,
        http_client: Optional[httpx.Client] = None,
    ):
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self._owns_http = http_client is None
        self.token = token

    def close(self):
        if self._owns_http:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def _request(self, method: str, path: str, json: Any = None) -> Dict[str, Any]:
        headers = {TOKEN_HEADER: self.token} if self.token else {}
        response = self._http.request(method, path, json=json, headers=headers)

        if response.status_code == 401:
            self.token = None

        if response.is_error:
            try:
                details = response.json().get("details", {})
            except (ValueError, AttributeError):
                details = {}
            raise ApiError(response.status_code, _error_message(response), details)

        return response.json()

    # Auth

    def register(self, email: str, password: str) -> str:
        data = self._request("POST", "/auth/register", {"email": email, "password": password})
        self.token = data["token"]
        return self.token

    def login(self, email: str, password: str) -> str:
        data = self._request("POST", "/auth/login", {"email": email, "password": password})
        self.token = data["token"]
        return self.token

    def logout(self):
        """Tokens are stateless, so logging out only forgets the token."""
        self.token = None

    # Tasks

    def list_tasks(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/tasks")["tasks"]

    def get_task(self, task_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/tasks/{task_id}")["task"]

    def create_task(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/tasks", fields)["task"]

    def update_task(self, task_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/tasks/{task_id}", updates)["task"]

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}")

    def get_stats(self) -> Dict[str, int]:
        return self._request("GET", "/tasks/stats/summary")["stats"]

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")
