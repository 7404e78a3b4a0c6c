"""Rewards platform API adapter - HTTP client for tasks and completions."""

import logging

import requests

from taskdeck.config import Config, load_config
from taskdeck.core.expiration import MissedMark
from taskdeck.core.tasks import Completion, Task

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30


class AuthenticationError(Exception):
    """Raised when the API token is missing or refused."""

    pass


class RewardsApiAdapter:
    """
    Rewards platform API adapter.

    Implements TaskRepository protocol. Handles auth headers and API calls.
    No business logic - just I/O.
    """

    def __init__(self, config: Config | None = None):
        self.config = config or load_config()
        if not self.config.api_base_url:
            raise ValueError("API_BASE_URL is not configured")
        self._session = requests.Session()

    def _headers(self) -> dict[str, str]:
        if not self.config.api_token:
            raise AuthenticationError("No API token. Set API_TOKEN in taskdeck.conf.")
        return {"Authorization": f"Bearer {self.config.api_token}"}

    def _request(self, method: str, endpoint: str, **kwargs) -> dict | list:
        """Make authenticated API request."""
        resp = self._session.request(
            method,
            f"{self.config.api_base_url}{endpoint}",
            headers=self._headers(),
            timeout=REQUEST_TIMEOUT,
            **kwargs,
        )
        if resp.status_code == 401:
            raise AuthenticationError(f"API refused token: {resp.text}")
        resp.raise_for_status()
        return resp.json()

    def fetch_tasks(self) -> list[Task]:
        """Fetch the user's assigned tasks."""
        data = self._request("GET", "/api/tasks")
        return [Task.from_api(t) for t in data]

    def fetch_completions(self, user_id: str) -> list[Completion]:
        """Fetch the user's completion records."""
        data = self._request("GET", "/api/completions", params={"userId": user_id})
        if isinstance(data, dict):
            data = data.get("completions", [])
        return [Completion.from_api(c) for c in data]

    def reject_completions(self, completion_ids: list[str], reason: str) -> int:
        """Reject each completion through the verification endpoint."""
        for completion_id in completion_ids:
            self._request(
                "PUT",
                f"/api/admin/verifications/{completion_id}",
                json={"action": "reject", "reason": reason},
            )
            logger.info(f"Rejected completion {completion_id}")
        return len(completion_ids)

    def record_missed(self, marks: list[MissedMark]) -> int:
        """Record missed assignments in one request."""
        if not marks:
            return 0
        data = self._request(
            "POST",
            "/api/tasks/mark-expired",
            json={"missed": [m.to_dict() for m in marks]},
        )
        return data.get("missedCompletionsCreated", len(marks))
