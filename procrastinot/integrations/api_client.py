"""
HTTP client for the Procrastinot REST backend.

Fetches the raw records the dashboard is computed from:
    GET /tasks/user/{user_id}
    GET /pomodoro/user/{user_id}
    GET /users/profile/{user_id}

Every transport or status failure surfaces as RecordFetchError.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from procrastinot.core.config import Config

logger = logging.getLogger(__name__)


class RecordFetchError(Exception):
    """Raised when the backend cannot supply the requested records."""
    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class ProcrastinotClient:
    """Async client for the Procrastinot backend API."""

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize client.

        Args:
            config: Configuration (creates default if not provided)
            transport: Custom httpx transport (used by tests)
        """
        self.config = config if config else Config()
        self.base_url = str(self.config.get("api_base_url")).rstrip("/")
        self.timeout = httpx.Timeout(float(self.config.get("api_timeout", default=30.0)))
        self.token = self.config.get("api_token")
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        failure_message: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._headers(),
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, json=json)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as exc:
            detail = _error_detail(exc.response) or failure_message
            logger.error("%s %s failed with %d: %s", method, url, exc.response.status_code, detail)
            raise RecordFetchError(detail, exc.response.status_code, url) from exc

        except httpx.TimeoutException as exc:
            logger.error("%s %s timed out", method, url)
            raise RecordFetchError(f"{failure_message} (timeout)", url=url) from exc

        except httpx.RequestError as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise RecordFetchError(failure_message, url=url) from exc

        except ValueError as exc:
            logger.error("%s %s returned invalid JSON", method, url)
            raise RecordFetchError(f"{failure_message} (invalid response)", url=url) from exc

    async def get_user_tasks(self, user_id: str) -> List[Dict[str, Any]]:
        """Get all tasks for a user"""
        data = await self._request("GET", f"/tasks/user/{user_id}", "Failed to fetch tasks")
        return data if isinstance(data, list) else []

    async def get_user_sessions(self, user_id: str) -> List[Dict[str, Any]]:
        """Get all pomodoro sessions for a user"""
        data = await self._request(
            "GET", f"/pomodoro/user/{user_id}", "Failed to fetch pomodoro sessions"
        )
        return data if isinstance(data, list) else []

    async def get_user_profile(self, user_id: str) -> Dict[str, Any]:
        """Get a user's profile (the backend wraps it in {"user": ...})"""
        data = await self._request(
            "GET", f"/users/profile/{user_id}", "Failed to fetch user profile"
        )
        if isinstance(data, dict):
            return data.get("user") or {}
        return {}

    async def get_task(self, task_id: str) -> Dict[str, Any]:
        """Get a single task"""
        return await self._request("GET", f"/tasks/{task_id}", "Failed to fetch task")

    async def update_task(self, task_id: str, update: Dict[str, Any]) -> Dict[str, Any]:
        """Apply a partial update to a task"""
        return await self._request(
            "PUT", f"/tasks/{task_id}", "Failed to update task", json=update
        )


def _error_detail(response: httpx.Response) -> Optional[str]:
    """Backend errors look like {"error": "..."} or {"message": "..."}"""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("message") or body.get("error")
    return None
