"""
Async HTTP client for the Spark API.

The caller constructs the underlying ``httpx.AsyncClient`` (base URL, auth
header, transport) and owns its lifecycle; one SparkApiClient is created per
app session and passed to whatever needs it.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class SparkApiError(Exception):
    """Non-success response from the Spark API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class SparkApiClient:
    """Thin wrapper over the goal and spark endpoints."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        response = await self.http.request(method, path, json=json)

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            logger.error(f"Invalid response type from {method} {path}: {content_type}")
            raise SparkApiError(response.status_code, "Invalid response from server")

        data = response.json()
        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            logger.error(f"API error {method} {path}: {response.status_code} {message}")
            raise SparkApiError(response.status_code, message or response.reason_phrase)

        return data

    # Goals

    async def list_goals(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", "/goals")
        return data.get("goals") or []

    async def create_goal(self, title: str, description: Optional[str] = None) -> Dict[str, Any]:
        data = await self._request("POST", "/goals", json={"title": title, "description": description})
        return data["goal"]

    async def get_goal(self, goal_id: str) -> Dict[str, Any]:
        data = await self._request("GET", f"/goals/{goal_id}")
        return data["goal"]

    async def update_goal(self, goal_id: str, **changes: Any) -> Dict[str, Any]:
        """Send only the given fields (title, description, status)."""
        data = await self._request("PATCH", f"/goals/{goal_id}", json=changes)
        return data["goal"]

    async def delete_goal(self, goal_id: str) -> bool:
        data = await self._request("DELETE", f"/goals/{goal_id}")
        return bool(data.get("success"))

    async def get_completed_sparks(self, goal_id: str) -> Dict[str, Any]:
        """The goal and its completed sparks (``{"goal", "completedSparks"}``)."""
        return await self._request("GET", f"/goals/{goal_id}/completed-sparks")

    # Sparks

    async def list_sparks(self, goal_id: str) -> List[Dict[str, Any]]:
        data = await self._request("GET", f"/sparks/{goal_id}")
        return data.get("sparks") or []

    async def generate_spark(
        self,
        goal_id: str,
        goal_title: str,
        goal_description: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = await self._request(
            "POST",
            "/sparks/generate",
            json={
                "goalId": goal_id,
                "goalTitle": goal_title,
                "goalDescription": goal_description,
            },
        )
        return data["spark"]

    async def complete_spark(
        self,
        spark_id: str,
        goal_id: str,
        session_id: str,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = await self._request(
            "POST",
            "/sparks/complete",
            json={
                "sparkId": spark_id,
                "goalId": goal_id,
                "sessionId": session_id,
                "notes": notes,
            },
        )
        return data["completion"]

    # Profile

    async def get_profile(self) -> Dict[str, Any]:
        data = await self._request("GET", "/profile")
        return data["profile"]
