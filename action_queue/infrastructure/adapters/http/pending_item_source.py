"""HTTP pending item source.

Reads one source domain's pending items:

    GET {base_url}/{domain}/pending?role={role}

The response body is either a JSON list of items or an object with an
"items" list. Items use the camelCase wire shape of ActionItem.to_dict().
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from action_queue.domain.errors.queue import AggregationError
from action_queue.domain.models.action_item import ActionItem
from action_queue.domain.models.viewer_role import ViewerRole

log = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpPendingItemSource:
    """PendingItemSourceProtocol over a domain's REST endpoint."""

    def __init__(
        self,
        domain: str,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the source.

        Args:
            domain: Domain path segment and name (e.g. "faults").
            base_url: Base URL of the domain API.
            client: Shared client; a short-lived one is used per call if None.
            timeout: Request timeout in seconds.
        """
        self._domain = domain
        self._base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    @property
    def domain(self) -> str:
        return self._domain

    async def list_pending_items(self, role: ViewerRole) -> list[ActionItem]:
        url = f"{self._base_url}/{self._domain}/pending"
        try:
            if self._client is not None:
                response = await self._client.get(
                    url, params={"role": role.value}, timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(
                        url, params={"role": role.value}, timeout=self._timeout
                    )
            response.raise_for_status()
            payload: Any = response.json()
        except httpx.HTTPStatusError as e:
            log.warning(
                "pending_items_http_error",
                domain=self._domain,
                status_code=e.response.status_code,
            )
            raise AggregationError(role, self._domain) from e
        except (httpx.HTTPError, ValueError) as e:
            log.warning("pending_items_transport_error", domain=self._domain, error=str(e))
            raise AggregationError(role, self._domain) from e

        raw_items = payload.get("items", []) if isinstance(payload, dict) else payload
        try:
            return [ActionItem.from_dict(raw) for raw in raw_items]
        except (KeyError, TypeError, ValueError) as e:
            log.warning("pending_items_malformed", domain=self._domain, error=str(e))
            raise AggregationError(
                role, self._domain, f"Malformed item from source {self._domain}: {e}"
            ) from e
