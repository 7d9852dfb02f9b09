"""HTTP action performer.

Executes an item action against the domain mutation endpoint:

    POST {base_url}/action-items/{item_id}/actions/{action}

Any non-2xx status or transport failure is a MutationError. Nothing is
retried here; retry is an explicit caller decision.
"""

from __future__ import annotations

import httpx
import structlog

from action_queue.domain.errors.queue import MutationError
from action_queue.domain.models.action_item import ActionKind

log = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpActionPerformer:
    """ActionPerformerProtocol over the domain REST API."""

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    async def perform_action(self, item_id: str, action: ActionKind) -> None:
        url = f"{self._base_url}/action-items/{item_id}/actions/{action.value}"
        try:
            if self._client is not None:
                response = await self._client.post(url, timeout=self._timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(url, timeout=self._timeout)
        except httpx.HTTPError as e:
            log.warning(
                "action_transport_error",
                item_id=item_id,
                action=action.value,
                error=str(e),
            )
            raise MutationError(item_id, action, f"Transport error: {e}") from e

        if response.status_code >= 300:
            log.warning(
                "action_rejected_by_endpoint",
                item_id=item_id,
                action=action.value,
                status_code=response.status_code,
            )
            raise MutationError(
                item_id,
                action,
                _error_message(response),
                status_code=response.status_code,
            )
        log.debug("action_performed", item_id=item_id, action=action.value)


def _error_message(response: httpx.Response) -> str:
    """Extract the "message" of an error body, falling back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Endpoint returned HTTP {response.status_code}"
