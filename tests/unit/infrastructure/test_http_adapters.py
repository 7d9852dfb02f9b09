"""Unit tests for the httpx-based source and performer adapters."""

from __future__ import annotations

import json

import httpx
import pytest

from action_queue.domain.errors.queue import AggregationError, MutationError
from action_queue.domain.models.action_item import ActionKind, Priority
from action_queue.domain.models.viewer_role import ViewerRole
from action_queue.infrastructure.adapters.http import (
    HttpActionPerformer,
    HttpPendingItemSource,
)
from tests.helpers.items import make_item

BASE_URL = "http://domains.test/api/v1/"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestHttpPendingItemSource:
    """Tests for HttpPendingItemSource."""

    @pytest.mark.asyncio
    async def test_reads_item_list(self) -> None:
        seen: list[httpx.Request] = []
        item = make_item("f1", Priority.URGENT)

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[item.to_dict()])

        async with _client(handler) as client:
            source = HttpPendingItemSource("faults", BASE_URL, client=client)
            items = await source.list_pending_items(ViewerRole.MANAGER)

        assert items == [item]
        assert seen[0].url.path == "/api/v1/faults/pending"
        assert seen[0].url.params["role"] == "manager"
        assert source.domain == "faults"

    @pytest.mark.asyncio
    async def test_reads_wrapped_items(self) -> None:
        item = make_item("v1")

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"items": [item.to_dict()]})

        async with _client(handler) as client:
            items = await HttpPendingItemSource("votes", BASE_URL, client).list_pending_items(
                ViewerRole.RESIDENT
            )

        assert [i.id for i in items] == ["v1"]

    @pytest.mark.asyncio
    async def test_unknown_entity_type_and_local_due_date_are_accepted(self) -> None:
        good = make_item("f1", Priority.URGENT)
        work_order = {
            **make_item("f2").to_dict(),
            "entityType": "work_order",
            "dueDate": "2026-01-31",
        }

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[good.to_dict(), work_order])

        async with _client(handler) as client:
            source = HttpPendingItemSource("faults", BASE_URL, client=client)
            items = await source.list_pending_items(ViewerRole.MANAGER)

        assert [i.id for i in items] == ["f1", "f2"]
        assert items[1].entity_type == "work_order"
        assert items[1].due_date is not None
        assert items[1].due_date.tzinfo is not None

    @pytest.mark.asyncio
    async def test_http_error_raises_aggregation_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"message": "down"})

        async with _client(handler) as client:
            source = HttpPendingItemSource("approvals", BASE_URL, client=client)
            with pytest.raises(AggregationError) as exc_info:
                await source.list_pending_items(ViewerRole.MANAGER)

        assert exc_info.value.domain == "approvals"

    @pytest.mark.asyncio
    async def test_transport_error_raises_aggregation_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            source = HttpPendingItemSource("faults", BASE_URL, client=client)
            with pytest.raises(AggregationError):
                await source.list_pending_items(ViewerRole.MANAGER)

    @pytest.mark.asyncio
    async def test_malformed_item_raises_aggregation_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"id": "x1", "priority": "urgent"}])

        async with _client(handler) as client:
            source = HttpPendingItemSource("faults", BASE_URL, client=client)
            with pytest.raises(AggregationError, match="Malformed"):
                await source.list_pending_items(ViewerRole.MANAGER)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_aggregation_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>", headers={"content-type": "text/html"})

        async with _client(handler) as client:
            source = HttpPendingItemSource("faults", BASE_URL, client=client)
            with pytest.raises(AggregationError):
                await source.list_pending_items(ViewerRole.MANAGER)


class TestHttpActionPerformer:
    """Tests for HttpActionPerformer."""

    @pytest.mark.asyncio
    async def test_posts_action(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        async with _client(handler) as client:
            await HttpActionPerformer(BASE_URL, client=client).perform_action(
                "a1", ActionKind.APPROVE
            )

        assert seen[0].method == "POST"
        assert seen[0].url.path == "/api/v1/action-items/a1/actions/approve"

    @pytest.mark.asyncio
    async def test_error_status_raises_mutation_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(409, content=json.dumps({"message": "Already decided"}))

        async with _client(handler) as client:
            performer = HttpActionPerformer(BASE_URL, client=client)
            with pytest.raises(MutationError) as exc_info:
                await performer.perform_action("a1", ActionKind.REJECT)

        assert exc_info.value.status_code == 409
        assert str(exc_info.value) == "Already decided"

    @pytest.mark.asyncio
    async def test_error_without_body_uses_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502)

        async with _client(handler) as client:
            performer = HttpActionPerformer(BASE_URL, client=client)
            with pytest.raises(MutationError, match="HTTP 502"):
                await performer.perform_action("a1", ActionKind.APPROVE)

    @pytest.mark.asyncio
    async def test_transport_error_raises_mutation_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with _client(handler) as client:
            performer = HttpActionPerformer(BASE_URL, client=client)
            with pytest.raises(MutationError) as exc_info:
                await performer.perform_action("f1", ActionKind.ESCALATE)

        assert exc_info.value.status_code is None
