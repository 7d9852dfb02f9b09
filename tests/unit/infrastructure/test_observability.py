"""Unit tests for structlog configuration and correlation IDs."""

from __future__ import annotations

import contextvars

import pytest
import structlog

from action_queue.infrastructure.observability import (
    configure_structlog,
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestCorrelationId:
    """Tests for the correlation ID context."""

    def test_generated_ids_are_unique(self) -> None:
        assert generate_correlation_id() != generate_correlation_id()

    def test_processor_adds_id_when_set(self) -> None:
        def run() -> dict:
            set_correlation_id("req-1")
            return correlation_id_processor(None, "info", {"event": "x"})

        event = contextvars.copy_context().run(run)

        assert event["correlation_id"] == "req-1"

    def test_processor_skips_when_unset(self) -> None:
        def run() -> dict:
            assert get_correlation_id() == ""
            return correlation_id_processor(None, "info", {"event": "x"})

        event = contextvars.Context().run(run)

        assert "correlation_id" not in event


class TestConfigureStructlog:
    """Tests for configure_structlog."""

    def test_production_renders_json(self) -> None:
        configure_structlog(environment="production")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert correlation_id_processor in processors

    def test_development_renders_console(self) -> None:
        configure_structlog(environment="development")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

