"""Shared test helpers."""

from tests.helpers.fake_clock import FakeClock
from tests.helpers.items import BASE_TIME, make_item

__all__ = ["BASE_TIME", "FakeClock", "make_item"]
