"""Unit tests for ranking and priority counts."""

from action_queue.domain.models.action_item import Priority
from action_queue.domain.services.ranking import count_by_priority, rank_items
from tests.helpers.items import make_item


class TestRankItems:
    """Tests for the stable priority ranking."""

    def test_orders_by_priority_bucket(self) -> None:
        items = [
            make_item("low", Priority.LOW),
            make_item("urgent", Priority.URGENT),
            make_item("medium", Priority.MEDIUM),
            make_item("high", Priority.HIGH),
        ]

        ranked = rank_items(items)

        assert [i.id for i in ranked] == ["urgent", "high", "medium", "low"]

    def test_equal_priorities_keep_input_order(self) -> None:
        items = [
            make_item("h1", Priority.HIGH, created_offset_minutes=30),
            make_item("u1", Priority.URGENT),
            make_item("h2", Priority.HIGH, created_offset_minutes=-30),
            make_item("h3", Priority.HIGH, created_offset_minutes=0),
        ]

        ranked = rank_items(items)

        # No secondary key: creation time does not reorder ties
        assert [i.id for i in ranked] == ["u1", "h1", "h2", "h3"]

    def test_ranking_is_idempotent(self) -> None:
        items = [
            make_item("m1", Priority.MEDIUM),
            make_item("u1", Priority.URGENT),
            make_item("m2", Priority.MEDIUM),
        ]

        once = rank_items(items)

        assert rank_items(once) == once

    def test_does_not_mutate_input(self) -> None:
        items = [make_item("l1", Priority.LOW), make_item("u1", Priority.URGENT)]

        rank_items(items)

        assert [i.id for i in items] == ["l1", "u1"]

    def test_empty_input(self) -> None:
        assert rank_items([]) == []


class TestCountByPriority:
    """Tests for badge counts."""

    def test_counts_each_bucket(self) -> None:
        items = [
            make_item("u1", Priority.URGENT),
            make_item("h1", Priority.HIGH),
            make_item("h2", Priority.HIGH),
            make_item("l1", Priority.LOW),
        ]

        counts = count_by_priority(items)

        assert (counts.urgent, counts.high, counts.medium, counts.low) == (1, 2, 0, 1)
        assert counts.total == 4
        assert counts.for_priority(Priority.HIGH) == 2

    def test_empty_counts_are_zero(self) -> None:
        counts = count_by_priority([])

        assert counts.to_dict() == {"urgent": 0, "high": 0, "medium": 0, "low": 0, "total": 0}
