"""Queue aggregator service.

Gathers pending items from every configured source domain for a viewer
role, merges them into one ranked candidate list, and derives filtered
snapshots from it.

Pipeline (per fetch):
1. Query all sources concurrently; any failure fails the whole fetch
2. Concatenate in source order, dropping types outside the role's set
3. Rank once (stable, by priority bucket)
4. Cache the ranked, unfiltered candidate list for the role

Per read:
5. Apply filters to the cached list (order preserved, no re-sort)
6. Count per priority over the unfiltered list

Caching:
- A fetched list is fresh for `stale_time_seconds`; fresh reads never
  hit the sources, whatever the filters
- invalidate(role) makes the next read refetch. A fetch already in flight
  when the invalidation arrives is allowed to complete (its result is
  kept) and a fresh fetch is issued after it
- Concurrent readers share one in-flight fetch per role
- A background task refetches every `refetch_interval_seconds` so the
  queue self-heals if an invalidation is missed
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from structlog import get_logger

from action_queue.application.ports.clock import ClockProtocol
from action_queue.application.ports.pending_item_source import (
    PendingItemSourceProtocol,
)
from action_queue.domain.errors.queue import AggregationError
from action_queue.domain.models.action_item import ActionItem
from action_queue.domain.models.queue_filters import QueueFilters
from action_queue.domain.models.queue_snapshot import PriorityCounts, QueueSnapshot
from action_queue.domain.models.viewer_role import ViewerRole, item_types_for
from action_queue.domain.services.filter_engine import apply_filters
from action_queue.domain.services.ranking import count_by_priority, rank_items

logger = get_logger(__name__)

DEFAULT_STALE_TIME_SECONDS = 30.0
DEFAULT_REFETCH_INTERVAL_SECONDS = 60.0


@dataclass
class _RoleEntry:
    """Cached candidate list and fetch bookkeeping for one role."""

    items: tuple[ActionItem, ...] = ()
    counts: PriorityCounts = field(default_factory=PriorityCounts)
    fetched_at: datetime | None = None
    fetched_monotonic: float | None = None
    # Bumped by invalidate(); a cache is fresh only if loaded at the current value
    generation: int = 0
    loaded_generation: int = -1
    in_flight: asyncio.Task[None] | None = None
    in_flight_generation: int = -1


class QueueAggregatorService:
    """Service that aggregates and caches the action queue per viewer role.

    Implements SnapshotInvalidatorProtocol for the action dispatcher.

    Example:
        >>> aggregator = QueueAggregatorService(
        ...     sources=[fault_source, approval_source],
        ...     clock=SystemClock(),
        ... )
        >>> snapshot = await aggregator.fetch_queue(
        ...     ViewerRole.MANAGER,
        ...     QueueFilters(priorities=frozenset({Priority.URGENT})),
        ... )
        >>> snapshot.counts.total
        12
    """

    def __init__(
        self,
        sources: Sequence[PendingItemSourceProtocol],
        clock: ClockProtocol,
        stale_time_seconds: float = DEFAULT_STALE_TIME_SECONDS,
        refetch_interval_seconds: float = DEFAULT_REFETCH_INTERVAL_SECONDS,
    ) -> None:
        """Initialize the aggregator.

        Args:
            sources: Source domains, queried concurrently; their order is
                     the tie-break order for equal priorities.
            clock: Time source for freshness and fetch timestamps.
            stale_time_seconds: Freshness window of a fetched list.
            refetch_interval_seconds: Background refresh period.
        """
        self._sources = tuple(sources)
        self._clock = clock
        self._stale_time = stale_time_seconds
        self._refetch_interval = refetch_interval_seconds
        self._entries: dict[ViewerRole, _RoleEntry] = {}
        self._refresh_task: asyncio.Task[None] | None = None
        self._refresh_roles: tuple[ViewerRole, ...] = ()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch_queue(
        self,
        role: ViewerRole,
        filters: QueueFilters | None = None,
    ) -> QueueSnapshot:
        """Return the filtered, ranked queue for a role.

        Reuses the cached candidate list while it is fresh; otherwise
        fetches from all sources first.

        Args:
            role: Viewer role.
            filters: Active filters (None for no constraint).

        Returns:
            QueueSnapshot with filtered items and unfiltered counts.

        Raises:
            AggregationError: If any source fails.
        """
        entry = self._entry(role)
        if not self._is_fresh(entry):
            await self.refresh(role)
        return self._build_snapshot(role, entry, filters)

    def last_snapshot(
        self,
        role: ViewerRole,
        filters: QueueFilters | None = None,
    ) -> QueueSnapshot | None:
        """Return a snapshot from the last successful fetch, fresh or not.

        Lets callers keep a stale list on screen after an aggregation
        failure. Returns None if the role was never fetched.
        """
        entry = self._entries.get(role)
        if entry is None or entry.fetched_at is None:
            return None
        return self._build_snapshot(role, entry, filters)

    def is_fetching(self, role: ViewerRole) -> bool:
        entry = self._entries.get(role)
        return entry is not None and entry.in_flight is not None

    # ------------------------------------------------------------------
    # Invalidation and refresh
    # ------------------------------------------------------------------

    def invalidate(self, role: ViewerRole) -> None:
        """Mark the cached list for `role` stale.

        An in-flight fetch is not cancelled; the next read waits for it
        and then issues a fresh fetch.
        """
        entry = self._entry(role)
        entry.generation += 1
        logger.info(
            "queue_invalidated",
            role=role.value,
            generation=entry.generation,
            fetch_in_flight=entry.in_flight is not None,
        )

    async def refresh(self, role: ViewerRole) -> None:
        """Fetch the candidate list for a role now.

        Joins an in-flight fetch started at the current generation.
        A fetch started before the latest invalidation is awaited to
        completion, then a new one is issued.

        Raises:
            AggregationError: If the fetch this call relies on fails.
        """
        entry = self._entry(role)
        while True:
            task = entry.in_flight
            if task is None:
                task = self._start_load(role, entry)
                await asyncio.shield(task)
                return
            if entry.in_flight_generation == entry.generation:
                await asyncio.shield(task)
                return
            # Superseded fetch: let it land, then loop to fetch again
            with contextlib.suppress(AggregationError):
                await asyncio.shield(task)

    def _start_load(self, role: ViewerRole, entry: _RoleEntry) -> asyncio.Task[None]:
        generation = entry.generation
        task = asyncio.create_task(self._load(role, entry, generation))
        entry.in_flight = task
        entry.in_flight_generation = generation
        return task

    async def _load(self, role: ViewerRole, entry: _RoleEntry, generation: int) -> None:
        log = logger.bind(role=role.value, generation=generation)
        log.debug("queue_fetch_started", source_count=len(self._sources))
        try:
            results = await asyncio.gather(
                *(source.list_pending_items(role) for source in self._sources),
                return_exceptions=True,
            )
            merged: list[ActionItem] = []
            for source, result in zip(self._sources, results):
                if isinstance(result, BaseException):
                    log.warning(
                        "queue_source_failed",
                        domain=source.domain,
                        error=str(result),
                    )
                    if isinstance(result, AggregationError):
                        raise result
                    raise AggregationError(role, source.domain) from result
                merged.extend(result)

            ranked = tuple(rank_items(self._scope_to_role(role, merged)))
            entry.items = ranked
            entry.counts = count_by_priority(ranked)
            entry.fetched_at = self._clock.utcnow()
            entry.fetched_monotonic = self._clock.monotonic()
            entry.loaded_generation = generation
            log.info(
                "queue_fetch_completed",
                item_count=len(ranked),
                urgent=entry.counts.urgent,
            )
        finally:
            if entry.in_flight is asyncio.current_task():
                entry.in_flight = None

    def _scope_to_role(
        self, role: ViewerRole, items: Iterable[ActionItem]
    ) -> list[ActionItem]:
        """Drop items outside the role's type set and duplicate ids."""
        allowed = item_types_for(role)
        seen: set[str] = set()
        scoped: list[ActionItem] = []
        for item in items:
            if item.type not in allowed:
                logger.warning(
                    "queue_item_out_of_role",
                    role=role.value,
                    item_id=item.id,
                    item_type=item.type.value,
                )
                continue
            if item.id in seen:
                logger.warning("queue_item_duplicate_id", role=role.value, item_id=item.id)
                continue
            seen.add(item.id)
            scoped.append(item)
        return scoped

    # ------------------------------------------------------------------
    # Background refresh
    # ------------------------------------------------------------------

    @property
    def is_refreshing_in_background(self) -> bool:
        return self._refresh_task is not None

    def start_background_refresh(self, roles: Iterable[ViewerRole]) -> None:
        """Start refetching `roles` every refetch interval.

        Must be called from a running event loop. A second call replaces
        the role set without starting a second task.
        """
        self._refresh_roles = tuple(roles)
        if self._refresh_task is not None:
            logger.debug("background_refresh_already_running")
            return
        self._refresh_task = asyncio.create_task(self._refresh_loop())
        logger.info(
            "background_refresh_started",
            interval_seconds=self._refetch_interval,
            roles=[role.value for role in self._refresh_roles],
        )

    async def stop_background_refresh(self) -> None:
        """Stop the background refresh task and wait for it to end."""
        task = self._refresh_task
        if task is None:
            return
        self._refresh_task = None
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("background_refresh_stopped")

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self._refetch_interval)
            for role in self._refresh_roles:
                try:
                    await self.refresh(role)
                except AggregationError as e:
                    # Next tick or an explicit user retry recovers
                    logger.warning(
                        "background_refresh_failed",
                        role=role.value,
                        domain=e.domain,
                        error=str(e),
                    )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _entry(self, role: ViewerRole) -> _RoleEntry:
        entry = self._entries.get(role)
        if entry is None:
            entry = self._entries[role] = _RoleEntry()
        return entry

    def _is_fresh(self, entry: _RoleEntry) -> bool:
        if entry.fetched_monotonic is None:
            return False
        if entry.loaded_generation != entry.generation:
            return False
        return self._clock.monotonic() - entry.fetched_monotonic < self._stale_time

    def _build_snapshot(
        self,
        role: ViewerRole,
        entry: _RoleEntry,
        filters: QueueFilters | None,
    ) -> QueueSnapshot:
        active = filters or QueueFilters()
        assert entry.fetched_at is not None
        return QueueSnapshot(
            role=role,
            items=tuple(apply_filters(entry.items, active)),
            counts=entry.counts,
            fetched_at=entry.fetched_at,
            filters=active,
        )


__all__ = ["QueueAggregatorService"]
