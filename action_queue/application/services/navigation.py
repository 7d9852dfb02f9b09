"""Navigation target resolution for the `view` action.

The route table belongs to the embedding application; DEFAULT_ROUTES is
the table used when none is supplied. Templates may reference
`{entity_id}`; fixed pages ignore it. Keys are entity type strings, so
sources may introduce record types the table does not know; such items
aggregate normally and only fail when `view` is requested.
"""

from __future__ import annotations

from collections.abc import Mapping

from action_queue.application.ports.navigator import NavigationTarget
from action_queue.domain.errors.queue import NavigationRouteError
from action_queue.domain.models.action_item import ActionItem, EntityType

DEFAULT_ROUTES: Mapping[str, str] = {
    EntityType.FAULT.value: "/faults/{entity_id}",
    EntityType.BUDGET_APPROVAL.value: "/approvals/{entity_id}",
    EntityType.VOTE.value: "/voting/{entity_id}",
    EntityType.MESSAGE.value: "/messages/{entity_id}",
    EntityType.METER_READING.value: "/meters",
    EntityType.PERSON_MONTHS.value: "/person-months",
    EntityType.ANNOUNCEMENT.value: "/announcements/{entity_id}",
}


def resolve_navigation_target(
    item: ActionItem,
    routes: Mapping[str, str] = DEFAULT_ROUTES,
) -> NavigationTarget:
    """Map an item's owning record to a route.

    Raises:
        NavigationRouteError: If the route table has no entry for the
            entity type.
    """
    template = routes.get(item.entity_type)
    if template is None:
        raise NavigationRouteError(item.id, item.entity_type)
    return NavigationTarget(
        path=template.format(entity_id=item.entity_id),
        entity_type=item.entity_type,
        entity_id=item.entity_id,
    )


__all__ = ["DEFAULT_ROUTES", "resolve_navigation_target"]
