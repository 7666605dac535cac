"""Item search and detail views.

Search ranks matching active items by how quickly they can be retrieved, so
the easiest-to-reach copy of a supply comes first.
"""

from datetime import UTC, datetime

from protean.utils.globals import current_domain

from stowage.action_log.entry import ActionType, record_action
from stowage.container.container import StorageContainer
from stowage.item.item import Item
from stowage.retrieval.estimator import estimate_for
from stowage.utils.locking import persisting, state_lock

EXPIRY_WARNING_DAYS = 7


def today():
    return datetime.now(UTC).date()


def is_expiring_soon(days_to_expiry, window=EXPIRY_WARNING_DAYS):
    return days_to_expiry is not None and 0 <= days_to_expiry <= window


def _matches(item, query, category):
    if category and item.category != category:
        return False
    if not query:
        return True
    needle = query.lower()
    return needle in item.name.lower() or needle in str(item.id).lower()


def _search_result(item, container, as_of):
    days = item.days_to_expiry(as_of)
    result = item.to_summary()
    result.update(
        {
            "container_id": item.location,
            "container_name": container.name if container else None,
            "estimated_retrieval_time": estimate_for(container, str(item.id)) if container else None,
            "days_to_expiry": days,
            "expiring_soon": is_expiring_soon(days),
        }
    )
    return result


def find_items(query=None, category=None) -> list[dict]:
    """Active items matching ``query`` by name or id, fastest to retrieve first."""
    as_of = today()
    with state_lock.read():
        containers = {str(c.id): c for c in current_domain.repository_for(StorageContainer).find_all()}
        results = [
            _search_result(item, containers.get(item.location), as_of)
            for item in current_domain.repository_for(Item).find_active()
            if _matches(item, query, category)
        ]

    results.sort(
        key=lambda r: (
            r["estimated_retrieval_time"] if r["estimated_retrieval_time"] is not None else float("inf"),
            r["item_id"],
        )
    )
    with state_lock.write(), persisting("SearchItem"):
        record_action(
            ActionType.SEARCH_ITEM,
            query=query,
            category=category,
            results=[r["item_id"] for r in results],
        )
    return results


def item_detail(item_id) -> dict:
    """Full view of one item, including its container when it is in storage."""
    as_of = today()
    with state_lock.read():
        item = current_domain.repository_for(Item).get(item_id)
        container = current_domain.repository_for(StorageContainer).find(item.location)

    detail = _search_result(item, container, as_of)
    if container is not None:
        detail["container"] = {
            "container_id": str(container.id),
            "name": container.name,
            "type": container.container_type,
            "position": container.position_of(str(item.id)),
        }
    return detail
