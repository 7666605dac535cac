"""Expiring items report."""

from protean.utils.globals import current_domain

from stowage.container.container import StorageContainer
from stowage.item.item import Item
from stowage.item.search import EXPIRY_WARNING_DAYS, today
from stowage.utils.locking import state_lock


def expiring_items(days: int = EXPIRY_WARNING_DAYS) -> list[dict]:
    """Active items expiring within ``days`` (inclusive), soonest first."""
    as_of = today()
    with state_lock.read():
        containers = {str(c.id): c for c in current_domain.repository_for(StorageContainer).find_all()}
        items = current_domain.repository_for(Item).find_active()

    expiring = []
    for item in items:
        remaining = item.days_to_expiry(as_of)
        if remaining is None or not 0 <= remaining <= days:
            continue
        container = containers.get(item.location)
        expiring.append(
            {
                "item_id": str(item.id),
                "name": item.name,
                "days_to_expiry": remaining,
                "expiration_date": item.expiration_date.isoformat(),
                "location": item.location,
                "container_name": container.name if container else None,
                "priority": item.priority,
                "category": item.category,
            }
        )

    return sorted(expiring, key=lambda entry: (entry["days_to_expiry"], entry["item_id"]))
