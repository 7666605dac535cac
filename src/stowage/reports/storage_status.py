"""Storage status report — capacity and item counts across both container pools."""

from collections import Counter

from protean.utils.globals import current_domain

from stowage.container.container import StorageContainer
from stowage.item.item import Item, ItemStatus
from stowage.item.search import is_expiring_soon, today
from stowage.utils.locking import state_lock
from stowage.waste.waste_container import WasteContainer


def percentage(part, whole):
    return round((part / whole) * 100, 2) if whole > 0 else 0


def pool_stats(containers):
    """Totals and utilization for a group of containers."""
    total_volume = sum(c.total_volume for c in containers)
    used_volume = sum(c.used_volume for c in containers)
    total_weight = sum(c.max_weight for c in containers)
    current_weight = sum(c.current_weight for c in containers)
    return {
        "total_volume": total_volume,
        "used_volume": used_volume,
        "volume_utilization": percentage(used_volume, total_volume),
        "total_weight_capacity": total_weight,
        "current_weight": current_weight,
        "weight_utilization": percentage(current_weight, total_weight),
        "container_count": len(containers),
    }


def storage_status() -> dict:
    as_of = today()
    with state_lock.read():
        containers = current_domain.repository_for(StorageContainer).find_all()
        waste_containers = current_domain.repository_for(WasteContainer).find_all()
        items = current_domain.repository_for(Item).find_all()

    active = [item for item in items if item.status == ItemStatus.ACTIVE.value]
    by_status = Counter(item.status for item in items)

    return {
        "storage_stats": pool_stats(containers),
        "waste_stats": pool_stats(waste_containers),
        "item_stats": {
            "total_active_items": by_status.get(ItemStatus.ACTIVE.value, 0),
            "total_waste_items": by_status.get(ItemStatus.WASTE.value, 0),
            "items_by_category": dict(Counter(item.category for item in active)),
            "items_by_status": dict(by_status),
            "items_expiring_soon": sum(1 for item in active if is_expiring_soon(item.days_to_expiry(as_of))),
        },
        "storage_containers": [
            {
                "container_id": str(c.id),
                "name": c.name,
                "type": c.container_type,
                "volume_utilization": round(c.volume_utilization(), 2),
                "weight_utilization": round(c.weight_utilization(), 2),
                "item_count": len(c.contents),
                "accessibility_factor": c.accessibility_factor,
            }
            for c in containers
        ],
        "waste_containers": [
            {
                "container_id": str(w.id),
                "name": w.name,
                "volume_utilization": round(w.volume_utilization(), 2),
                "weight_utilization": round(w.weight_utilization(), 2),
                "waste_categories": w.categories,
                "undock_date": w.undock_date.isoformat() if w.undock_date else None,
            }
            for w in waste_containers
        ],
    }
