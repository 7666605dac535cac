"""Efficiency metrics derived from current state and the action log."""

from datetime import datetime

from protean.utils.globals import current_domain

from stowage.action_log.entry import ActionType, all_actions, as_utc
from stowage.container.container import StorageContainer
from stowage.item.item import Item
from stowage.item.search import today
from stowage.reports.storage_status import percentage
from stowage.utils.locking import state_lock
from stowage.waste.waste_container import WasteContainer


def average_retrieval_seconds(entries) -> float:
    """Mean time from a search listing an item to the first retrieval of it.

    ``entries`` must be in chronological order. Each search result is counted
    at most once.
    """
    searched_at: dict[str, datetime] = {}
    durations = []
    for entry in entries:
        details = entry.payload
        if entry.action == ActionType.SEARCH_ITEM.value:
            for item_id in details.get("results") or []:
                searched_at[item_id] = as_utc(entry.timestamp)
        elif entry.action == ActionType.RETRIEVE_ITEM.value:
            started = searched_at.pop(details.get("item_id"), None)
            if started is not None:
                durations.append((as_utc(entry.timestamp) - started).total_seconds())
    return sum(durations) / len(durations) if durations else 0.0


def efficiency_metrics() -> dict:
    as_of = today()
    with state_lock.read():
        containers = current_domain.repository_for(StorageContainer).find_all()
        waste_containers = current_domain.repository_for(WasteContainer).find_all()
        active = current_domain.repository_for(Item).find_active()
        entries = all_actions()

    rearrangements = [entry for entry in entries if entry.action == ActionType.REARRANGE_ITEMS.value]
    total_moves = sum(len(entry.payload.get("rearrangement_plan") or []) for entry in rearrangements)
    expired = sum(1 for item in active if item.expiration_date is not None and item.expiration_date < as_of)
    expiration_efficiency = 100 - (expired / len(active) * 100) if active else 100

    return {
        "space_utilization": percentage(
            sum(c.used_volume for c in containers), sum(c.total_volume for c in containers)
        ),
        "average_retrieval_time_seconds": round(average_retrieval_seconds(entries), 2),
        "waste_management_efficiency": percentage(
            sum(w.used_volume for w in waste_containers), sum(w.total_volume for w in waste_containers)
        ),
        "rearrangement_efficiency": {
            "avg_moves_per_rearrangement": round(total_moves / len(rearrangements), 2) if rearrangements else 0,
            "total_rearrangements": len(rearrangements),
        },
        "expiration_management": {
            "efficiency_percentage": round(expiration_efficiency, 2),
            "expired_items": expired,
            "total_items": len(active),
        },
    }
