"""Retrieval time estimation.

Retrieval slows down for containers that are hard to reach and for items
buried behind others stored earlier.
"""

BASE_MINUTES = 10
POSITION_PENALTY_MINUTES = 5


def estimate_retrieval_minutes(accessibility_factor: float, position: int, item_count: int) -> float:
    base = (1 - accessibility_factor) * BASE_MINUTES
    position_factor = position / max(1, item_count)
    return base + POSITION_PENALTY_MINUTES * position_factor


def estimate_for(container, item_id) -> float | None:
    """Estimate for an item held by ``container``; None if it is not there."""
    position = container.position_of(item_id)
    if position is None:
        return None
    return round(
        estimate_retrieval_minutes(container.accessibility_factor, position, len(container.contents)),
        2,
    )
