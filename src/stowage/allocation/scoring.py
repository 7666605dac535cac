"""Placement scoring.

A container's score blends how snugly the item fills it with how reachable
the container is, weighted by the item's priority.
"""

SPACE_WEIGHT = 0.5
ACCESSIBILITY_WEIGHT = 0.5
MAX_PRIORITY = 5


def space_efficiency(total_volume: float, used_volume: float, volume: float) -> float:
    """Fraction of the container that would be in use after adding ``volume``."""
    return 1 - ((total_volume - used_volume - volume) / total_volume)


def accessibility_score(accessibility_factor: float, priority: int) -> float:
    return accessibility_factor * (priority / MAX_PRIORITY)


def placement_score(container, volume: float, priority: int) -> float:
    """Score a storage container for an item. Higher is better.

    Callers must only score containers that can hold the item.
    """
    return SPACE_WEIGHT * space_efficiency(
        container.total_volume, container.used_volume, volume
    ) + ACCESSIBILITY_WEIGHT * accessibility_score(container.accessibility_factor, priority)


def rank(candidates, score_of):
    """Best candidate by score, ties going to the lowest container id."""
    best = None
    best_score = None
    for candidate in sorted(candidates, key=lambda c: str(c.id)):
        score = score_of(candidate)
        if best is None or score > best_score:
            best, best_score = candidate, score
    return best, best_score
