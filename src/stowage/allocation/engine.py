"""Allocation engine — picks the best container for an incoming or discarded item."""

from dataclasses import dataclass

from stowage.allocation.scoring import placement_score, rank, space_efficiency


@dataclass(frozen=True)
class PlacementResult:
    container_id: str
    score: float


def eligible_containers(containers, volume, weight):
    """Storage containers with enough residual volume and weight for the item."""
    return [c for c in containers if c.is_storage and c.fits(volume, weight)]


def choose_container(containers, volume, weight, priority) -> PlacementResult | None:
    """Highest scoring storage container, or None when nothing fits."""
    best, score = rank(
        eligible_containers(containers, volume, weight),
        lambda c: placement_score(c, volume, priority),
    )
    if best is None:
        return None
    return PlacementResult(container_id=str(best.id), score=score)


def choose_waste_container(waste_containers, category, volume, weight) -> PlacementResult | None:
    """Waste container accepting ``category`` that would be filled most snugly."""
    candidates = [w for w in waste_containers if w.accepts(category) and w.fits(volume, weight)]
    best, score = rank(
        candidates,
        lambda w: space_efficiency(w.total_volume, w.used_volume, volume),
    )
    if best is None:
        return None
    return PlacementResult(container_id=str(best.id), score=score)
