"""Rearrangement planner.

When no storage container can take a new item, the planner proposes moving
existing items between storage containers until enough volume and weight has
been freed. Plans are proposals only; applying them is a separate command.
"""

from dataclasses import asdict, dataclass

from stowage.container.container import CAPACITY_TOLERANCE


@dataclass(frozen=True)
class Move:
    item_id: str
    item_name: str
    from_container: str
    to_container: str
    volume_freed: float
    weight_freed: float

    def to_dict(self):
        return asdict(self)


def _candidate_moves(storage, items_by_id, volume, weight):
    sources = [c for c in storage if c.total_volume >= volume and c.max_weight >= weight]
    candidates = []
    for source in sources:
        for item_id in source.contents:
            item = items_by_id.get(item_id)
            if item is None:
                continue
            for destination in storage:
                if destination.id == source.id or not destination.fits(item.volume, item.weight):
                    continue
                candidates.append(
                    Move(
                        item_id=str(item.id),
                        item_name=item.name,
                        from_container=str(source.id),
                        to_container=str(destination.id),
                        volume_freed=item.volume,
                        weight_freed=item.weight,
                    )
                )
    # sorted() is stable, so equal volumes keep container/item order
    return sorted(candidates, key=lambda move: move.volume_freed, reverse=True)


def plan_rearrangement(containers, items, volume, weight) -> list[Move]:
    """Greedy list of moves that frees at least ``volume`` and ``weight``.

    Returns an empty list when no container could ever hold the item or no
    item can be moved anywhere.
    """
    storage = sorted((c for c in containers if c.is_storage), key=lambda c: str(c.id))
    items_by_id = {str(item.id): item for item in items}

    projected = {str(c.id): [c.used_volume, c.current_weight] for c in storage}
    limits = {str(c.id): (c.total_volume, c.max_weight) for c in storage}

    plan = []
    moved = set()
    freed_volume = 0.0
    freed_weight = 0.0
    for move in _candidate_moves(storage, items_by_id, volume, weight):
        if freed_volume >= volume and freed_weight >= weight:
            break
        if move.item_id in moved:
            continue

        used, current = projected[move.to_container]
        total, max_weight = limits[move.to_container]
        if (
            used + move.volume_freed > total + CAPACITY_TOLERANCE
            or current + move.weight_freed > max_weight + CAPACITY_TOLERANCE
        ):
            continue

        projected[move.to_container] = [used + move.volume_freed, current + move.weight_freed]
        source = projected[move.from_container]
        projected[move.from_container] = [source[0] - move.volume_freed, source[1] - move.weight_freed]

        plan.append(move)
        moved.add(move.item_id)
        freed_volume += move.volume_freed
        freed_weight += move.weight_freed

    return plan
