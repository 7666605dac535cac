"""Tests for the rearrangement planner."""

from stowage.allocation.planner import plan_rearrangement
from stowage.container.container import StorageContainer
from stowage.item.item import Item


def _container(container_id, total_volume, max_weight=100.0, container_type=None):
    return StorageContainer.create(
        container_id=container_id,
        name=container_id,
        total_volume=total_volume,
        max_weight=max_weight,
        container_type=container_type,
    )


def _put(container, item_id, volume, weight=1.0):
    item = Item.create(item_id=item_id, name=item_id, volume=volume, weight=weight, location=str(container.id))
    container.store(item_id, volume, weight)
    return item


def _hold():
    """A is the only container big enough; C and D take its items one each."""
    a = _container("A", 10.0)
    b = _container("B", 10.0)
    c = _container("C", 3.0)
    d = _container("D", 3.0)
    items = [_put(a, "i1", 3.0), _put(a, "i2", 3.0), _put(b, "i3", 8.0)]
    return [a, b, c, d], items


class TestPlanRearrangement:
    def test_frees_enough_space(self):
        containers, items = _hold()
        plan = plan_rearrangement(containers, items, 5.0, 1.0)
        assert [(m.item_id, m.from_container, m.to_container) for m in plan] == [
            ("i1", "A", "C"),
            ("i2", "A", "D"),
        ]
        assert sum(m.volume_freed for m in plan) >= 5.0

    def test_each_item_moves_at_most_once(self):
        containers, items = _hold()
        plan = plan_rearrangement(containers, items, 5.0, 1.0)
        moved = [m.item_id for m in plan]
        assert len(moved) == len(set(moved))

    def test_never_overflows_a_destination(self):
        containers, items = _hold()
        by_id = {str(c.id): c for c in containers}
        plan = plan_rearrangement(containers, items, 5.0, 1.0)

        incoming = {}
        for move in plan:
            incoming[move.to_container] = incoming.get(move.to_container, 0.0) + move.volume_freed
        for container_id, volume in incoming.items():
            assert by_id[container_id].used_volume + volume <= by_id[container_id].total_volume

    def test_partial_plan_when_candidates_run_out(self):
        a = _container("A", 10.0)
        c = _container("C", 3.0)
        items = [_put(a, "i1", 3.0), _put(a, "i2", 3.0)]
        plan = plan_rearrangement([a, c], items, 5.0, 1.0)
        assert [m.item_id for m in plan] == ["i1"]

    def test_empty_when_no_item_can_move(self):
        a = _container("A", 10.0)
        c = _container("C", 3.0)
        items = [_put(a, "i1", 3.0), _put(a, "i2", 3.0), _put(c, "i3", 1.0)]
        assert plan_rearrangement([a, c], items, 5.0, 1.0) == []

    def test_empty_when_no_container_is_large_enough(self):
        containers, items = _hold()
        assert plan_rearrangement(containers, items, 50.0, 1.0) == []

    def test_return_containers_are_ignored(self):
        a = _container("A", 10.0)
        r = _container("R", 10.0, container_type="return")
        items = [_put(a, "i1", 8.0)]
        assert plan_rearrangement([a, r], items, 5.0, 1.0) == []

    def test_move_serializes(self):
        containers, items = _hold()
        move = plan_rearrangement(containers, items, 5.0, 1.0)[0]
        assert move.to_dict() == {
            "item_id": "i1",
            "item_name": "i1",
            "from_container": "A",
            "to_container": "C",
            "volume_freed": 3.0,
            "weight_freed": 1.0,
        }
