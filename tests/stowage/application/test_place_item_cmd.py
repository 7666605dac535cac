"""Application tests for the PlaceItem command handler."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from stowage.action_log.entry import ActionType, all_actions
from stowage.container.container import StorageContainer
from stowage.container.management import AddContainer
from stowage.errors import CapacityExceeded, Conflict, NoCapacity
from stowage.item.item import Item, ItemStatus
from stowage.item.placement import PlaceItem
from stowage.utils.locking import process_command


def _add_container(container_id, total_volume=10.0, max_weight=10.0, **overrides):
    process_command(
        AddContainer(
            container_id=container_id,
            name=container_id,
            total_volume=total_volume,
            max_weight=max_weight,
            **overrides,
        )
    )


def _place(**overrides):
    defaults = {"item_id": "item-001", "name": "Water Pouch", "volume": 1.0, "weight": 1.0}
    defaults.update(overrides)
    return process_command(PlaceItem(**defaults))


def _container(container_id):
    return current_domain.repository_for(StorageContainer).get(container_id)


class TestAutomaticPlacement:
    def test_sample_scenario_selects_main_storage(self, hold):
        outcome = _place(item_id="item-new", volume=0.5, weight=0.3, priority=4)
        assert outcome.placed
        assert outcome.container_id == "storage_001"
        assert _container("storage_001").used_volume == pytest.approx(1.0)

    def test_item_persisted_as_active(self):
        _add_container("c1")
        _place()
        item = current_domain.repository_for(Item).get("item-001")
        assert item.status == ItemStatus.ACTIVE.value
        assert item.location == "c1"

    def test_capacity_charged_exactly_once(self):
        _add_container("c1")
        _place(volume=2.5, weight=1.5)
        container = _container("c1")
        assert container.used_volume == 2.5
        assert container.current_weight == 1.5
        assert container.contents.count("item-001") == 1

    def test_logs_place_item(self):
        _add_container("c1")
        _place()
        entries = all_actions(ActionType.PLACE_ITEM)
        assert len(entries) == 1
        assert entries[0].payload["item_id"] == "item-001"
        assert entries[0].payload["container_id"] == "c1"


class TestExplicitContainer:
    def test_places_in_named_container(self):
        _add_container("c1", accessibility_factor=1.0)
        _add_container("c2", accessibility_factor=0.0)
        outcome = _place(container_id="c2")
        assert outcome.container_id == "c2"

    def test_unknown_container(self):
        with pytest.raises(ObjectNotFoundError):
            _place(container_id="missing")

    def test_volume_overflow(self):
        _add_container("c1", total_volume=1.0)
        with pytest.raises(CapacityExceeded):
            _place(container_id="c1", volume=2.0)
        assert _container("c1").used_volume == 0.0

    def test_weight_overflow(self):
        _add_container("c1", max_weight=1.0)
        with pytest.raises(CapacityExceeded):
            _place(container_id="c1", weight=2.0)
        assert current_domain.repository_for(Item).find("item-001") is None


class TestRejections:
    def test_duplicate_item_id(self):
        _add_container("c1")
        _place()
        with pytest.raises(Conflict):
            _place()

    def test_non_positive_volume(self):
        _add_container("c1")
        with pytest.raises(ValidationError):
            _place(volume=0)

    def test_missing_name(self):
        with pytest.raises(ValidationError):
            PlaceItem(item_id="x", volume=1.0, weight=1.0)


class TestNoSpace:
    def test_rearrangement_proposed_but_not_applied(self):
        _add_container("A", total_volume=10.0, max_weight=100.0)
        _add_container("C", total_volume=3.0, max_weight=100.0)
        _add_container("D", total_volume=3.0, max_weight=100.0)
        _place(item_id="i1", volume=2.5, container_id="A")
        _place(item_id="i2", volume=3.0, container_id="A")
        _place(item_id="i3", volume=3.0, container_id="A")

        outcome = _place(item_id="big", volume=5.0)
        assert not outcome.placed
        assert [m.item_id for m in outcome.rearrangement_plan] == ["i2", "i3"]
        assert current_domain.repository_for(Item).find("big") is None
        assert _container("A").used_volume == pytest.approx(8.5)

    def test_no_capacity_when_nothing_can_help(self):
        _add_container("c1", total_volume=1.0)
        with pytest.raises(NoCapacity):
            _place(volume=5.0)
