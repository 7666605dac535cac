"""Application tests for the UpdateItem command handler."""

from datetime import date

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from stowage.action_log.entry import ActionType, all_actions
from stowage.container.container import StorageContainer
from stowage.container.management import AddContainer
from stowage.errors import CapacityExceeded
from stowage.item.update import UpdateItem
from stowage.utils.locking import process_command
from stowage.waste.disposal import MarkAsWaste


def _container(container_id):
    return current_domain.repository_for(StorageContainer).get(container_id)


class TestDescriptiveFields:
    def test_updates_given_fields(self, hold):
        item = process_command(UpdateItem(item_id="item_001", priority=1, expiration_date=date(2031, 1, 1)))
        assert item.priority == 1
        assert item.expiration_date == date(2031, 1, 1)
        assert item.name == "Food Packet A"

    def test_logs_changes(self, hold):
        process_command(UpdateItem(item_id="item_001", name="Food Packet B"))
        entry = all_actions(ActionType.UPDATE_ITEM)[-1]
        assert entry.payload["changes"] == {"name": "Food Packet B"}

    def test_unknown_item(self):
        with pytest.raises(ObjectNotFoundError):
            process_command(UpdateItem(item_id="missing", name="x"))


class TestRelocation:
    def test_moves_between_containers(self, hold):
        item = process_command(UpdateItem(item_id="item_001", location="storage_002"))
        assert item.location == "storage_002"
        assert _container("storage_001").used_volume == pytest.approx(0.0)
        assert _container("storage_002").used_volume == pytest.approx(2.5)
        assert _container("storage_002").contents == ["item_002", "item_001"]

    def test_destination_capacity_checked(self, hold):
        process_command(AddContainer(container_id="tiny", name="Tiny", total_volume=0.1, max_weight=10.0))
        with pytest.raises(CapacityExceeded):
            process_command(UpdateItem(item_id="item_001", location="tiny"))
        assert _container("storage_001").contents == ["item_001"]

    def test_unknown_destination(self, hold):
        with pytest.raises(ObjectNotFoundError):
            process_command(UpdateItem(item_id="item_001", location="nowhere"))

    def test_waste_items_stay_put(self, hold):
        process_command(MarkAsWaste(item_id="item_001"))
        with pytest.raises(ValidationError):
            process_command(UpdateItem(item_id="item_001", location="storage_002"))
