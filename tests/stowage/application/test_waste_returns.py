"""Application tests for undock scheduling, return planning and return confirmation."""

from datetime import UTC, date, datetime, timedelta

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from stowage.action_log.entry import ActionType, all_actions
from stowage.container.container import StorageContainer
from stowage.container.management import AddContainer
from stowage.item.item import Item
from stowage.item.placement import PlaceItem
from stowage.utils.locking import process_command
from stowage.waste.disposal import MarkAsWaste
from stowage.waste.management import AddWasteContainer
from stowage.waste.returns import ConfirmReturn, ScheduleUndock, plan_return
from stowage.waste.waste_container import WasteContainer


class TestScheduleUndock:
    def test_explicit_date(self, hold):
        plan = process_command(ScheduleUndock(module_id="waste_001", undock_date=date(2031, 3, 1)))
        assert plan.undock_date == date(2031, 3, 1)
        assert current_domain.repository_for(WasteContainer).get("waste_001").undock_date == date(2031, 3, 1)

    def test_defaults_to_a_week_out(self, hold):
        plan = process_command(ScheduleUndock(module_id="waste_001"))
        assert plan.undock_date == datetime.now(UTC).date() + timedelta(days=7)
        assert plan.plan_type == "waste"

    def test_counts_items_aboard(self, hold):
        process_command(MarkAsWaste(item_id="item_001"))
        plan = process_command(ScheduleUndock(module_id="waste_001"))
        assert plan.items_count == 1
        assert all_actions(ActionType.CREATE_UNDOCK_PLAN)[-1].payload["items_count"] == 1

    def test_unknown_module(self, hold):
        with pytest.raises(ObjectNotFoundError):
            process_command(ScheduleUndock(module_id="storage_001"))

    def test_unsupported_plan_type(self, hold):
        with pytest.raises(ObjectNotFoundError):
            process_command(ScheduleUndock(module_id="waste_001", plan_type="return"))


class TestPlanReturn:
    def test_summarizes_waste_aboard(self, hold):
        process_command(MarkAsWaste(item_id="item_002"))
        plan = plan_return("waste_001")
        assert plan["total_items"] == 1
        assert plan["waste_items"][0]["item_id"] == "item_002"
        assert plan["total_volume"] == pytest.approx(2.0)
        assert plan["volume_utilization"] == pytest.approx(2.0 / 30 * 100)
        assert plan["space_reclamation"] == {"volume_reclaimed": 2.0, "weight_reclaimed": 1.5}

    def test_unscheduled_undock(self):
        process_command(AddWasteContainer(container_id="w1", name="w1", total_volume=5.0, max_weight=5.0))
        assert plan_return("w1")["undock_date"] == "Not scheduled"

    def test_read_only(self, hold):
        before = len(all_actions())
        plan_return("waste_001")
        assert len(all_actions()) == before

    def test_unknown_container(self):
        with pytest.raises(ObjectNotFoundError):
            plan_return("missing")


class TestConfirmReturn:
    def test_removes_container_and_its_items(self, hold):
        process_command(MarkAsWaste(item_id="item_001"))
        removed = process_command(ConfirmReturn(waste_container_id="waste_001"))

        assert removed == 1
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Item).get("item_001")
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(WasteContainer).get("waste_001")
        assert current_domain.repository_for(Item).get("item_002") is not None

    def test_logs_confirmation(self, hold):
        process_command(ConfirmReturn(waste_container_id="waste_001"))
        entry = all_actions(ActionType.CONFIRM_RETURN)[-1]
        assert entry.payload == {
            "waste_container_id": "waste_001",
            "container_name": "General Waste",
            "items_removed": 0,
            "timestamp": entry.payload["timestamp"],
        }

    def test_unknown_container(self):
        with pytest.raises(ObjectNotFoundError):
            process_command(ConfirmReturn(waste_container_id="missing"))


class TestWasteMembership:
    """A storage container may carry an id that looks like a waste location."""

    @pytest.fixture(autouse=True)
    def lookalike_hold(self):
        process_command(AddContainer(container_id="waste_w1", name="Lookalike", total_volume=10.0, max_weight=10.0))
        process_command(AddWasteContainer(container_id="w1", name="Waste", total_volume=10.0, max_weight=10.0))
        process_command(PlaceItem(item_id="i1", name="Stored", volume=1.0, weight=1.0, container_id="waste_w1"))

    def test_confirm_return_keeps_stored_items(self):
        assert process_command(ConfirmReturn(waste_container_id="w1")) == 0

        item = current_domain.repository_for(Item).get("i1")
        assert item.is_active
        assert current_domain.repository_for(StorageContainer).get("waste_w1").contents == ["i1"]

    def test_return_plan_ignores_stored_items(self):
        assert plan_return("w1")["total_items"] == 0

    def test_undock_counts_only_waste(self):
        assert process_command(ScheduleUndock(module_id="w1")).items_count == 0
