"""Application tests for the action log."""

from datetime import UTC, datetime, timedelta

from stowage.action_log.entry import ActionType, query_actions, record_action
from stowage.utils.locking import process_command
from stowage.waste.disposal import MarkAsWaste


class TestRecordAction:
    def test_details_are_stored_as_json(self):
        entry = record_action(ActionType.SEARCH_ITEM, query="kit", results=["item_002"])
        assert entry.payload["query"] == "kit"
        assert entry.payload["results"] == ["item_002"]
        assert "timestamp" in entry.payload

    def test_non_json_values_are_stringified(self):
        entry = record_action(ActionType.UPDATE_ITEM, item_id="x", changes={"expiration_date": datetime(2030, 1, 1)})
        assert entry.payload["changes"]["expiration_date"].startswith("2030-01-01")


class TestQueryActions:
    def test_most_recent_first_with_total(self):
        for query in ("a", "b", "c"):
            record_action(ActionType.SEARCH_ITEM, query=query)
        entries, total = query_actions(limit=2)
        assert total == 3
        assert [e.payload["query"] for e in entries] == ["c", "b"]

    def test_filter_by_action(self, hold):
        process_command(MarkAsWaste(item_id="item_001"))
        entries, total = query_actions(action="mark_as_waste")
        assert total == 1
        assert entries[0].action == ActionType.MARK_AS_WASTE.value

    def test_filter_by_time_window(self):
        record_action(ActionType.SEARCH_ITEM, query="now")
        now = datetime.now(UTC)
        assert query_actions(start=now + timedelta(hours=1))[1] == 0
        assert query_actions(end=now + timedelta(hours=1))[1] == 1

    def test_every_mutation_is_logged(self, hold):
        _, total = query_actions()
        # 2 containers, 1 waste container, 2 placements
        assert total == 5

    def test_counts_beyond_one_page_of_results(self):
        for n in range(120):
            record_action(ActionType.SEARCH_ITEM, query=str(n))
        entries, total = query_actions(limit=500)
        assert total == 120
        assert len(entries) == 120
