"""Action log — append-only record of every operation against the stowage."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, String, Text
from protean.utils.globals import current_domain

from stowage.domain import stowage
from stowage.utils.logging import get_logger
from stowage.utils.query import fetch_all

logger = get_logger(__name__)

DEFAULT_QUERY_LIMIT = 100


class ActionType(Enum):
    PLACE_ITEM = "place_item"
    SEARCH_ITEM = "search_item"
    RETRIEVE_ITEM = "retrieve_item"
    REARRANGE_ITEMS = "rearrange_items"
    MARK_AS_WASTE = "mark_as_waste"
    CREATE_UNDOCK_PLAN = "create_undock_plan"
    CONFIRM_RETURN = "confirm_return"
    ADD_CONTAINER = "add_container"
    ADD_WASTE_CONTAINER = "add_waste_container"
    UPDATE_ITEM = "update_item"


@stowage.aggregate
class ActionLogEntry:
    """A single logged action. Entries are never modified after being appended."""

    action: String(required=True, max_length=50, choices=ActionType)
    details: Text(default="{}")
    timestamp: DateTime(required=True)

    @property
    def payload(self):
        return json.loads(self.details) if self.details else {}

    def to_dict(self):
        return {
            "id": str(self.id),
            "action": self.action,
            "details": self.payload,
            "timestamp": self.timestamp.isoformat(),
        }


def record_action(action: ActionType, **details) -> ActionLogEntry:
    """Append an entry to the log.

    Inside a command handler the entry joins the handler's Unit of Work, so it
    is persisted together with the state change it describes.
    """
    timestamp = datetime.now(UTC)
    details.setdefault("timestamp", timestamp.isoformat())
    entry = ActionLogEntry(
        action=action.value,
        details=json.dumps(details, default=str),
        timestamp=timestamp,
    )
    current_domain.repository_for(ActionLogEntry).add(entry)
    logger.debug("Action recorded", action=action.value)
    return entry


def as_utc(value):
    if value is None:
        return None
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def all_actions(action: ActionType | str | None = None) -> list[ActionLogEntry]:
    """Every entry, oldest first."""
    repo = current_domain.repository_for(ActionLogEntry)
    if action:
        kind = action.value if isinstance(action, ActionType) else action
        entries = fetch_all(repo._dao.query.filter(action=kind))
    else:
        entries = fetch_all(repo._dao.query)
    return sorted(entries, key=lambda entry: as_utc(entry.timestamp))


def query_actions(
    action: ActionType | str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    limit: int = DEFAULT_QUERY_LIMIT,
) -> tuple[list[ActionLogEntry], int]:
    """Matching entries, most recent first, together with the total match count."""
    start, end = as_utc(start), as_utc(end)
    matches = [
        entry
        for entry in all_actions(action)
        if (start is None or as_utc(entry.timestamp) >= start) and (end is None or as_utc(entry.timestamp) <= end)
    ]
    matches.reverse()
    return matches[: max(0, limit)], len(matches)
