"""Waste returns — undock scheduling, return planning and return confirmation.

A waste container leaves the hold when it undocks. Confirming the return
deletes the container together with every item it was carrying.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Date, String
from protean.utils.globals import current_domain

from stowage.action_log.entry import ActionType, record_action
from stowage.domain import stowage
from stowage.item.item import Item
from stowage.utils.locking import state_lock
from stowage.utils.logging import get_logger
from stowage.waste.waste_container import WasteContainer

logger = get_logger(__name__)

DEFAULT_UNDOCK_DAYS = 7
WASTE_PLAN_TYPE = "waste"
NOT_SCHEDULED = "Not scheduled"


@dataclass(frozen=True)
class UndockPlan:
    module_id: str
    undock_date: date
    plan_type: str
    items_count: int


@stowage.command(part_of="WasteContainer")
class ScheduleUndock:
    module_id: String(required=True, max_length=255)
    undock_date: Date()
    plan_type: String(max_length=50, default=WASTE_PLAN_TYPE)


@stowage.command(part_of="WasteContainer")
class ConfirmReturn:
    waste_container_id: String(required=True, max_length=255)


@stowage.command_handler(part_of=WasteContainer)
class WasteReturnsHandler:
    @handle(ScheduleUndock)
    def schedule_undock(self, command):
        repo = current_domain.repository_for(WasteContainer)
        plan_type = command.plan_type or WASTE_PLAN_TYPE
        container = repo.find(command.module_id) if plan_type == WASTE_PLAN_TYPE else None
        if container is None:
            raise ObjectNotFoundError(f"Module {command.module_id} not found or plan type '{plan_type}' not supported")

        undock_date = command.undock_date or (datetime.now(UTC).date() + timedelta(days=DEFAULT_UNDOCK_DAYS))
        container.schedule_undock(undock_date)
        repo.add(container)
        items_count = len(current_domain.repository_for(Item).find_in_waste_container(str(container.id)))
        record_action(
            ActionType.CREATE_UNDOCK_PLAN,
            module_id=str(container.id),
            undock_date=undock_date.isoformat(),
            type=plan_type,
            items_count=items_count,
        )

        logger.info("Undock scheduled", module_id=str(container.id), undock_date=undock_date.isoformat())
        return UndockPlan(
            module_id=str(container.id),
            undock_date=undock_date,
            plan_type=plan_type,
            items_count=items_count,
        )

    @handle(ConfirmReturn)
    def confirm_return(self, command):
        waste_repo = current_domain.repository_for(WasteContainer)
        item_repo = current_domain.repository_for(Item)

        container = waste_repo.get(command.waste_container_id)
        items = item_repo.find_in_waste_container(str(container.id))
        for item in items:
            item_repo.remove(item)
        waste_repo.remove(container)

        record_action(
            ActionType.CONFIRM_RETURN,
            waste_container_id=str(container.id),
            container_name=container.name,
            items_removed=len(items),
        )

        logger.info("Return confirmed", waste_container_id=str(container.id), items_removed=len(items))
        return len(items)


def plan_return(waste_container_id) -> dict:
    """Snapshot of what returning a waste container would take off the hold."""
    with state_lock.read():
        container = current_domain.repository_for(WasteContainer).get(waste_container_id)
        items = sorted(
            current_domain.repository_for(Item).find_in_waste_container(str(container.id)),
            key=lambda item: str(item.id),
        )

    total_volume = sum(item.volume for item in items)
    total_weight = sum(item.weight for item in items)
    return {
        "container_id": str(container.id),
        "container_name": container.name,
        "undock_date": container.undock_date.isoformat() if container.undock_date else NOT_SCHEDULED,
        "waste_items": [
            {
                "item_id": str(item.id),
                "name": item.name,
                "category": item.category,
                "volume": item.volume,
                "weight": item.weight,
                "status": item.status,
            }
            for item in items
        ],
        "total_items": len(items),
        "total_volume": total_volume,
        "total_weight": total_weight,
        "volume_utilization": (total_volume / container.total_volume) * 100,
        "weight_utilization": (total_weight / container.max_weight) * 100,
        "space_reclamation": {
            "volume_reclaimed": total_volume,
            "weight_reclaimed": total_weight,
        },
    }
