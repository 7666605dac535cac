"""Item placement — command and handler.

An item goes into the requested container when one is named. Otherwise every
storage container is scored and the best one wins. When nothing fits, a
rearrangement is proposed instead; the proposal is never applied here.
"""

from dataclasses import dataclass, field

from protean import handle
from protean.fields import Date, Float, Integer, String
from protean.utils.globals import current_domain

from stowage.action_log.entry import ActionType, record_action
from stowage.allocation.engine import choose_container
from stowage.allocation.planner import Move, plan_rearrangement
from stowage.container.container import StorageContainer
from stowage.domain import stowage
from stowage.errors import Conflict, NoCapacity
from stowage.item.item import DEFAULT_PRIORITY, Item, require_positive_dimensions
from stowage.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class PlacementOutcome:
    """Either the container the item went into, or a proposed rearrangement."""

    item_id: str
    container_id: str | None = None
    rearrangement_plan: list[Move] = field(default_factory=list)

    @property
    def placed(self):
        return self.container_id is not None


@stowage.command(part_of="Item")
class PlaceItem:
    item_id: String(required=True, max_length=255)
    name: String(required=True, max_length=255)
    category: String(max_length=100)
    volume: Float(required=True)
    weight: Float(required=True)
    priority: Integer(min_value=1, max_value=5)
    expiration_date: Date()
    container_id: String(max_length=255)


@stowage.command_handler(part_of=Item)
class PlaceItemHandler:
    @handle(PlaceItem)
    def place_item(self, command):
        item_repo = current_domain.repository_for(Item)
        container_repo = current_domain.repository_for(StorageContainer)

        if item_repo.find(command.item_id) is not None:
            raise Conflict({"item_id": [f"Item {command.item_id} already exists"]})
        require_positive_dimensions(command.volume, command.weight)

        if command.container_id:
            # Raises ObjectNotFoundError for unknown containers
            container = container_repo.get(command.container_id)
        else:
            containers = container_repo.find_all()
            choice = choose_container(containers, command.volume, command.weight, command.priority or DEFAULT_PRIORITY)
            if choice is None:
                plan = plan_rearrangement(containers, item_repo.find_active(), command.volume, command.weight)
                if not plan:
                    raise NoCapacity({"item_id": ["No space available even with rearrangement"]})
                logger.info("Rearrangement proposed", item_id=command.item_id, moves=len(plan))
                return PlacementOutcome(item_id=command.item_id, rearrangement_plan=plan)
            container = next(c for c in containers if str(c.id) == choice.container_id)

        item = Item.create(
            item_id=command.item_id,
            name=command.name,
            volume=command.volume,
            weight=command.weight,
            location=str(container.id),
            category=command.category,
            priority=command.priority,
            expiration_date=command.expiration_date,
        )
        container.store(str(item.id), item.volume, item.weight)

        item_repo.add(item)
        container_repo.add(container)
        record_action(ActionType.PLACE_ITEM, item_id=str(item.id), container_id=str(container.id))

        logger.info("Item placed", item_id=str(item.id), container_id=str(container.id))
        return PlacementOutcome(item_id=str(item.id), container_id=str(container.id))
