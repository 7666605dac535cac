"""Waste disposal — moving an item from storage into a waste container."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from stowage.action_log.entry import ActionType, record_action
from stowage.allocation.engine import choose_waste_container
from stowage.container.container import StorageContainer
from stowage.domain import stowage
from stowage.errors import NoWasteContainer
from stowage.item.item import Item
from stowage.utils.logging import get_logger
from stowage.waste.waste_container import WasteContainer

logger = get_logger(__name__)

DEFAULT_REASON = "used"


@stowage.command(part_of="Item")
class MarkAsWaste:
    item_id: String(required=True, max_length=255)
    reason: String(max_length=255, default=DEFAULT_REASON)


@stowage.command_handler(part_of=Item)
class DisposalHandler:
    @handle(MarkAsWaste)
    def mark_as_waste(self, command):
        item_repo = current_domain.repository_for(Item)
        container_repo = current_domain.repository_for(StorageContainer)
        waste_repo = current_domain.repository_for(WasteContainer)

        item = item_repo.get(command.item_id)
        if not item.is_active:
            raise ValidationError({"item_id": [f"Item {item.id} is already marked as waste"]})
        previous_location = item.location

        waste_containers = waste_repo.find_all()
        choice = choose_waste_container(waste_containers, item.category, item.volume, item.weight)
        if choice is None:
            raise NoWasteContainer(
                {"item_id": [f"No waste container accepts category '{item.category}' with enough room"]}
            )
        waste_container = next(w for w in waste_containers if str(w.id) == choice.container_id)

        item.discard(str(waste_container.id))

        source = container_repo.find(previous_location)
        if source is not None:
            source.release(str(item.id), item.volume, item.weight)
            container_repo.add(source)
        waste_container.receive(item.volume, item.weight)

        item_repo.add(item)
        waste_repo.add(waste_container)
        record_action(
            ActionType.MARK_AS_WASTE,
            item_id=str(item.id),
            reason=command.reason or DEFAULT_REASON,
            previous_location=previous_location,
            waste_container=str(waste_container.id),
        )

        logger.info(
            "Item marked as waste",
            item_id=str(item.id),
            waste_container_id=str(waste_container.id),
            reason=command.reason or DEFAULT_REASON,
        )
        return waste_container
