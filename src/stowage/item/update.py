"""Item updates — command and handler.

Descriptive fields change in place. A new location moves the item between
storage containers, with the destination's capacity checked first.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Date, Integer, String
from protean.utils.globals import current_domain

from stowage.action_log.entry import ActionType, record_action
from stowage.container.container import StorageContainer
from stowage.domain import stowage
from stowage.item.item import Item
from stowage.utils.logging import get_logger

logger = get_logger(__name__)


@stowage.command(part_of="Item")
class UpdateItem:
    item_id: String(required=True, max_length=255)
    name: String(max_length=255)
    category: String(max_length=100)
    priority: Integer(min_value=1, max_value=5)
    expiration_date: Date()
    location: String(max_length=255)


@stowage.command_handler(part_of=Item)
class UpdateItemHandler:
    @handle(UpdateItem)
    def update_item(self, command):
        item_repo = current_domain.repository_for(Item)
        container_repo = current_domain.repository_for(StorageContainer)
        item = item_repo.get(command.item_id)

        changes = {
            key: value
            for key, value in {
                "name": command.name,
                "category": command.category,
                "priority": command.priority,
                "expiration_date": command.expiration_date,
            }.items()
            if value is not None
        }

        if command.location and command.location != item.location:
            if not item.is_active:
                raise ValidationError({"location": ["Waste items cannot be moved between storage containers"]})

            destination = container_repo.get(command.location)
            source = container_repo.find(item.location)

            # Store first so a capacity failure leaves the source untouched
            destination.store(str(item.id), item.volume, item.weight)
            if source is not None:
                source.release(str(item.id), item.volume, item.weight)
                container_repo.add(source)
            container_repo.add(destination)

            item.relocate(str(destination.id))
            changes["location"] = str(destination.id)

        item.update_details(
            name=command.name,
            priority=command.priority,
            expiration_date=command.expiration_date,
            category=command.category,
        )
        item_repo.add(item)
        record_action(ActionType.UPDATE_ITEM, item_id=str(item.id), changes=changes)

        logger.info("Item updated", item_id=str(item.id), fields=sorted(changes))
        return item
