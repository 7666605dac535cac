"""Item retrieval — command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from stowage.action_log.entry import ActionType, record_action
from stowage.domain import stowage
from stowage.item.item import Item
from stowage.utils.logging import get_logger

logger = get_logger(__name__)


@stowage.command(part_of="Item")
class RetrieveItem:
    item_id: String(required=True, max_length=255)


@stowage.command_handler(part_of=Item)
class RetrieveItemHandler:
    @handle(RetrieveItem)
    def retrieve_item(self, command):
        repo = current_domain.repository_for(Item)
        item = repo.get(command.item_id)

        item.touch()
        repo.add(item)
        record_action(ActionType.RETRIEVE_ITEM, item_id=str(item.id), location=item.location)

        logger.info("Item retrieved", item_id=str(item.id), location=item.location)
        return item
