"""Container management — command and handler."""

from protean import handle
from protean.fields import Float, String
from protean.utils.globals import current_domain

from stowage.action_log.entry import ActionType, record_action
from stowage.container.container import ContainerType, StorageContainer
from stowage.domain import stowage
from stowage.errors import Conflict
from stowage.utils.logging import get_logger

logger = get_logger(__name__)


@stowage.command(part_of="StorageContainer")
class AddContainer:
    container_id: String(required=True, max_length=255)
    name: String(required=True, max_length=255)
    total_volume: Float(required=True)
    max_weight: Float(required=True)
    container_type: String(choices=ContainerType)
    accessibility_factor: Float(min_value=0.0, max_value=1.0)


@stowage.command_handler(part_of=StorageContainer)
class ManageContainersHandler:
    @handle(AddContainer)
    def add_container(self, command):
        repo = current_domain.repository_for(StorageContainer)
        if repo.find(command.container_id) is not None:
            raise Conflict({"container_id": [f"Container {command.container_id} already exists"]})

        container = StorageContainer.create(
            container_id=command.container_id,
            name=command.name,
            total_volume=command.total_volume,
            max_weight=command.max_weight,
            container_type=command.container_type,
            accessibility_factor=command.accessibility_factor,
        )
        repo.add(container)
        record_action(ActionType.ADD_CONTAINER, container_id=str(container.id), name=container.name)

        logger.info("Container added", container_id=str(container.id), type=container.container_type)
        return container
