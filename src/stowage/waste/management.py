"""Waste container management — command and handler."""

import json

from protean import handle
from protean.fields import Date, Float, String, Text
from protean.utils.globals import current_domain

from stowage.action_log.entry import ActionType, record_action
from stowage.domain import stowage
from stowage.errors import Conflict
from stowage.utils.logging import get_logger
from stowage.waste.waste_container import WasteContainer

logger = get_logger(__name__)


@stowage.command(part_of="WasteContainer")
class AddWasteContainer:
    container_id: String(required=True, max_length=255)
    name: String(required=True, max_length=255)
    total_volume: Float(required=True)
    max_weight: Float(required=True)
    waste_categories: Text()  # JSON array
    undock_date: Date()


@stowage.command_handler(part_of=WasteContainer)
class ManageWasteContainersHandler:
    @handle(AddWasteContainer)
    def add_waste_container(self, command):
        repo = current_domain.repository_for(WasteContainer)
        if repo.find(command.container_id) is not None:
            raise Conflict({"container_id": [f"Waste container {command.container_id} already exists"]})

        container = WasteContainer.create(
            container_id=command.container_id,
            name=command.name,
            total_volume=command.total_volume,
            max_weight=command.max_weight,
            waste_categories=json.loads(command.waste_categories) if command.waste_categories else None,
            undock_date=command.undock_date,
        )
        repo.add(container)
        record_action(
            ActionType.ADD_WASTE_CONTAINER,
            container_id=str(container.id),
            name=container.name,
            waste_categories=container.categories,
        )

        logger.info("Waste container added", container_id=str(container.id), categories=container.categories)
        return container
