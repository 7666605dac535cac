"""Rearrangement — applying a plan of moves between storage containers.

The whole batch is validated against the projected state before anything
changes, so a plan either applies completely or not at all.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Text
from protean.utils.globals import current_domain

from stowage.action_log.entry import ActionType, record_action
from stowage.container.container import CAPACITY_TOLERANCE, StorageContainer
from stowage.domain import stowage
from stowage.errors import CapacityExceeded, InvalidMove
from stowage.item.item import Item
from stowage.utils.logging import get_logger

logger = get_logger(__name__)


@stowage.command(part_of="StorageContainer")
class ApplyRearrangement:
    moves: Text(required=True)  # JSON array of moves


def _move_field(move, key, index):
    if not isinstance(move, dict):
        raise ValidationError({"rearrangement_plan": [f"Move {index} must be an object"]})
    value = move.get(key)
    if not value:
        raise ValidationError({"rearrangement_plan": [f"Move {index} is missing '{key}'"]})
    return str(value)


@stowage.command_handler(part_of=StorageContainer)
class RearrangementHandler:
    @handle(ApplyRearrangement)
    def apply_rearrangement(self, command):
        moves = json.loads(command.moves) if command.moves else []
        if not moves or not isinstance(moves, list):
            raise ValidationError({"rearrangement_plan": ["Rearrangement plan must be a non-empty list of moves"]})

        item_repo = current_domain.repository_for(Item)
        container_repo = current_domain.repository_for(StorageContainer)

        items = {}
        containers = {}
        projected = {}
        locations = {}
        steps = []

        for index, move in enumerate(moves):
            item_id = _move_field(move, "item_id", index)
            from_id = _move_field(move, "from_container", index)
            to_id = _move_field(move, "to_container", index)

            if item_id not in items:
                item = item_repo.find(item_id)
                if item is None or not item.is_active:
                    raise InvalidMove({"rearrangement_plan": [f"Item {item_id} is not an active item"]})
                items[item_id] = item
                locations[item_id] = item.location
            for container_id in (from_id, to_id):
                if container_id not in containers:
                    container = container_repo.find(container_id)
                    if container is None or not container.is_storage:
                        raise InvalidMove(
                            {"rearrangement_plan": [f"Container {container_id} is not a storage container"]}
                        )
                    containers[container_id] = container
                    projected[container_id] = [container.used_volume, container.current_weight]

            if locations[item_id] != from_id:
                raise InvalidMove({"rearrangement_plan": [f"Item {item_id} is not in container {from_id}"]})
            if from_id == to_id:
                raise InvalidMove({"rearrangement_plan": [f"Item {item_id} is already in container {to_id}"]})

            item = items[item_id]
            destination = containers[to_id]
            used, current = projected[to_id]
            if used + item.volume > destination.total_volume + CAPACITY_TOLERANCE:
                raise CapacityExceeded({"rearrangement_plan": [f"Not enough space in container {to_id}"]})
            if current + item.weight > destination.max_weight + CAPACITY_TOLERANCE:
                raise CapacityExceeded({"rearrangement_plan": [f"Weight limit exceeded in container {to_id}"]})

            projected[to_id] = [used + item.volume, current + item.weight]
            projected[from_id] = [projected[from_id][0] - item.volume, projected[from_id][1] - item.weight]
            locations[item_id] = to_id
            steps.append((item, containers[from_id], destination))

        applied = []
        for item, source, destination in steps:
            source.release(str(item.id), item.volume, item.weight)
            destination.store(str(item.id), item.volume, item.weight)
            item.relocate(str(destination.id))
            applied.append(
                {
                    "item_id": str(item.id),
                    "from_container": str(source.id),
                    "to_container": str(destination.id),
                }
            )

        for item in items.values():
            item_repo.add(item)
        for container in containers.values():
            container_repo.add(container)
        record_action(ActionType.REARRANGE_ITEMS, rearrangement_plan=applied, moves=len(applied))

        logger.info("Rearrangement applied", moves=len(applied))
        return applied
