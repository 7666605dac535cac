"""Sample hold used by ``manage.py seed`` and by local demos.

Seeding goes through the regular commands, so every record is validated and
logged exactly as it would be through the API.
"""

import json
from datetime import UTC, datetime, timedelta

from stowage.container.management import AddContainer
from stowage.item.placement import PlaceItem
from stowage.utils.locking import process_command
from stowage.utils.logging import get_logger
from stowage.waste.management import AddWasteContainer

logger = get_logger(__name__)

CONTAINERS = [
    {
        "container_id": "storage_001",
        "name": "Main Storage A",
        "total_volume": 100.0,
        "max_weight": 200.0,
        "container_type": "storage",
        "accessibility_factor": 0.9,
    },
    {
        "container_id": "storage_002",
        "name": "Medical Storage",
        "total_volume": 50.0,
        "max_weight": 100.0,
        "container_type": "storage",
        "accessibility_factor": 0.8,
    },
]

WASTE_CONTAINERS = [
    {
        "container_id": "waste_001",
        "name": "General Waste",
        "total_volume": 30.0,
        "max_weight": 50.0,
        "waste_categories": ["general", "organic"],
        "undock_in_days": 30,
    },
]

ITEMS = [
    {
        "item_id": "item_001",
        "name": "Food Packet A",
        "category": "food",
        "volume": 0.5,
        "weight": 0.3,
        "priority": 4,
        "expires_in_days": 90,
        "container_id": "storage_001",
    },
    {
        "item_id": "item_002",
        "name": "Medical Kit",
        "category": "medical",
        "volume": 2.0,
        "weight": 1.5,
        "priority": 5,
        "expires_in_days": 180,
        "container_id": "storage_002",
    },
]


def seed():
    """Load the sample containers and items into the current domain."""
    today = datetime.now(UTC).date()

    for record in CONTAINERS:
        process_command(AddContainer(**record))

    for record in WASTE_CONTAINERS:
        process_command(
            AddWasteContainer(
                container_id=record["container_id"],
                name=record["name"],
                total_volume=record["total_volume"],
                max_weight=record["max_weight"],
                waste_categories=json.dumps(record["waste_categories"]),
                undock_date=today + timedelta(days=record["undock_in_days"]),
            )
        )

    for record in ITEMS:
        fields = {key: value for key, value in record.items() if key != "expires_in_days"}
        process_command(PlaceItem(**fields, expiration_date=today + timedelta(days=record["expires_in_days"])))

    logger.info(
        "Sample data loaded",
        containers=len(CONTAINERS),
        waste_containers=len(WASTE_CONTAINERS),
        items=len(ITEMS),
    )
