"""Storage container aggregate (CQRS) — a bounded unit of the cargo hold.

A container tracks its used volume and weight against fixed limits, plus
the ordered ids of the items it holds. Insertion order is the physical
access order: items stored first are buried deepest.
"""

import json
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, String, Text

from stowage.domain import stowage
from stowage.errors import CapacityExceeded

# Absorbs float drift from repeated additions and subtractions
CAPACITY_TOLERANCE = 1e-9


class ContainerType(Enum):
    STORAGE = "storage"
    RETURN = "return"


def require_positive_capacity(total_volume, max_weight):
    errors = {}
    if total_volume is None or total_volume <= 0:
        errors["total_volume"] = ["Total volume must be positive"]
    if max_weight is None or max_weight <= 0:
        errors["max_weight"] = ["Max weight must be positive"]
    if errors:
        raise ValidationError(errors)


@stowage.aggregate
class StorageContainer:
    """A storage unit with volume/weight capacity and an accessibility factor."""

    name: String(required=True, max_length=255)
    total_volume: Float(required=True, min_value=0.0)
    used_volume: Float(default=0.0)
    max_weight: Float(required=True, min_value=0.0)
    current_weight: Float(default=0.0)
    item_ids: Text(default="[]")  # JSON array, in access order
    container_type: String(max_length=50, default=ContainerType.STORAGE.value)
    accessibility_factor: Float(min_value=0.0, max_value=1.0, default=0.5)

    @invariant.post
    def volume_must_stay_within_capacity(self):
        if self.used_volume < -CAPACITY_TOLERANCE or self.used_volume > self.total_volume + CAPACITY_TOLERANCE:
            raise ValidationError({"used_volume": ["Used volume must stay between 0 and total volume"]})

    @invariant.post
    def weight_must_stay_within_capacity(self):
        if self.current_weight < -CAPACITY_TOLERANCE or self.current_weight > self.max_weight + CAPACITY_TOLERANCE:
            raise ValidationError({"current_weight": ["Current weight must stay between 0 and max weight"]})

    @classmethod
    def create(cls, container_id, name, total_volume, max_weight, container_type=None, accessibility_factor=None):
        require_positive_capacity(total_volume, max_weight)
        return cls(
            id=container_id,
            name=name,
            total_volume=total_volume,
            used_volume=0.0,
            max_weight=max_weight,
            current_weight=0.0,
            item_ids=json.dumps([]),
            container_type=container_type or ContainerType.STORAGE.value,
            accessibility_factor=0.5 if accessibility_factor is None else accessibility_factor,
        )

    @property
    def contents(self):
        """Ids of stored items, in access order."""
        return json.loads(self.item_ids) if self.item_ids else []

    @property
    def is_storage(self):
        return self.container_type == ContainerType.STORAGE.value

    @property
    def residual_volume(self):
        return self.total_volume - self.used_volume

    @property
    def residual_weight(self):
        return self.max_weight - self.current_weight

    def fits(self, volume, weight):
        return (
            self.used_volume + volume <= self.total_volume + CAPACITY_TOLERANCE
            and self.current_weight + weight <= self.max_weight + CAPACITY_TOLERANCE
        )

    def position_of(self, item_id):
        """Zero-based access position of an item, or None if it is not here."""
        contents = self.contents
        return contents.index(item_id) if item_id in contents else None

    def store(self, item_id, volume, weight):
        """Add an item to the back of the container."""
        if self.used_volume + volume > self.total_volume + CAPACITY_TOLERANCE:
            raise CapacityExceeded({"container_id": [f"Not enough space in container {self.id}"]})
        if self.current_weight + weight > self.max_weight + CAPACITY_TOLERANCE:
            raise CapacityExceeded({"container_id": [f"Weight limit exceeded in container {self.id}"]})

        contents = self.contents
        contents.append(item_id)
        self.item_ids = json.dumps(contents)
        self.used_volume = self.used_volume + volume
        self.current_weight = self.current_weight + weight

    def release(self, item_id, volume, weight):
        """Take an item out of the container."""
        contents = self.contents
        if item_id not in contents:
            raise ValidationError({"item_id": [f"Item {item_id} is not stored in container {self.id}"]})

        contents.remove(item_id)
        self.item_ids = json.dumps(contents)
        self.used_volume = max(0.0, self.used_volume - volume)
        self.current_weight = max(0.0, self.current_weight - weight)

    def volume_utilization(self):
        return (self.used_volume / self.total_volume) * 100 if self.total_volume > 0 else 0.0

    def weight_utilization(self):
        return (self.current_weight / self.max_weight) * 100 if self.max_weight > 0 else 0.0
