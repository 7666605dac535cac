"""Waste container aggregate (CQRS) — holds discarded items until undocking.

Waste containers do not keep an item list of their own: membership is derived
from items whose location points at ``waste_<container id>``.
"""

import json

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Date, Float, String, Text

from stowage.container.container import CAPACITY_TOLERANCE, require_positive_capacity
from stowage.domain import stowage
from stowage.errors import CapacityExceeded

# Accepts items of any category
WILDCARD_CATEGORY = "general"


@stowage.aggregate
class WasteContainer:
    """A disposal unit bound to a set of accepted waste categories."""

    name: String(required=True, max_length=255)
    total_volume: Float(required=True, min_value=0.0)
    used_volume: Float(default=0.0)
    max_weight: Float(required=True, min_value=0.0)
    current_weight: Float(default=0.0)
    waste_categories: Text(default='["general"]')
    undock_date: Date()

    @invariant.post
    def volume_must_stay_within_capacity(self):
        if self.used_volume < -CAPACITY_TOLERANCE or self.used_volume > self.total_volume + CAPACITY_TOLERANCE:
            raise ValidationError({"used_volume": ["Used volume must stay between 0 and total volume"]})

    @invariant.post
    def weight_must_stay_within_capacity(self):
        if self.current_weight < -CAPACITY_TOLERANCE or self.current_weight > self.max_weight + CAPACITY_TOLERANCE:
            raise ValidationError({"current_weight": ["Current weight must stay between 0 and max weight"]})

    @classmethod
    def create(cls, container_id, name, total_volume, max_weight, waste_categories=None, undock_date=None):
        require_positive_capacity(total_volume, max_weight)
        return cls(
            id=container_id,
            name=name,
            total_volume=total_volume,
            used_volume=0.0,
            max_weight=max_weight,
            current_weight=0.0,
            waste_categories=json.dumps(list(waste_categories) if waste_categories else [WILDCARD_CATEGORY]),
            undock_date=undock_date,
        )

    @property
    def categories(self):
        return json.loads(self.waste_categories) if self.waste_categories else [WILDCARD_CATEGORY]

    @property
    def residual_volume(self):
        return self.total_volume - self.used_volume

    @property
    def residual_weight(self):
        return self.max_weight - self.current_weight

    def accepts(self, category):
        categories = self.categories
        return category in categories or WILDCARD_CATEGORY in categories

    def fits(self, volume, weight):
        return (
            self.used_volume + volume <= self.total_volume + CAPACITY_TOLERANCE
            and self.current_weight + weight <= self.max_weight + CAPACITY_TOLERANCE
        )

    def receive(self, volume, weight):
        if not self.fits(volume, weight):
            raise CapacityExceeded({"waste_container_id": [f"Waste container {self.id} is full"]})
        self.used_volume = self.used_volume + volume
        self.current_weight = self.current_weight + weight

    def schedule_undock(self, undock_date):
        self.undock_date = undock_date

    def volume_utilization(self):
        return (self.used_volume / self.total_volume) * 100 if self.total_volume > 0 else 0.0

    def weight_utilization(self):
        return (self.current_weight / self.max_weight) * 100 if self.max_weight > 0 else 0.0
