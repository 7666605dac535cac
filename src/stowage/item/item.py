"""Item aggregate (CQRS) — a single piece of cargo held in the stowage.

An active item lives in exactly one storage container; its ``location`` is the
container id. Once marked as waste the item moves to a waste container and
its location switches to the waste namespace (``waste_<container id>``).
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Date, DateTime, Float, Integer, String

from stowage.domain import stowage

DEFAULT_CATEGORY = "general"
DEFAULT_PRIORITY = 3
WASTE_LOCATION_PREFIX = "waste_"


class ItemStatus(Enum):
    ACTIVE = "active"
    WASTE = "waste"


def waste_location(waste_container_id):
    """Location value for an item held by the given waste container."""
    return f"{WASTE_LOCATION_PREFIX}{waste_container_id}"


def waste_container_id_of(location):
    """Inverse of :func:`waste_location`; None for storage locations."""
    if location and location.startswith(WASTE_LOCATION_PREFIX):
        return location[len(WASTE_LOCATION_PREFIX) :]
    return None


def require_positive_dimensions(volume, weight):
    errors = {}
    if volume is None or volume <= 0:
        errors["volume"] = ["Volume must be positive"]
    if weight is None or weight <= 0:
        errors["weight"] = ["Weight must be positive"]
    if errors:
        raise ValidationError(errors)


@stowage.aggregate
class Item:
    """A piece of cargo with scalar volume and weight."""

    name: String(required=True, max_length=255)
    category: String(max_length=100, default=DEFAULT_CATEGORY)
    volume: Float(required=True)
    weight: Float(required=True)
    priority: Integer(min_value=1, max_value=5, default=DEFAULT_PRIORITY)
    expiration_date: Date()
    status: String(choices=ItemStatus, default=ItemStatus.ACTIVE.value)
    location: String(required=True, max_length=255)
    arrival_date: DateTime()
    last_accessed: DateTime()

    @classmethod
    def create(
        cls,
        item_id,
        name,
        volume,
        weight,
        location,
        category=None,
        priority=None,
        expiration_date=None,
    ):
        """Create an active item stored at ``location``."""
        require_positive_dimensions(volume, weight)

        now = datetime.now(UTC)
        return cls(
            id=item_id,
            name=name,
            category=category or DEFAULT_CATEGORY,
            volume=volume,
            weight=weight,
            priority=priority if priority is not None else DEFAULT_PRIORITY,
            expiration_date=expiration_date,
            status=ItemStatus.ACTIVE.value,
            location=location,
            arrival_date=now,
            last_accessed=now,
        )

    @property
    def is_active(self):
        return self.status == ItemStatus.ACTIVE.value

    def touch(self):
        """Record an access to the item."""
        self.last_accessed = datetime.now(UTC)

    def relocate(self, container_id):
        """Point the item at another storage container."""
        if not self.is_active:
            raise ValidationError({"status": ["Only active items can be relocated"]})
        self.location = container_id
        self.touch()

    def discard(self, waste_container_id):
        """Move the item into the waste lifecycle."""
        if not self.is_active:
            raise ValidationError({"status": [f"Item {self.id} is already marked as waste"]})
        self.status = ItemStatus.WASTE.value
        self.location = waste_location(waste_container_id)

    def update_details(self, name=None, priority=None, expiration_date=None, category=None):
        if name is not None:
            self.name = name
        if priority is not None:
            self.priority = priority
        if expiration_date is not None:
            self.expiration_date = expiration_date
        if category is not None:
            self.category = category
        self.touch()

    def days_to_expiry(self, today):
        """Whole days until expiration, negative once expired, None if it never expires."""
        if self.expiration_date is None:
            return None
        return (self.expiration_date - today).days

    def to_summary(self):
        return {
            "item_id": str(self.id),
            "name": self.name,
            "category": self.category,
            "volume": self.volume,
            "weight": self.weight,
            "priority": self.priority,
            "status": self.status,
            "location": self.location,
            "expiration_date": self.expiration_date.isoformat() if self.expiration_date else None,
            "arrival_date": self.arrival_date.isoformat() if self.arrival_date else None,
            "last_accessed": self.last_accessed.isoformat() if self.last_accessed else None,
        }
