"""Error taxonomy for storage operations.

Rule violations extend Protean's ``ValidationError`` so they carry the same
field → messages payload as ordinary input validation, while staying
distinguishable by type. Unknown ids surface as Protean's
``ObjectNotFoundError`` straight from ``repository.get()``.
"""

from protean.exceptions import ValidationError


class Conflict(ValidationError):
    """An item or container with the same id already exists."""


class CapacityExceeded(ValidationError):
    """An explicit target cannot absorb the requested volume or weight."""


class NoCapacity(ValidationError):
    """No eligible container exists and no rearrangement would help."""


class NoWasteContainer(NoCapacity):
    """No waste container accepts the item's category with room to spare."""


class InvalidMove(ValidationError):
    """A rearrangement move references an item or container that is stale."""


class StoreFailure(Exception):
    """The persistence layer failed; nothing from the operation was saved."""

    def __init__(self, message, operation=None):
        super().__init__(message)
        self.operation = operation
