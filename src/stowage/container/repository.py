"""Repository for the StorageContainer aggregate."""

from stowage.container.container import StorageContainer
from stowage.domain import stowage
from stowage.utils.query import fetch_all


@stowage.repository(part_of=StorageContainer)
class StorageContainerRepository:
    def find(self, container_id) -> StorageContainer | None:
        containers = fetch_all(self._dao.query.filter(id=container_id))
        return containers[0] if containers else None

    def find_all(self) -> list[StorageContainer]:
        """All containers, ordered by id."""
        return sorted(fetch_all(self._dao.query), key=lambda c: str(c.id))
