"""Repository for the WasteContainer aggregate."""

from stowage.domain import stowage
from stowage.utils.query import fetch_all
from stowage.waste.waste_container import WasteContainer


@stowage.repository(part_of=WasteContainer)
class WasteContainerRepository:
    def find(self, container_id) -> WasteContainer | None:
        containers = fetch_all(self._dao.query.filter(id=container_id))
        return containers[0] if containers else None

    def find_all(self) -> list[WasteContainer]:
        """All waste containers, ordered by id."""
        return sorted(fetch_all(self._dao.query), key=lambda c: str(c.id))

    def remove(self, container: WasteContainer):
        self._dao.delete(container)
