"""Repository for the Item aggregate."""

from stowage.domain import stowage
from stowage.item.item import Item, ItemStatus, waste_location
from stowage.utils.query import fetch_all


@stowage.repository(part_of=Item)
class ItemRepository:
    def find(self, item_id) -> Item | None:
        """Item by id, or None when it does not exist."""
        items = fetch_all(self._dao.query.filter(id=item_id))
        return items[0] if items else None

    def find_all(self) -> list[Item]:
        return fetch_all(self._dao.query)

    def find_active(self) -> list[Item]:
        return fetch_all(self._dao.query.filter(status=ItemStatus.ACTIVE.value))

    def find_in_waste_container(self, waste_container_id) -> list[Item]:
        """Waste items held by the waste container. Storage ids may look like waste locations."""
        return fetch_all(
            self._dao.query.filter(location=waste_location(waste_container_id), status=ItemStatus.WASTE.value)
        )

    def remove(self, item: Item):
        self._dao.delete(item)
