"""Shared BDD fixtures and step definitions for the Stowage domain."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from stowage.container.container import StorageContainer
from stowage.container.management import AddContainer
from stowage.item.item import Item, waste_location
from stowage.utils.locking import process_command
from stowage.utils.sample_data import seed
from stowage.waste.disposal import MarkAsWaste
from stowage.waste.waste_container import WasteContainer


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the sample hold")
def sample_hold():
    seed()


@given(parsers.parse('an empty storage container "{container_id}"'))
def empty_container(container_id):
    process_command(AddContainer(container_id=container_id, name=container_id, total_volume=20.0, max_weight=20.0))


@given(parsers.parse('item "{item_id}" has been marked as waste'))
def wasted_item(item_id):
    process_command(MarkAsWaste(item_id=item_id))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse('item "{item_id}" is located in "{container_id}"'))
def item_located_in(item_id, container_id):
    assert current_domain.repository_for(Item).get(item_id).location == container_id
    assert item_id in current_domain.repository_for(StorageContainer).get(container_id).contents


@then(parsers.parse('item "{item_id}" is waste in "{waste_container_id}"'))
def item_is_waste_in(item_id, waste_container_id):
    item = current_domain.repository_for(Item).get(item_id)
    assert not item.is_active
    assert item.location == waste_location(waste_container_id)


@then(parsers.parse('container "{container_id}" has used volume {volume:g}'))
def container_used_volume(container_id, volume):
    container = current_domain.repository_for(StorageContainer).get(container_id)
    assert container.used_volume == pytest.approx(volume)


@then(parsers.parse('waste container "{container_id}" has used volume {volume:g}'))
def waste_container_used_volume(container_id, volume):
    container = current_domain.repository_for(WasteContainer).get(container_id)
    assert container.used_volume == pytest.approx(volume)


@then(parsers.parse('item "{item_id}" no longer exists'))
def item_gone(item_id):
    with pytest.raises(ObjectNotFoundError):
        current_domain.repository_for(Item).get(item_id)


@then(parsers.parse('waste container "{container_id}" no longer exists'))
def waste_container_gone(container_id):
    with pytest.raises(ObjectNotFoundError):
        current_domain.repository_for(WasteContainer).get(container_id)


@then(parsers.parse("the request is rejected with {error_type}"))
def rejected_with(error, error_type):
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == error_type
    assert isinstance(error["exc"], ValidationError)
