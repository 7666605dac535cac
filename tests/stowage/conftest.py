import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def stowage_bed():
    from stowage.domain import stowage

    bed = DomainFixture(stowage)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(stowage_bed):
    with stowage_bed.domain_context():
        yield


@pytest.fixture()
def hold():
    """The sample hold: two storage containers, one waste container, two items."""
    from stowage.utils.sample_data import seed

    seed()
