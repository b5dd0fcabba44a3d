import pytest


@pytest.fixture(autouse=True)
def _ctx():
    """Push the shops domain context for each test."""
    from shops.domain import shops

    with shops.domain_context():
        yield
