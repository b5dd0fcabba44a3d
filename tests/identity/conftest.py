import pytest


@pytest.fixture(autouse=True)
def _ctx():
    """Push the identity domain context for each test."""
    from identity.domain import identity

    with identity.domain_context():
        yield
