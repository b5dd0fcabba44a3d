import pytest


@pytest.fixture(autouse=True)
def _ctx():
    """Push the ordering domain context for each test."""
    from ordering.domain import ordering

    with ordering.domain_context():
        yield
