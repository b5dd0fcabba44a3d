import pytest


@pytest.fixture(autouse=True)
def _ctx():
    """Push the catalogue domain context for each test."""
    from catalogue.domain import catalogue

    with catalogue.domain_context():
        yield
