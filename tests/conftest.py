import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def _all_domains():
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering
    from shops.domain import shops

    return identity, catalogue, ordering, shops


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Every domain is configured and initialized once; operations that span
    contexts (shop approval, cart snapshots) need all of them ready.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from shared.store import configure_store

    for domain in _all_domains():
        configure_store(domain)
        domain.init()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from shared.store import drop_db, setup_db

    for domain in _all_domains():
        setup_db(domain)

    yield

    for domain in _all_domains():
        drop_db(domain)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from notifications.channel import reset_channels
    from payments.gateway import reset_gateway
    from shared.store import reset_data

    for domain in _all_domains():
        reset_data(domain)

    reset_gateway()
    reset_channels()


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_account():
    """Factory: create a user, sign them in, and return ``(token, principal)``."""
    from identity.domain import identity
    from identity.principal import resolve_principal
    from identity.session.issuance import SignIn
    from identity.user.user import User

    counter = {"n": 0}

    def _make(role="BUYER", email=None, name="Test User", password="secret123", user_id=None):
        counter["n"] += 1
        email = email or f"{role.lower()}{counter['n']}@example.bt"
        with identity.domain_context():
            user = User.register(name=name, email=email, password=password, role=role, user_id=user_id)
            identity.repository_for(User).add(user)
            token = identity.process(SignIn(email=email, password=password), asynchronous=False)
        return token, resolve_principal(token)

    return _make


@pytest.fixture()
def buyer(make_account):
    return make_account("BUYER", name="Karma Buyer")


@pytest.fixture()
def seller(make_account):
    return make_account("SELLER", name="Sonam Seller")


@pytest.fixture()
def admin(make_account):
    return make_account("ADMIN", name="Admin User")


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------
@pytest.fixture()
def fake_email():
    from notifications.channel import EMAIL, get_channel

    return get_channel(EMAIL)


@pytest.fixture()
def fake_gateway():
    from payments.gateway import get_gateway

    return get_gateway()


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def client_for():
    """Factory: a TestClient over the given routers with the JSON error handlers installed."""
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from shared.errors import register_exception_handlers

    def _client(*routers):
        app = FastAPI()
        register_exception_handlers(app)
        for router in routers:
            app.include_router(router)
        return TestClient(app)

    return _client


@pytest.fixture()
def auth():
    def _headers(token):
        return {"Authorization": f"Bearer {token}"}

    return _headers
