"""Shared BDD fixtures and step definitions for the Shops domain."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from shops.shop.shop import Shop

ADDRESS = {"street": "Norzin Lam", "city": "Thimphu", "state": "Thimphu", "zip_code": "11001"}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a shop registered by "{owner}"'), target_fixture="shop")
def registered_shop(owner):
    shop = Shop.register(
        owner_id=owner,
        owner_email=owner,
        name="Paro Greens",
        description="Fresh vegetables from Paro valley",
        address=dict(ADDRESS),
    )
    shop._events.clear()
    return shop


@given(parsers.cfparse('the shop has been "{status}"'))
def shop_has_been(shop, status):
    shop.set_status(status)
    shop._events.clear()


@given("the owner deletes the shop")
def owner_deletes_shop(shop):
    shop.soft_delete(deleted_by=shop.owner_email)
    shop._events.clear()


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse('the shop status is "{status}"'))
def shop_status_is(shop, status):
    assert shop.status == status
