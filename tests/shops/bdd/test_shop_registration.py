"""BDD tests for shop registration through the command handler."""

import json

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when
from shared.errors import ConflictError
from shops.shop.registration import RegisterShop

scenarios("features/shop_registration.feature")

ADDRESS = {"street": "Norzin Lam", "city": "Thimphu", "state": "Thimphu", "zip_code": "11001"}


def _register(owner, error, name="Paro Greens", address=None, owner_id=None):
    command = RegisterShop(
        owner_id=owner_id or owner,
        owner_email=owner,
        owner_role="SELLER",
        name=name,
        description="Fresh vegetables from Paro valley",
        address=json.dumps(address or ADDRESS),
    )
    try:
        current_domain.process(command, asynchronous=False)
    except (ValidationError, ConflictError) as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an existing shop owned by "{owner}"'))
def existing_shop(owner, error):
    _register(owner, error)
    assert error["exc"] is None


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{owner}" registers a shop named "{name}"'))
def register_named(owner, name, error):
    # A generated id alongside the same e-mail still counts as the same owner
    _register(owner, error, name=name, owner_id="generated-id")


@when(parsers.cfparse('"{owner}" registers a shop without a city'))
def register_without_city(owner, error):
    _register(owner, error, address={**ADDRESS, "city": ""})


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the error mentions "{field}"'))
def error_mentions(field, error):
    assert field in error["exc"].messages


@then("the registration conflicts")
def registration_conflicts(error):
    assert isinstance(error["exc"], ConflictError)
