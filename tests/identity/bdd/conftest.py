"""Shared BDD fixtures and step definitions for the Identity domain."""

import pytest
from identity.principal import resolve_principal
from identity.session.issuance import SignIn
from identity.user.user import User
from protean import current_domain
from pytest_bdd import given, parsers, then, when
from shared.errors import AuthenticationError


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@pytest.fixture()
def session():
    """The token of the current scenario's session."""
    return {"token": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a registered "{role}" account "{email}" with password "{password}"'))
def registered_account(role, email, password):
    user = User.register(name="Dorji", email=email, password=password, role=role)
    current_domain.repository_for(User).add(user)


# ---------------------------------------------------------------------------
# When steps (shared)
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the user signs in as "{email}" with password "{password}"'))
@when(parsers.cfparse('the user signs in as "{email}" with password "{password}"'))
def user_signs_in(email, password, session, error):
    try:
        session["token"] = current_domain.process(SignIn(email=email, password=password), asynchronous=False)
    except AuthenticationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the principal role is "{role}"'))
def principal_role_is(session, role):
    assert resolve_principal(session["token"]).role == role


@then(parsers.cfparse('the principal id is "{principal_id}"'))
def principal_id_is(session, principal_id):
    assert resolve_principal(session["token"]).id == principal_id
