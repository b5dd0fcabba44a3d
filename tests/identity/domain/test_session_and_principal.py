"""Tests for the Session aggregate and the Principal value."""

from datetime import UTC, datetime, timedelta

import pytest
from identity.principal import Principal
from identity.session.session import SESSION_LIFETIME, Session
from identity.user.user import User
from shared.errors import AuthorizationError


@pytest.fixture()
def user():
    return User.register(name="Karma", email="karma@example.bt", password="secret123")


class TestSession:
    def test_issue_copies_identity(self, user):
        session = Session.issue(user)
        assert session.user_id == user.id
        assert session.email == "karma@example.bt"
        assert session.role == "BUYER"
        assert len(session.token) >= 32

    def test_tokens_are_unique(self, user):
        assert Session.issue(user).token != Session.issue(user).token

    def test_lifetime(self, user):
        session = Session.issue(user)
        assert session.expires_at - session.issued_at == SESSION_LIFETIME
        assert not session.is_expired()

    def test_expiry(self, user):
        session = Session.issue(user, lifetime=timedelta(minutes=5))
        assert session.is_expired(now=datetime.now(UTC) + timedelta(minutes=6))

    def test_naive_expiry_is_treated_as_utc(self, user):
        session = Session.issue(user)
        session.expires_at = datetime(2000, 1, 1)
        assert session.is_expired()


class TestPrincipal:
    def test_owner_keys_cover_id_and_email(self):
        principal = Principal(id="u-1", email="karma@example.bt", display_name="Karma", role="BUYER")
        assert principal.owner_keys() == {"u-1", "karma@example.bt"}
        assert principal.owns("karma@example.bt")
        assert principal.owns(None, "u-1")
        assert not principal.owns("someone-else")

    def test_seed_account_keys_collapse(self):
        principal = Principal(id="seller1@blocal.bt", email="seller1@blocal.bt", display_name="Test", role="SELLER")
        assert principal.owner_keys() == {"seller1@blocal.bt"}
        assert principal.is_seller
        assert not principal.is_admin

    def test_require_role(self):
        principal = Principal(id="u-1", email="karma@example.bt", display_name="Karma", role="BUYER")
        principal.require_role("BUYER", "SELLER")
        with pytest.raises(AuthorizationError):
            principal.require_role("ADMIN")

    def test_to_dict(self):
        principal = Principal(id="u-1", email="karma@example.bt", display_name="Karma", role="BUYER")
        assert principal.to_dict() == {"id": "u-1", "email": "karma@example.bt", "name": "Karma", "role": "BUYER"}
