"""Session aggregate: an opaque token issued at sign-in."""

import os
import secrets
from datetime import UTC, datetime, timedelta

from protean.fields import DateTime, Identifier, String

from identity.domain import identity
from identity.user.user import Role, normalize_role

SESSION_LIFETIME = timedelta(days=30)
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "fm_session")


def _aware(value: datetime) -> datetime:
    # SQL stores hand back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=UTC)


@identity.aggregate
class Session:
    token: String(identifier=True, required=True, max_length=64)
    user_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    name: String(max_length=100)
    role: String(choices=Role, required=True)
    issued_at: DateTime()
    expires_at: DateTime()

    @classmethod
    def issue(cls, user, lifetime: timedelta = SESSION_LIFETIME):
        now = datetime.now(UTC)
        return cls(
            token=secrets.token_urlsafe(32),
            user_id=str(user.id),
            email=user.email,
            name=user.name,
            role=normalize_role(user.role),
            issued_at=now,
            expires_at=now + lifetime,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(UTC)
        return self.expires_at is not None and _aware(self.expires_at) <= now


@identity.repository(part_of=Session)
class SessionRepository:
    def for_user(self, user_id: str) -> list[Session]:
        return self._dao.query.filter(user_id=user_id).limit(None).all().items
