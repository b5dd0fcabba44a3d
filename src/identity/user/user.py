"""User aggregate: an account that can sign in with an e-mail and password."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from identity.domain import identity
from identity.shared.password import hash_password, verify_password


class Role(Enum):
    BUYER = "BUYER"
    SELLER = "SELLER"
    ADMIN = "ADMIN"


def normalize_role(value: str | None) -> str:
    """Trim and upper-case a role name; a missing role means BUYER."""
    role = (value or Role.BUYER.value).strip().upper() or Role.BUYER.value
    if role not in {r.value for r in Role}:
        raise ValidationError({"role": [f"Unknown role '{value}'"]})
    return role


@identity.aggregate
class User:
    """A marketplace account.

    Seed accounts are created with their e-mail as identifier, so code that
    matches ownership must accept either the id or the e-mail.
    """

    email: String(required=True, max_length=254, unique=True)
    name: String(required=True, max_length=100)
    password_hash: String(max_length=255)
    role: String(choices=Role, default=Role.BUYER.value)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_look_like_an_address(self):
        email = self.email or ""
        local, _, domain_part = email.partition("@")
        if not local or "." not in domain_part or " " in email:
            raise ValidationError({"email": ["Invalid email address"]})

    @classmethod
    def register(cls, name, email, password, role=None, user_id=None):
        from identity.user.events import UserRegistered

        if not password:
            raise ValidationError({"password": ["Password is required"]})

        now = datetime.now(UTC)
        attributes = {
            "email": email.strip().lower(),
            "name": name.strip(),
            "password_hash": hash_password(password),
            "role": normalize_role(role),
            "created_at": now,
            "updated_at": now,
        }
        if user_id is not None:
            attributes["id"] = user_id

        user = cls(**attributes)
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=user.email,
                name=user.name,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    def check_password(self, password: str) -> bool:
        return bool(self.is_active) and verify_password(password, self.password_hash)

    def promote_to_seller(self) -> bool:
        """Make this account a SELLER. Admins and existing sellers are unchanged."""
        from identity.user.events import UserPromoted

        if self.role != Role.BUYER.value:
            return False

        previous = self.role
        now = datetime.now(UTC)
        self.role = Role.SELLER.value
        self.updated_at = now
        self.raise_(
            UserPromoted(
                user_id=self.id,
                previous_role=previous,
                new_role=self.role,
                promoted_at=now,
            )
        )
        return True


@identity.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        users = self._dao.query.filter(email=email.strip().lower()).limit(None).all().items
        return users[0] if users else None
