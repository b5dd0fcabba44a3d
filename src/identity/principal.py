"""Principal resolution.

``resolve_principal`` is the only place that turns a session token into a
caller identity. Ownership checks elsewhere compare against
``Principal.owner_keys()`` so the id-or-email quirk of seed accounts stays
contained here.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError

from identity.domain import identity, logger
from identity.user.user import Role
from shared.errors import AuthenticationError, AuthorizationError


@dataclass(frozen=True)
class Principal:
    id: str
    email: str
    display_name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    @property
    def is_seller(self) -> bool:
        return self.role == Role.SELLER.value

    def owner_keys(self) -> set[str]:
        """Every key under which this principal may own a record."""
        return {key for key in (self.id, self.email) if key}

    def owns(self, *keys) -> bool:
        return any(key is not None and str(key) in self.owner_keys() for key in keys)

    def require_role(self, *roles: str) -> None:
        if self.role not in roles:
            raise AuthorizationError(f"Requires role {' or '.join(roles)}")

    def to_dict(self) -> dict:
        return {"id": self.id, "email": self.email, "name": self.display_name, "role": self.role}


def resolve_principal(token: str | None) -> Principal:
    """Resolve a session token to its principal.

    Raises AuthenticationError for a missing, unknown or expired token.
    """
    from identity.session.session import Session

    if not token:
        raise AuthenticationError("Not authenticated")

    with identity.domain_context():
        repo = identity.repository_for(Session)
        try:
            session = repo.get(token)
        except ObjectNotFoundError:
            raise AuthenticationError("Invalid session") from None

        if session.is_expired():
            repo._dao.delete(session)
            logger.info("Expired session removed", user_id=str(session.user_id))
            raise AuthenticationError("Session expired")

        return Principal(
            id=str(session.user_id),
            email=session.email,
            display_name=session.name or session.email,
            role=session.role,
        )
