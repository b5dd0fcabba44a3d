"""FastAPI dependencies that resolve the caller's principal.

The session token travels in the ``fm_session`` cookie; API clients that
cannot hold cookies may send it as ``Authorization: Bearer <token>``.
"""

from fastapi import Depends, Request

from identity.principal import Principal, resolve_principal
from identity.session.session import SESSION_COOKIE_NAME


def session_token(request: Request) -> str | None:
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if token:
        return token
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


def get_principal(token: str | None = Depends(session_token)) -> Principal:
    return resolve_principal(token)


def require_role(*roles: str):
    """Dependency factory: the caller must hold one of ``roles``."""

    def dependency(principal: Principal = Depends(get_principal)) -> Principal:
        principal.require_role(*roles)
        return principal

    return dependency
