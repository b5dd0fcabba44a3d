"""Sign-in and sign-out — commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity, logger
from identity.session.session import Session
from identity.user.user import User
from shared.errors import AuthenticationError


@identity.command(part_of="Session")
class SignIn:
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)


@identity.command(part_of="Session")
class SignOut:
    token: String(required=True, max_length=64)


@identity.command_handler(part_of=Session)
class SessionHandler:
    @handle(SignIn)
    def sign_in(self, command):
        user = current_domain.repository_for(User).find_by_email(command.email)
        if user is None or not user.check_password(command.password):
            logger.info("Sign-in failed", email=command.email)
            raise AuthenticationError("Invalid email or password")

        session = Session.issue(user)
        current_domain.repository_for(Session).add(session)
        logger.debug("Session issued", user_id=str(user.id))
        return session.token

    @handle(SignOut)
    def sign_out(self, command):
        repo = current_domain.repository_for(Session)
        try:
            session = repo.get(command.token)
        except ObjectNotFoundError:
            return None
        repo._dao.delete(session)
        logger.debug("Session revoked", user_id=str(session.user_id))
        return None
