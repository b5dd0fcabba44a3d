"""Seller promotion — applied when an admin approves the user's shop."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from identity.domain import identity, logger
from identity.session.session import Session
from identity.user.user import User


@identity.command(part_of="User")
class PromoteToSeller:
    user_id: Identifier(required=True)


@identity.command_handler(part_of=User)
class PromoteToSellerHandler:
    @handle(PromoteToSeller)
    def promote_to_seller(self, command):
        repo = current_domain.repository_for(User)
        try:
            user = repo.get(command.user_id)
        except ObjectNotFoundError:
            user = repo.find_by_email(str(command.user_id))
        if user is None:
            logger.warning("Promotion skipped, user not found", user_id=str(command.user_id))
            return False

        if not user.promote_to_seller():
            return False
        repo.add(user)

        # Live sessions carry the role, so they follow the promotion
        session_repo = current_domain.repository_for(Session)
        for session in session_repo.for_user(str(user.id)):
            session.role = user.role
            session_repo.add(session)

        logger.info("User promoted to seller", user_id=str(user.id))
        return True
