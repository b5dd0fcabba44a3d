"""User registration — command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity, logger
from identity.user.user import Role, User, normalize_role
from shared.errors import AuthorizationError, ConflictError


@identity.command(part_of="User")
class RegisterUser:
    """Create an account. ``role`` defaults to BUYER."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)
    role: String(max_length=20)


@identity.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            logger.info("Registration rejected, e-mail in use", email=command.email)
            raise ConflictError("User already exists")

        role = normalize_role(command.role)
        if role == Role.ADMIN.value:
            raise AuthorizationError("Admin accounts cannot be self-registered")

        user = User.register(
            name=command.name,
            email=command.email,
            password=command.password,
            role=role,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)
