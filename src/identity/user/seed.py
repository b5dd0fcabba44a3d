"""Built-in accounts available on every fresh store.

Each seed account uses its e-mail address as its identifier.
"""

from identity.domain import identity, logger
from identity.user.user import User

SEED_ACCOUNTS = [
    {"email": "admin@blocal.bt", "password": "admin123", "name": "Admin User", "role": "ADMIN"},
    {"email": "seller1@blocal.bt", "password": "seller123", "name": "Test Seller", "role": "SELLER"},
    {"email": "buyer1@blocal.bt", "password": "buyer123", "name": "Test Buyer", "role": "BUYER"},
]


def ensure_seed_accounts() -> list[str]:
    """Create any missing seed account. Returns the e-mails that were created."""
    created = []
    with identity.domain_context():
        repo = identity.repository_for(User)
        for account in SEED_ACCOUNTS:
            if repo.find_by_email(account["email"]) is not None:
                continue
            user = User.register(
                name=account["name"],
                email=account["email"],
                password=account["password"],
                role=account["role"],
                user_id=account["email"],
            )
            repo.add(user)
            created.append(account["email"])

    if created:
        logger.info("Seed accounts created", accounts=created)
    return created
