"""Shop registration — command and handler."""

import json

from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from shared.errors import AuthorizationError, ConflictError
from shops.domain import logger, shops
from shops.shop.shop import Shop

# Buyers register a shop to become sellers; admins never own shops
REGISTERING_ROLES = ("BUYER", "SELLER")


@shops.command(part_of="Shop")
class RegisterShop:
    owner_id = String(required=True, max_length=254)
    owner_email = String(max_length=254)
    owner_name = String(max_length=100)
    owner_role = String(required=True, max_length=20)
    name = String(max_length=100)
    description = String(max_length=1000)
    address = Text()  # JSON: {street, city, state, zip_code}
    phone = String(max_length=20)


@shops.command_handler(part_of=Shop)
class RegisterShopHandler:
    @handle(RegisterShop)
    def register_shop(self, command):
        if command.owner_role not in REGISTERING_ROLES:
            raise AuthorizationError("Only buyers and sellers can register a shop")

        repo = current_domain.repository_for(Shop)
        if repo.owned_by({command.owner_id, command.owner_email}):
            raise ConflictError("You already have a shop")

        shop = Shop.register(
            owner_id=command.owner_id,
            name=command.name,
            description=command.description,
            address=json.loads(command.address) if command.address else None,
            owner_email=command.owner_email,
            owner_name=command.owner_name,
            phone=command.phone,
        )
        repo.add(shop)
        logger.info("Shop registered", shop_id=str(shop.id), owner_id=command.owner_id)
        return str(shop.id)
