"""Owner-side shop management — profile updates and soft deletion."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from shops.domain import logger, shops
from shops.shop.shop import Shop


@shops.command(part_of="Shop")
class UpdateShopProfile:
    owner_id = String(required=True, max_length=254)
    owner_email = String(max_length=254)
    name = String(max_length=100)
    description = String(max_length=1000)
    address = Text()  # JSON: {street, city, state, zip_code}
    phone = String(max_length=20)
    email = String(max_length=254)


@shops.command(part_of="Shop")
class DeleteShop:
    owner_id = String(required=True, max_length=254)
    owner_email = String(max_length=254)


def _owned_shop(owner_id, owner_email) -> Shop:
    shops_found = current_domain.repository_for(Shop).owned_by({owner_id, owner_email})
    if not shops_found:
        raise ObjectNotFoundError("Shop not found")
    return shops_found[0]


@shops.command_handler(part_of=Shop)
class ShopProfileHandler:
    @handle(UpdateShopProfile)
    def update_shop_profile(self, command):
        shop = _owned_shop(command.owner_id, command.owner_email)
        shop.update_profile(
            name=command.name,
            description=command.description,
            address=json.loads(command.address) if command.address else None,
            phone=command.phone,
            email=command.email,
        )
        current_domain.repository_for(Shop).add(shop)
        return str(shop.id)

    @handle(DeleteShop)
    def delete_shop(self, command):
        shop = _owned_shop(command.owner_id, command.owner_email)
        shop.soft_delete(deleted_by=command.owner_email or command.owner_id)
        current_domain.repository_for(Shop).add(shop)
        logger.info("Shop deleted", shop_id=str(shop.id))
        return str(shop.id)
