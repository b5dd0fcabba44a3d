"""Shop moderation — admin status changes and the owner notification."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from notifications.dispatch import notify
from notifications.templates.shop_status import ShopStatusTemplate
from shared.errors import AuthorizationError
from shops.domain import logger, shops
from shops.shop.shop import Shop


@shops.command(part_of="Shop")
class SetShopStatus:
    shop_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    message = String(max_length=500)
    notify_seller = Boolean(default=True)
    admin_id = String(required=True, max_length=254)
    admin_email = String(max_length=254)
    admin_role = String(required=True, max_length=20)


@shops.command_handler(part_of=Shop)
class ShopModerationHandler:
    @handle(SetShopStatus)
    def set_shop_status(self, command):
        if command.admin_role != "ADMIN":
            raise AuthorizationError("Only admins can change a shop's status")

        repo = current_domain.repository_for(Shop)
        shop = repo.get(command.shop_id)
        shop.set_status(
            command.status,
            message=command.message,
            admin_id=command.admin_id,
            admin_email=command.admin_email,
        )
        repo.add(shop)
        logger.info("Shop status changed", shop_id=str(shop.id), status=shop.status)

        if command.notify_seller is not False:
            notify(
                shop.owner_email,
                ShopStatusTemplate.notification_type,
                {
                    "shop_name": shop.name,
                    "owner_name": shop.owner_name,
                    "status": shop.status,
                    "message": command.message,
                },
            )
        return shop.status
