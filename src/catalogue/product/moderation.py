"""Product review workflow — submission by the seller, moderation by an admin."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.product.access import ensure_seller_owns
from catalogue.product.product import Product
from notifications.dispatch import notify
from notifications.templates.product_status import ProductStatusTemplate


@catalogue.command(part_of="Product")
class SubmitProduct:
    product_id: Identifier(required=True)
    actor_id: String(required=True, max_length=254)
    actor_email: String(max_length=254)
    actor_role: String(max_length=20)


@catalogue.command(part_of="Product")
class ModerateProduct:
    product_id: Identifier(required=True)
    status: String(required=True, max_length=20)
    message: String(max_length=500)
    admin_email: String(max_length=254)


@catalogue.command_handler(part_of=Product)
class ProductModerationHandler:
    @handle(SubmitProduct)
    def submit_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        ensure_seller_owns(product, {command.actor_id, command.actor_email}, command.actor_role)
        product.submit_for_review(command.actor_email or command.actor_id)
        repo.add(product)

    @handle(ModerateProduct)
    def moderate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.moderate(command.status, message=command.message, admin=command.admin_email)
        repo.add(product)
        logger.info("Product moderated", product_id=str(product.id), status=product.status)

        notify(
            product.seller_email,
            ProductStatusTemplate.notification_type,
            {"product_name": product.name, "status": product.status, "message": command.message},
        )
        return product.status
