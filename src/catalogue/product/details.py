"""Product detail updates — command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.access import ensure_seller_owns
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    actor_id: String(required=True, max_length=254)
    actor_email: String(max_length=254)
    actor_role: String(max_length=20)
    name: String(max_length=200)
    short_description: String(max_length=300)
    full_description: Text()
    category: String(max_length=20)
    base_price: Float(min_value=0.0)
    stock_count: Integer(min_value=0)
    images: Text()


@catalogue.command_handler(part_of=Product)
class UpdateProductDetailsHandler:
    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        ensure_seller_owns(product, {command.actor_id, command.actor_email}, command.actor_role)

        product.update_details(
            name=command.name,
            short_description=command.short_description,
            full_description=command.full_description,
            category=command.category,
            base_price=command.base_price,
            stock_count=command.stock_count,
            images=json.loads(command.images) if command.images else None,
        )
        repo.add(product)
