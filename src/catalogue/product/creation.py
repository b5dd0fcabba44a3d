"""Product creation — command and handler."""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=200)
    short_description: String(max_length=300)
    full_description: Text()
    category: String(max_length=20)
    base_price: Float(required=True, min_value=0.0)
    currency: String(max_length=3)
    stock_count: Integer(min_value=0)
    images: Text()  # JSON array of URLs
    shop_id: Identifier()
    seller_id: String(required=True, max_length=254)
    seller_email: String(max_length=254)
    submit: Boolean(default=False)


@catalogue.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            base_price=command.base_price,
            seller_id=command.seller_id,
            seller_email=command.seller_email,
            shop_id=command.shop_id,
            category=command.category,
            short_description=command.short_description,
            full_description=command.full_description,
            currency=command.currency,
            stock_count=command.stock_count,
            images=json.loads(command.images) if command.images else None,
            submit=bool(command.submit),
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), status=product.status)
        return str(product.id)
