"""Cart item management — commands and handler."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.domain import logger, ordering


@ordering.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=64)
    quantity = Integer(required=True, min_value=1)
    snapshot = Text()  # JSON: product snapshot dict


@ordering.command(part_of="Cart")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=64)
    quantity = Integer(required=True, min_value=1)


@ordering.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=64)


@ordering.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@ordering.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for(command.user_id) or Cart.create(command.user_id)
        snapshot = json.loads(command.snapshot) if command.snapshot else None
        cart.add_item(command.product_id, command.quantity, snapshot)
        repo.add(cart)
        logger.debug("Cart item added", user_id=str(command.user_id), product_id=command.product_id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for(command.user_id)
        if cart is None:
            raise ObjectNotFoundError({"product_id": ["Item not found in cart"]})
        cart.set_quantity(command.product_id, command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for(command.user_id)
        if cart is not None and cart.remove_item(command.product_id):
            repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for(command.user_id)
        if cart is not None:
            repo._dao.delete(cart)
            logger.info("Cart cleared", user_id=str(command.user_id))
