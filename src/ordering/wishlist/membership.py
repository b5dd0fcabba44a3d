"""Wishlist membership — commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.wishlist.wishlist import Wishlist


@ordering.command(part_of="Wishlist")
class AddToWishlist:
    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=64)


@ordering.command(part_of="Wishlist")
class RemoveFromWishlist:
    user_id = Identifier(required=True)
    product_id = String(required=True, max_length=64)


@ordering.command_handler(part_of=Wishlist)
class WishlistMembershipHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        repo = current_domain.repository_for(Wishlist)
        wishlist = repo.find_for(command.user_id) or Wishlist.create(command.user_id)
        if wishlist.add(command.product_id):
            repo.add(wishlist)
        return True

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        repo = current_domain.repository_for(Wishlist)
        wishlist = repo.find_for(command.user_id)
        if wishlist is not None and wishlist.remove(command.product_id):
            repo.add(wishlist)
        return False
