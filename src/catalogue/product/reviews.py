"""Product reviews — command and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class AddProductReview:
    product_id: Identifier(required=True)
    user_id: String(required=True, max_length=254)
    user_name: String(max_length=100)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: String(max_length=500)


@catalogue.command_handler(part_of=Product)
class AddProductReviewHandler:
    @handle(AddProductReview)
    def add_product_review(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.add_review(
            user_id=command.user_id,
            rating=command.rating,
            comment=command.comment,
            user_name=command.user_name,
        )
        repo.add(product)
        return {"average": product.rating.average, "count": product.rating.count}
