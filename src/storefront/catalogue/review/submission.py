"""Review submission — records the review and refreshes the product rating."""

from decimal import ROUND_HALF_UP, Decimal

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.queries import get_product
from storefront.catalogue.product.product import Product
from storefront.catalogue.review.review import Review
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def average_rating(ratings: list[int]) -> float:
    """Mean of ``ratings`` rounded to one decimal place."""
    if not ratings:
        return 0.0
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@storefront.command(part_of="Review")
class SubmitReview:
    product_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    rating: Integer(required=True, min_value=1, max_value=5)
    review: Text(required=True)


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        product = get_product(command.product_id)

        repo = current_domain.repository_for(Review)
        existing = repo._dao.query.filter(product_id=command.product_id).limit(None).all().items

        review = Review(
            product_id=command.product_id,
            email=command.email,
            rating=command.rating,
            review=command.review,
        )
        repo.add(review)

        # The new review is not visible to queries until the unit of work commits
        rating = average_rating([r.rating for r in existing] + [command.rating])
        product.update_rating(rating)
        current_domain.repository_for(Product).add(product)

        logger.info("Review submitted", product_id=command.product_id, rating=rating)
        return {"review_id": str(review.id), "rating": rating}
