# storefront/services/review_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewModel
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import ReviewIn
from storefront.repos.product_repo import ProductRepo
from storefront.repos.review_repo import ReviewRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

FEATURED_MIN_RATING = 4


class ReviewService:
    def __init__(self, db: Session):
        self.repo = ReviewRepo(db)
        self.products = ProductRepo(db)

    def list_reviews(self, product_id: int | None = None, featured: bool = False) -> List[ReviewModel]:
        return self.repo.list_reviews(
            product_id=product_id,
            min_rating=FEATURED_MIN_RATING if featured else None,
        )

    def create_review(self, user_id: int, payload: ReviewIn) -> ReviewModel:
        if not self.products.get_product(payload.product_id):
            raise NotFoundError("Product not found")

        review = self.repo.create_review(
            ReviewModel(
                product_id=payload.product_id,
                user_id=user_id,
                rating=payload.rating,
                title=payload.title,
                comment=payload.comment,
            )
        )
        logger.info(f"Review {review.id} by user {user_id} on product {payload.product_id}")
        return review

    def delete_review(self, review_id: int) -> None:
        review = self.repo.get_review(review_id)
        if not review:
            raise NotFoundError("Review not found")

        self.repo.delete_review(review)
        logger.info(f"Deleted review {review_id}")
