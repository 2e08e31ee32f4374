# storefront/repos/review_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from storefront.data.models.review import ReviewModel


class ReviewRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_review(self, review_id: int) -> ReviewModel | None:
        return self.db.get(ReviewModel, review_id)

    def list_reviews(self, product_id: int | None = None, min_rating: int | None = None) -> list[ReviewModel]:
        stmt = select(ReviewModel).options(joinedload(ReviewModel.user))
        if product_id is not None:
            stmt = stmt.where(ReviewModel.product_id == product_id)
        if min_rating is not None:
            stmt = stmt.where(ReviewModel.rating >= min_rating)
        stmt = stmt.order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def create_review(self, review: ReviewModel) -> ReviewModel:
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        return review

    def delete_review(self, review: ReviewModel) -> None:
        self.db.delete(review)
        self.db.commit()
