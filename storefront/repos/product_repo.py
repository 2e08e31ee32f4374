# storefront/repos/product_repo.py
from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.data.models.review import ReviewModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(
        self,
        category: str | None = None,
        search: str | None = None,
        featured: bool | None = None,
        sort: str = "newest",
    ) -> list[ProductModel]:
        stmt = select(ProductModel)

        if category:
            stmt = stmt.where(ProductModel.category == category)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(ProductModel.name.ilike(pattern), ProductModel.description.ilike(pattern)))
        if featured is not None:
            stmt = stmt.where(ProductModel.featured == featured)

        if sort == "price-low":
            stmt = stmt.order_by(ProductModel.price.asc(), ProductModel.id.asc())
        elif sort == "price-high":
            stmt = stmt.order_by(ProductModel.price.desc(), ProductModel.id.asc())
        elif sort == "popular":
            review_counts = (
                select(ReviewModel.product_id, func.count(ReviewModel.id).label("review_count"))
                .group_by(ReviewModel.product_id)
                .subquery()
            )
            stmt = stmt.outerjoin(review_counts, review_counts.c.product_id == ProductModel.id).order_by(
                func.coalesce(review_counts.c.review_count, 0).desc(),
                ProductModel.id.asc(),
            )
        else:
            stmt = stmt.order_by(ProductModel.created_at.desc(), ProductModel.id.desc())

        return list(self.db.execute(stmt).scalars().all())

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def save_product(self, product: ProductModel) -> ProductModel:
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()
