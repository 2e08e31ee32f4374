# storefront/services/product_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import InvalidArgumentError, NotFoundError
from storefront.domain.schemas import ProductIn, ProductUpdate
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SORT_OPTIONS = ("newest", "price-low", "price-high", "popular")


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(
        self,
        category: str | None = None,
        search: str | None = None,
        featured: bool | None = None,
        sort: str | None = None,
    ) -> List[ProductModel]:
        sort = sort or "newest"
        if sort not in SORT_OPTIONS:
            raise InvalidArgumentError(f"Unknown sort '{sort}', expected one of {', '.join(SORT_OPTIONS)}")

        # "all" is what the storefront filter sends for no category
        if category == "all":
            category = None

        return self.repo.list_products(
            category=category,
            search=search.strip() if search else None,
            featured=True if featured else None,
            sort=sort,
        )

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def create_product(self, payload: ProductIn) -> ProductModel:
        data = payload.model_dump(exclude_none=True)
        created = self.repo.create_product(ProductModel(**data))

        logger.info(f"Created product {created.id} '{created.name}'")
        return created

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        product = self.get_product(product_id)

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise InvalidArgumentError("No fields to update")

        for field, value in changes.items():
            setattr(product, field, value)

        updated = self.repo.save_product(product)
        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return updated

    def delete_product(self, product_id: int) -> ProductModel:
        product = self.get_product(product_id)
        self.repo.delete_product(product)

        # cart and wishlist lines pointing at it are dropped on read or by the sweep task
        logger.info(f"Deleted product {product_id}")
        return product
