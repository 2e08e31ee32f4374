# storefront/services/line_item_service.py
from enum import Enum
from typing import Any, Dict, List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.product import ProductModel
from storefront.data.models.wishlist_item import WishlistItemModel
from storefront.domain.errors import ConflictError, InvalidArgumentError, NotFoundError
from storefront.repos.line_item_repo import LineItemRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class LineItemKind(str, Enum):
    CART = "cart"
    WISHLIST = "wishlist"


_MODELS = {
    LineItemKind.CART: CartItemModel,
    LineItemKind.WISHLIST: WishlistItemModel,
}


def _product_view(product: ProductModel) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "price": product.price,
        "image_url": product.image_url,
        "category": product.category,
        "stock_quantity": product.stock_quantity,
    }


class LineItemService:
    """
    Cart and wishlist lines: at most one line per (user, product).
    Cart quantities are clamped to the product's current stock, never rejected for exceeding it.

    commands (add, set_quantity, remove, ensure_present, ensure_absent, clear) modify state
    queries (list_for_user) read, and lazily drop lines whose product is gone
    """

    def __init__(self, db: Session, kind: LineItemKind):
        self.kind = kind
        self.repo = LineItemRepo(db, _MODELS[kind])
        self.products = ProductRepo(db)

    @property
    def _label(self) -> str:
        return "Cart item" if self.kind is LineItemKind.CART else "Wishlist item"

    # =====================================================
    # QUERY
    # =====================================================
    def list_for_user(self, user_id: int) -> List[Dict[str, Any]]:
        lines = []
        orphans = []

        for line, product in self.repo.list_with_products(user_id):
            if product is None:
                orphans.append(line.id)
                continue
            lines.append(self._to_dict(line, product))

        if orphans:
            logger.warning(f"Dropping {len(orphans)} orphaned {self.kind.value} lines for user {user_id}: {orphans}")
            self.repo.delete_lines(orphans)
            self.repo.commit()

        return lines

    # =====================================================
    # COMMANDS
    # =====================================================
    def add(self, user_id: int, product_id: int, quantity: int | None = None) -> Tuple[Dict[str, Any], bool]:
        """
        Insert-or-update for (user_id, product_id). Returns (line, created).

        Cart: a new line gets min(quantity, stock); an existing one gets
        min(existing + quantity, stock), computed inside the UPDATE itself.
        Wishlist: presence only, quantity is ignored.
        """
        product = self._require_product(product_id)

        if self.kind is LineItemKind.CART:
            self._check_quantity(quantity)
            if product.stock_quantity <= 0:
                raise ConflictError("Product is out of stock")
            values = {"quantity": min(quantity, product.stock_quantity)}
        else:
            values = {}

        try:
            line = self.repo.insert_if_absent(user_id, product.id, **values)
            created = line is not None

            if not created:
                if self.kind is LineItemKind.CART:
                    line = self.repo.increment_clamped(user_id, product.id, quantity, product.stock_quantity)
                else:
                    line = self.repo.get_by_product(user_id, product.id)

            # the existing row was deleted between our insert and update
            if line is None:
                self.repo.rollback()
                raise ConflictError(f"{self._label} was modified concurrently, please retry")

            self.repo.commit()
        except IntegrityError as e:
            self.repo.rollback()
            logger.warning(f"Uniqueness violation adding product {product_id} to {self.kind.value} of user {user_id}: {e}")
            raise ConflictError(f"{self._label} already exists") from e

        if created:
            logger.info(f"Created {self.kind.value} line {line.id} for user {user_id}, product {product_id}")
        else:
            logger.info(f"Updated {self.kind.value} line {line.id} for user {user_id}, product {product_id}")

        return self._to_dict(line, product), created

    def set_quantity(self, user_id: int, line_id: int, quantity: int) -> Dict[str, Any]:
        if self.kind is not LineItemKind.CART:
            raise InvalidArgumentError("Wishlist items have no quantity")
        self._check_quantity(quantity)

        line = self.repo.get_user_line(user_id, line_id)
        if not line:
            raise NotFoundError(f"{self._label} not found")

        product = self.products.get_product(line.product_id)
        if not product:
            self.repo.delete_line(line)
            self.repo.commit()
            raise NotFoundError("Product not found")

        if product.stock_quantity <= 0:
            raise ConflictError("Product is out of stock")

        clamped = min(quantity, product.stock_quantity)
        if clamped < quantity:
            logger.info(f"Clamped cart line {line_id} from {quantity} to stock {clamped}")

        line.quantity = clamped
        self.repo.commit()

        return self._to_dict(line, product)

    def remove(self, user_id: int, line_id: int) -> Dict[str, Any]:
        line = self.repo.get_user_line(user_id, line_id)
        if not line:
            raise NotFoundError(f"{self._label} not found")

        product = self.products.get_product(line.product_id)
        removed = self._to_dict(line, product)

        self.repo.delete_line(line)
        self.repo.commit()

        logger.info(f"Removed {self.kind.value} line {line_id} for user {user_id}")
        return removed

    def ensure_absent(self, user_id: int, product_id: int) -> bool:
        removed = self.repo.delete_by_product(user_id, product_id) > 0
        self.repo.commit()

        if removed:
            logger.info(f"Removed product {product_id} from {self.kind.value} of user {user_id}")
        return removed

    def ensure_present(self, user_id: int, product_id: int) -> Tuple[Dict[str, Any], bool]:
        if self.kind is not LineItemKind.WISHLIST:
            raise InvalidArgumentError("Cart items need a quantity")
        return self.add(user_id, product_id)

    def clear(self, user_id: int, line_ids: List[int] | None = None, commit: bool = True) -> int:
        """
        Deletes the user's lines. With line_ids only those lines go,
        so a line added after they were read survives.
        """
        if line_ids is None:
            count = self.repo.delete_for_user(user_id)
        else:
            count = self.repo.delete_lines(line_ids)
        if commit:
            self.repo.commit()
        logger.info(f"Cleared {count} {self.kind.value} lines for user {user_id}")
        return count

    # =====================================================
    # HELPERS
    # =====================================================
    def _require_product(self, product_id: int) -> ProductModel:
        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    def _check_quantity(quantity) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidArgumentError("Quantity must be a positive integer")

    @staticmethod
    def _to_dict(line, product: ProductModel | None) -> Dict[str, Any]:
        data = {column.key: getattr(line, column.key) for column in line.__table__.columns}
        data["product"] = _product_view(product) if product is not None else None
        return data
