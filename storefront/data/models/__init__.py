# all models imported here so Base.metadata knows every table before create_all

from storefront.data.models.user import UserModel
from storefront.data.models.product import ProductModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.wishlist_item import WishlistItemModel
from storefront.data.models.order import OrderModel, ORDER_STATUSES
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.review import ReviewModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartItemModel",
    "WishlistItemModel",
    "OrderModel",
    "ORDER_STATUSES",
    "OrderItemModel",
    "ReviewModel",
]
