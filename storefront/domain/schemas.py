# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# prices go over the wire as JSON numbers, not strings
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]
Role = Literal["user", "admin"]


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =====================================================
# AUTH / USERS
# =====================================================
class RegisterIn(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginIn(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserOut(ApiModel):
    id: int
    name: str
    email: str
    role: str
    created_at: datetime


class RoleIn(ApiModel):
    role: Role


# =====================================================
# PRODUCTS
# =====================================================
class ProductIn(ApiModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(0, ge=0)
    category: str = Field(..., min_length=1, max_length=100)
    image_url: Optional[str] = None
    featured: bool = False


class ProductUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock_quantity: Optional[int] = Field(None, ge=0)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    image_url: Optional[str] = None
    featured: Optional[bool] = None


class ProductOut(ApiModel):
    id: int
    name: str
    description: str
    price: Money
    stock_quantity: int
    category: str
    image_url: str
    featured: bool
    created_at: datetime
    updated_at: datetime


# =====================================================
# CART / WISHLIST
# =====================================================
class CartItemIn(ApiModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0, strict=True)


class QuantityIn(ApiModel):
    quantity: int = Field(..., gt=0, strict=True)


class WishlistItemIn(ApiModel):
    product_id: int = Field(..., gt=0)


class LineProductOut(ApiModel):
    """Live product data joined onto a cart or wishlist line."""

    id: int
    name: str
    price: Money
    image_url: str
    category: str
    stock_quantity: int


class CartLineOut(ApiModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    created_at: datetime
    updated_at: datetime
    product: Optional[LineProductOut] = None


class WishlistLineOut(ApiModel):
    id: int
    user_id: int
    product_id: int
    added_at: datetime
    product: Optional[LineProductOut] = None


class RemovedOut(ApiModel):
    removed: bool


# =====================================================
# ORDERS
# =====================================================
class OrderItemOut(ApiModel):
    product_id: int
    name: str
    price: Money
    quantity: int


class OrderOut(ApiModel):
    id: int
    user_id: int
    items: List[OrderItemOut]
    total: Money
    status: OrderStatus
    created_at: datetime


class OrderStatusIn(ApiModel):
    status: OrderStatus


# =====================================================
# REVIEWS
# =====================================================
class ReviewIn(ApiModel):
    product_id: int = Field(..., gt=0)
    rating: int = Field(..., ge=1, le=5)
    title: str = Field(..., min_length=1, max_length=200)
    comment: str = Field(..., min_length=1)


class ReviewerOut(ApiModel):
    id: int
    name: str
    role: str


class ReviewOut(ApiModel):
    id: int
    product_id: int
    user_id: int
    rating: int
    title: str
    comment: str
    created_at: datetime
    user: Optional[ReviewerOut] = None
