from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, CheckConstraint

from storefront.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # no FK on product_id: lines may outlive a deleted product and are swept as orphans
    product_id = Column(Integer, nullable=False)

    quantity = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="u_cart_user_product"),
        CheckConstraint("quantity > 0", name="ck_cart_quantity"),
    )
