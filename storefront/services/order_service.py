# storefront/services/order_service.py
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel, ORDER_STATUSES
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import ConflictError, InvalidArgumentError, NotFoundError
from storefront.repos.order_repo import OrderRepo
from storefront.services.line_item_service import LineItemKind, LineItemService
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _order_to_dict(order: OrderModel) -> Dict[str, Any]:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "items": [
            {
                "product_id": i.product_id,
                "name": i.name,
                "price": i.price,
                "quantity": i.quantity,
            }
            for i in order.items
        ],
        "total": order.total,
        "status": order.status,
        "created_at": order.created_at,
    }


class OrderService:
    """
    Orders are snapshots of the cart taken at checkout.
    After creation only the status may change.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart = LineItemService(db, LineItemKind.CART)
        self.notification_service = NotificationService()

    def checkout(self, user_id: int) -> Dict[str, Any]:
        """
        1. Reads the live cart (current names and prices)
        2. Copies every line into an order item, clamped to live stock, and computes the total
        3. Writes the order and deletes the lines it was built from in one transaction
        4. Sends a notification (async)

        A line whose product is out of stock fails the checkout with 409.
        Stock is not decremented here.
        """
        lines = self.cart.list_for_user(user_id)
        if not lines:
            raise InvalidArgumentError("Order must contain at least one item")

        for line in lines:
            if line["product"]["stock_quantity"] <= 0:
                raise ConflictError(f"{line['product']['name']} is out of stock")

        items = [
            OrderItemModel(
                position=position,
                product_id=line["product_id"],
                name=line["product"]["name"],
                price=line["product"]["price"],
                quantity=min(line["quantity"], line["product"]["stock_quantity"]),
            )
            for position, line in enumerate(lines)
        ]
        total = sum((i.price * i.quantity for i in items), Decimal("0.00"))

        order = OrderModel(user_id=user_id, status="pending", total=total, items=items)

        try:
            self.repo.add_order(order)
            self.cart.clear(user_id, line_ids=[line["id"] for line in lines], commit=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(order)
        logger.info(f"Order {order.id} created for user {user_id} with {len(items)} items, total {total}")

        self.notification_service.send_order_notification(user_id, order.id)

        return _order_to_dict(order)

    def list_orders(self, user_id: int | None = None) -> List[Dict[str, Any]]:
        return [_order_to_dict(o) for o in self.repo.list_orders(user_id)]

    def get_order(self, order_id: int, user_id: int) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)

        # someone else's order looks the same as a missing one
        if not order or order.user_id != user_id:
            raise NotFoundError("Order not found")

        return _order_to_dict(order)

    def update_status(self, order_id: int, status: str) -> Dict[str, Any]:
        if status not in ORDER_STATUSES:
            raise InvalidArgumentError(f"Unknown order status '{status}'")

        order = self.repo.update_order_status(order_id, status)
        if not order:
            raise NotFoundError("Order not found")

        logger.info(f"Order {order_id} status -> {status}")
        return _order_to_dict(order)
