# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications, processed asynchronously by celery.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int):
        # the order is already committed, a broker outage must not fail checkout
        try:
            send_order_notification_task.delay(user_id, order_id)
        except Exception as e:
            logger.warning(f"Could not enqueue notification for order {order_id}: {e}")


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int):
    """
    Would send the order confirmation email; for now it only logs.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} has been placed")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
