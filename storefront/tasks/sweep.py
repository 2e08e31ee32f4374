# storefront/tasks/sweep.py
from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.wishlist_item import WishlistItemModel
from storefront.repos.line_item_repo import LineItemRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def sweep_orphaned_lines(db) -> dict:
    """Delete cart and wishlist lines whose product no longer exists."""
    removed = {}
    for name, model in (("cart", CartItemModel), ("wishlist", WishlistItemModel)):
        removed[name] = LineItemRepo(db, model).delete_orphans()
    db.commit()
    return removed


@celery_app.task(name="storefront.tasks.sweep.sweep_orphaned_lines_task")
def sweep_orphaned_lines_task():
    logger.info("Orphaned line sweep started")

    db = SessionLocal()
    try:
        removed = sweep_orphaned_lines(db)
        logger.info(f"Removed orphaned lines: {removed}")
        return removed
    finally:
        db.close()
