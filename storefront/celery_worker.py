# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, ORPHAN_SWEEP_SECONDS

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# tasks must be imported explicitly so the worker registers them
celery_app.conf.imports = (
    "storefront.tasks.sweep",
    "storefront.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "sweep-orphaned-lines": {
        "task": "storefront.tasks.sweep.sweep_orphaned_lines_task",
        "schedule": ORPHAN_SWEEP_SECONDS,
    },
}

celery_app.conf.timezone = "UTC"
