# app/celery_worker.py
from celery import Celery

from app.utils.settings import (
    CART_ABANDON_SWEEP_SECONDS,
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
)

celery_app = Celery(
    "cart",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski musza byc zaimportowane zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "app.tasks.abandon",
)

celery_app.conf.beat_schedule = {
    "abandon-stale-carts": {
        "task": "app.tasks.abandon.abandon_stale_carts_task",
        "schedule": CART_ABANDON_SWEEP_SECONDS,
    },
}

celery_app.conf.timezone = "UTC"
