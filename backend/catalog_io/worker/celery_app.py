from celery import Celery

from catalog_io.core.config import settings
from catalog_io.core.logging import configure_logging

configure_logging(settings.ENV, settings.LOG_LEVEL)

celery_app = Celery("catalog_io", broker=settings.REDIS_URL, backend=settings.REDIS_URL)
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    task_track_started=True,
)
celery_app.autodiscover_tasks(["catalog_io.worker"])
