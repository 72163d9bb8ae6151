"""Celery application for EventPulse.

Run a worker with `celery -A eventpulse worker -l INFO`.
"""

import os
import typing as t

import structlog
from celery import Celery
from celery.signals import task_failure, task_postrun, task_prerun

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "eventpulse.settings")

app = Celery("eventpulse")

# Every CELERY_* Django setting configures the app.
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()

logger = structlog.get_logger(__name__)


def _observability_enabled() -> bool:
    from django.conf import settings

    return bool(settings.ENABLE_OBSERVABILITY)


@task_prerun.connect
def bind_task_context(task_id: str, task: t.Any, *args: t.Any, **kwargs: t.Any) -> None:
    """Tag log lines emitted by a task with its id and name."""
    if not _observability_enabled():
        return
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(task_id=task_id, task_name=task.name)


@task_failure.connect
def log_task_failure(task_id: str, exception: BaseException, *args: t.Any, **kwargs: t.Any) -> None:
    logger.error("task_failed", task_id=task_id, error=repr(exception))


@task_postrun.connect
def clear_task_context(*args: t.Any, **kwargs: t.Any) -> None:
    if _observability_enabled():
        structlog.contextvars.clear_contextvars()
