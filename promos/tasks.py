from celery import shared_task

from .service import deactivate_ended_flash_promos as _deactivate_ended


@shared_task
def deactivate_ended_flash_promos():
    return _deactivate_ended()
