import os

from celery import Celery
from celery.schedules import crontab


# set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "loyalty_backend.settings")


app = Celery("loyalty_backend")

# namespace='CELERY' means all celery-related configuration keys
# should have a `CELERY_` prefix.
app.config_from_object("django.conf:settings", namespace="CELERY")

# Load task modules from all registered Django app configs.
app.autodiscover_tasks()

app.conf.beat_schedule = {
    "deactivate-ended-flash-promos": {
        "task": "promos.tasks.deactivate_ended_flash_promos",
        "schedule": crontab(minute="*/5"),
    },
}
