"""
Celery app for notification delivery.

Workers pick up ``notifications.tasks.deliver_notification`` so mail never
blocks a request or a socket handler. Broker and result backend come from
the CELERY_* settings (Redis in deployment); tests run tasks eagerly.

Start a worker with:

    celery -A config worker -l info
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("job_marketplace")

# CELERY_TASK_ALWAYS_EAGER -> task_always_eager, and so on
app.config_from_object("django.conf:settings", namespace="CELERY")

# Picks up notifications/tasks.py
app.autodiscover_tasks()
