import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "loan_advisor.settings")

app = Celery("loan_advisor")

# All CELERY_* settings are read from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
