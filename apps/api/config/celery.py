"""
Celery application for background jobs (lab report generation).

Worker:
    celery -A config worker -Q lab-reports --concurrency=1
"""
import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('ehr_portal')

# All CELERY_* keys in Django settings configure the app
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
