import os
from celery import Celery


# Set default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'mediapurge.settings')

app = Celery('catalog')

# Load task modules from all registered Django apps
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()


# For local settings, use these commands to run celery:
# :: First terminal (worker)
# celery -A catalog worker -l INFO --pool=solo

# :: Second terminal (beat)
# celery -A catalog beat -l INFO --scheduler django_celery_beat.schedulers:DatabaseScheduler
