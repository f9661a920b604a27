from celery import shared_task
from django.apps import apps


DEFAULT_SCHEDULES = {
    # Weekly media purge, Sunday 4 AM UTC. Dry run unless MEDIA_PURGE_SCHEDULED_FORCE is set.
    'media_purge': {
        'task': 'purge_media_files',
        'crontab': {'hour': 4, 'minute': 0, 'day_of_week': 0},
        'enabled': True,
        'expires': 3600
    },
}


@shared_task
def initialize_schedules():
    CrontabSchedule = apps.get_model('django_celery_beat', 'CrontabSchedule')
    PeriodicTask = apps.get_model('django_celery_beat', 'PeriodicTask')

    for name, config in DEFAULT_SCHEDULES.items():
        schedule, _ = CrontabSchedule.objects.get_or_create(
            minute=config['crontab'].get('minute', '*'),
            hour=config['crontab'].get('hour', '*'),
            day_of_week=config['crontab'].get('day_of_week', '*'),
            day_of_month=config['crontab'].get('day_of_month', '*'),
            month_of_year=config['crontab'].get('month_of_year', '*')
        )
        PeriodicTask.objects.update_or_create(
            name=name,
            defaults={
                'task': config['task'],
                'crontab': schedule,
                'enabled': config['enabled'],
                'expire_seconds': config['expires']
            }
        )
