"""
URL configuration for mediapurge project.

Only the Django admin is exposed; the purge itself runs from
`manage.py purge_media_files` or the `purge_media_files` celery task.
"""
from django.contrib import admin
from django.urls import path


urlpatterns = [
    path('admin/', admin.site.urls),
]
