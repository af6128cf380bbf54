"""
WSGI config for the task list service.

Used by `manage.py runserver`. Async views are run per request on the
worker thread, which is why the in-memory store holds a lock.
"""
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

from django.core.wsgi import get_wsgi_application

application = get_wsgi_application()
