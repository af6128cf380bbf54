"""
ASGI config for the task list service.

Serve with any ASGI server, e.g. `uvicorn config.asgi:application`.
Views are async and the store never blocks, so a single worker process
handles requests cooperatively on one event loop.
"""
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

from django.core.asgi import get_asgi_application

application = get_asgi_application()
