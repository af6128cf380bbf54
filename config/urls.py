"""
URL configuration for the task list service.

This is the composition root: it builds the task store and the token
gate once per process and hands both to the Tasks router.
"""
from django.conf import settings
from django.urls import path
from ninja import NinjaAPI

from apps.core.errors import register_exception_handlers
from apps.identity.security import TokenHeaderAuth
from apps.tasks.api import build_router
from apps.tasks.store import get_task_store

api = NinjaAPI(
    title="Task List API",
    version="1.0.0",
    description="List, create and delete tasks",
    docs_url="/docs",
)
register_exception_handlers(api)

task_store = get_task_store(settings.TASK_STORE_BACKEND)
token_auth = TokenHeaderAuth(secret=settings.JWT_SECRET)

api.add_router("", build_router(task_store, auth=token_auth))

urlpatterns = [
    path('', api.urls),
]
