"""
Tasks API endpoints.

Listing is public; creating and deleting go through the token gate.
The router is built around an explicit store and auth instance so the
composition root (config.urls) owns both.
"""
from typing import List

from django.http import HttpRequest, HttpResponse
from ninja import Router
from ninja.security import APIKeyHeader

from .dtos import TaskOut, TaskCreateIn, ErrorOut, AuthErrorOut
from .store import TaskStoreInterface
from . import services


def build_router(store: TaskStoreInterface, auth: APIKeyHeader) -> Router:
    """
    Create the Tasks router bound to `store`, guarding mutations with `auth`.

    Routes:
        GET    /          list tasks (public)
        POST   /create    create a task (auth)
        DELETE /{id}      delete a task by id (auth)
    """
    router = Router(tags=["Tasks"])

    @router.get("/", response=List[TaskOut], auth=None)
    async def get_tasks(request: HttpRequest):
        """List all tasks in creation order."""
        return await services.list_tasks(store)

    # Registered before the /{task_id} route so "create" is not read as an id.
    @router.post(
        "/create",
        response={201: TaskOut, 400: ErrorOut, 401: AuthErrorOut},
        auth=auth,
    )
    async def create_task(request: HttpRequest, payload: TaskCreateIn = None):
        """
        Create a task from `{"task": {"description": "..."}}`.

        The description is trimmed and must be at least 3 characters.
        """
        task = await services.create_task(store, payload)
        return 201, task

    @router.delete(
        "/{task_id}",
        response={204: None, 401: AuthErrorOut, 404: ErrorOut},
        auth=auth,
    )
    async def delete_task(request: HttpRequest, task_id: str):
        """Delete a task by id. Returns 204 with an empty body."""
        await services.delete_task(store, task_id)
        return HttpResponse(status=204)

    return router
