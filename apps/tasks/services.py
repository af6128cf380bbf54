import logging
from typing import List, Union

from apps.core.errors import ValidationFailed, NotFound
from .dtos import TaskDTO, TaskCreateIn
from .store import TaskStoreInterface

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 3

TASK_REQUIRED = "Task is required"
DESCRIPTION_TOO_SHORT = "Description too short"
TASK_NOT_FOUND = "Task not found"


def validate_description(payload: TaskCreateIn) -> str:
    """
    Return the trimmed description, or raise ValidationFailed.

    Presence is checked before length; only the first failure is reported.
    """
    task = payload.task if payload is not None else None
    if task is None or not task.description:
        raise ValidationFailed(TASK_REQUIRED)

    description = task.description.strip()
    if len(description) < MIN_DESCRIPTION_LENGTH:
        raise ValidationFailed(DESCRIPTION_TOO_SHORT)

    return description


async def list_tasks(store: TaskStoreInterface) -> List[TaskDTO]:
    return await store.get_all()


async def create_task(store: TaskStoreInterface, payload: TaskCreateIn) -> TaskDTO:
    """Validate the payload, then append the task to the store."""
    description = validate_description(payload)
    task = await store.create(description)
    logger.info(f"Created task {task.id}")
    return task


async def delete_task(store: TaskStoreInterface, task_id: Union[int, str]) -> None:
    """Remove a task by id. Raises NotFound when nothing matched."""
    if not await store.delete_by_id(task_id):
        logger.info(f"Delete missed: no task with id {task_id!r}")
        raise NotFound(TASK_NOT_FOUND)
    logger.info(f"Deleted task {task_id}")
