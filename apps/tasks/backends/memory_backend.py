"""
In-memory Task Backend - Process-local storage.

Tasks live in a list for the lifetime of the process and are lost on
restart. reset() is the only way to reinitialise it; it is not routed.

Usage:
    Set TASK_STORE_BACKEND=memory (the default).
"""

import logging
import threading
from typing import List, Optional, Union

from apps.tasks.dtos import TaskDTO
from apps.tasks.store import TaskStoreInterface

logger = logging.getLogger(__name__)


def _coerce_id(task_id: Union[int, str]) -> Optional[int]:
    """Path parameters arrive as text; anything non-integral matches nothing."""
    if isinstance(task_id, bool):
        return None
    if isinstance(task_id, int):
        return task_id
    try:
        return int(str(task_id).strip())
    except ValueError:
        return None


class InMemoryTaskStore(TaskStoreInterface):
    """
    Ordered list of tasks plus a monotonically increasing id counter.

    Ids are never reused: the counter only moves forward on create and
    only goes back to zero on reset(). Every operation holds the lock for
    its whole body; under WSGI each worker thread drives its own event loop.
    """

    def __init__(self):
        self._tasks: List[TaskDTO] = []
        self._last_id = 0
        self._lock = threading.Lock()

    async def get_all(self) -> List[TaskDTO]:
        with self._lock:
            return list(self._tasks)

    async def create(self, description: str) -> TaskDTO:
        with self._lock:
            self._last_id += 1
            task = TaskDTO(id=self._last_id, description=description)
            self._tasks.append(task)
        return task

    async def delete_by_id(self, task_id: Union[int, str]) -> bool:
        wanted = _coerce_id(task_id)
        if wanted is None:
            return False

        with self._lock:
            for index, task in enumerate(self._tasks):
                if task.id == wanted:
                    del self._tasks[index]
                    return True
        return False

    async def reset(self) -> None:
        with self._lock:
            self._tasks.clear()
            self._last_id = 0
        logger.info("Task store reset")

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)
