"""
TaskStore - Abstraction layer for task storage.

The router only talks to TaskStoreInterface, so a persistent backend can
replace the in-memory one without touching request handling. Operations
are async for that reason; the in-memory backend never suspends.

Environment Configuration:
    TASK_STORE_BACKEND=memory   # Process-local, lost on restart (default)
"""

import os
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Union

from .dtos import TaskDTO

logger = logging.getLogger(__name__)


class TaskStoreInterface(ABC):
    """
    Abstract interface for the ordered task collection.

    Implementations:
    - InMemoryTaskStore: process-local list with an id counter
    """

    @abstractmethod
    async def get_all(self) -> List[TaskDTO]:
        """Return every task in insertion order."""
        pass

    @abstractmethod
    async def create(self, description: str) -> TaskDTO:
        """
        Append a task and return it with its assigned id.

        The description is expected to be validated by the caller.
        """
        pass

    @abstractmethod
    async def delete_by_id(self, task_id: Union[int, str]) -> bool:
        """
        Remove the task with the given id.

        Args:
            task_id: Numeric id, or its textual form from a URL path

        Returns:
            True if a task was removed, False if none matched
        """
        pass

    @abstractmethod
    async def reset(self) -> None:
        """Drop all tasks and restart id assignment at 1."""
        pass


def get_task_store(backend: Optional[str] = None) -> TaskStoreInterface:
    """Build the named store backend, defaulting to TASK_STORE_BACKEND."""
    backend = backend or os.getenv('TASK_STORE_BACKEND', 'memory')

    if backend == 'memory':
        from apps.tasks.backends.memory_backend import InMemoryTaskStore
        logger.info("Using in-memory task store")
        return InMemoryTaskStore()
    else:
        raise ValueError(f"Unknown TASK_STORE_BACKEND: {backend}")
