"""In-memory task store.

The store is a plain id -> Task table with a monotonically increasing id
counter. It does no locking of its own: callers serialize access (the HTTP
layer holds a single lock around every request's store work).
"""

import os
import time
from collections.abc import Iterator
from contextlib import contextmanager

from task_service.models import Task
from task_service.utils.logging import get_logger
from task_service.utils.metrics import Metrics, get_metrics

logger = get_logger(__name__)

NO_SUCH_TASK = "No such task"


class TaskNotFoundError(KeyError):
    """Raised when a task id is not present in the store."""

    def __init__(self, task_id: int) -> None:
        super().__init__(task_id)
        self.task_id = task_id
        self.message = NO_SUCH_TASK

    def __str__(self) -> str:
        return self.message


class TaskStore:
    """Table of tasks keyed by integer id.

    Ids start at 0 and are never reused, even after deletion.
    """

    def __init__(self, metrics: Metrics | None = None) -> None:
        self._tasks: dict[int, Task] = {}
        self._next_id = 0
        self._metrics = metrics or get_metrics()

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    @contextmanager
    def _track(self, operation: str) -> Iterator[None]:
        start = time.perf_counter()
        status = "success"
        try:
            yield
        except TaskNotFoundError:
            status = "not_found"
            raise
        finally:
            self._metrics.record_task_operation(
                operation=operation,
                status=status,
                duration=time.perf_counter() - start,
            )

    def add(self, text: str) -> int:
        """Insert a new, not-done task.

        Args:
            text: Task description

        Returns:
            The id assigned to the new task
        """
        with self._track("add"):
            task_id = self._next_id
            if task_id in self._tasks:
                # Counter corruption; there is no sane way to continue.
                logger.critical("task_id_collision", task_id=task_id)
                os.abort()
            self._tasks[task_id] = Task(text=text)
            self._next_id += 1
            self._metrics.task_count.set(len(self._tasks))

        logger.info("task_added", task_id=task_id)
        return task_id

    def get(self, task_id: int) -> Task:
        """Look up a task.

        Returns the stored instance, not a copy.

        Raises:
            TaskNotFoundError: If the id is absent
        """
        with self._track("get"):
            try:
                return self._tasks[task_id]
            except KeyError:
                logger.debug("task_not_found", task_id=task_id, operation="get")
                raise TaskNotFoundError(task_id) from None

    def set(self, task_id: int, text: str | None = None, done: bool | None = None) -> None:
        """Apply a partial update; ``None`` leaves a field unchanged.

        Raises:
            TaskNotFoundError: If the id is absent
        """
        with self._track("set"):
            task = self._tasks.get(task_id)
            if task is None:
                logger.debug("task_not_found", task_id=task_id, operation="set")
                raise TaskNotFoundError(task_id)
            if text is not None:
                task.text = text
            if done is not None:
                task.done = done

        logger.info(
            "task_updated",
            task_id=task_id,
            text_changed=text is not None,
            done_changed=done is not None,
        )

    def delete(self, task_id: int) -> None:
        """Remove a task.

        Raises:
            TaskNotFoundError: If the id is absent
        """
        with self._track("delete"):
            if self._tasks.pop(task_id, None) is None:
                logger.debug("task_not_found", task_id=task_id, operation="delete")
                raise TaskNotFoundError(task_id)
            self._metrics.task_count.set(len(self._tasks))

        logger.info("task_deleted", task_id=task_id)

    def list(self) -> dict[int, Task]:
        """Snapshot of the id -> task mapping."""
        with self._track("list"):
            return dict(self._tasks)
