"""Data models for the task service."""

from task_service.models.task import GetTaskResponse, Task, UpdateTaskRequest

__all__ = [
    "GetTaskResponse",
    "Task",
    "UpdateTaskRequest",
]
