"""HTTP API layer."""

from task_service.api.http_server import create_http_server, task_path

__all__ = ["create_http_server", "task_path"]
