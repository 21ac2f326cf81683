"""FastAPI HTTP server exposing the task API."""

import threading
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import uuid4

import structlog
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import ValidationError
from starlette.convertors import register_url_convertor
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_service import __version__
from task_service.api.convertors import TaskIdConvertor
from task_service.core.task_store import TaskNotFoundError, TaskStore
from task_service.models import GetTaskResponse, UpdateTaskRequest
from task_service.utils.logging import get_logger
from task_service.utils.metrics import Metrics, get_metrics

logger = get_logger(__name__)

UPDATE = "UPDATE"


def task_path(task_id: int) -> str:
    """Public path of a task, as used in list keys and POST responses."""
    return f"/task/{task_id}"


def not_found(error: TaskNotFoundError) -> JSONResponse:
    return JSONResponse(content=error.message, status_code=404)


async def read_task_request(request: Request) -> UpdateTaskRequest:
    """Parse the JSON request body into an UpdateTaskRequest.

    Raises:
        HTTPException: 400 if the body is not JSON or fields have the wrong type
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("application/json"):
        raise HTTPException(status_code=400, detail="Expected an application/json body")

    body = await request.body()
    try:
        return UpdateTaskRequest.model_validate_json(body)
    except ValidationError as e:
        logger.info("bad_request_body", errors=e.error_count())
        raise HTTPException(status_code=400, detail="Malformed task body") from e


def create_http_server(
    store: TaskStore | None = None,
    *,
    metrics: Metrics | None = None,
    expose_metrics: bool = False,
) -> FastAPI:
    """Create FastAPI HTTP server for the task API.

    Route handlers are plain ``def`` functions, so FastAPI runs them on its
    worker thread pool. Every handler does its store work while holding one
    process-wide lock.

    Args:
        store: Task store to serve (a fresh empty one if None)
        metrics: Metrics sink (global metrics if None)
        expose_metrics: Also serve /health and /metrics

    Returns:
        FastAPI application
    """
    metrics = metrics or get_metrics()
    store = store if store is not None else TaskStore(metrics=metrics)
    lock = threading.Lock()
    register_url_convertor("task_id", TaskIdConvertor())

    app = FastAPI(
        title="Task Service",
        description="In-memory task tracking API",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.store = store
    app.state.lock = lock

    @app.middleware("http")
    async def bind_request_context(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=uuid4().hex,
            method=request.method,
            path=request.url.path,
        )
        response = await call_next(request)
        metrics.record_http_request(request.method, response.status_code)
        logger.info("request_served", status=response.status_code)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def unmatched_route(request: Request, exc: StarletteHTTPException) -> Response:
        # Unknown paths and known paths with the wrong verb both get an empty 404.
        if exc.status_code in (404, 405):
            return Response(status_code=404)
        return await http_exception_handler(request, exc)

    @app.get("/task")
    def list_tasks() -> JSONResponse:
        with lock:
            content: dict[str, Any] = {
                task_path(task_id): GetTaskResponse.from_task(task).model_dump()
                for task_id, task in store.list().items()
            }
        return JSONResponse(content=content)

    @app.post("/task")
    def create_task(body: UpdateTaskRequest = Depends(read_task_request)) -> JSONResponse:
        if body.text is None:
            raise HTTPException(status_code=400, detail="Field 'text' is required")
        with lock:
            task_id = store.add(body.text)
        return JSONResponse(content=task_path(task_id))

    @app.get("/task/{task_id:task_id}")
    def get_task(task_id: int) -> JSONResponse:
        with lock:
            try:
                task = store.get(task_id)
            except TaskNotFoundError as e:
                return not_found(e)
            return JSONResponse(content=GetTaskResponse.from_task(task).model_dump())

    @app.api_route("/task/{task_id:task_id}", methods=[UPDATE])
    def update_task(
        task_id: int,
        body: UpdateTaskRequest = Depends(read_task_request),
    ) -> JSONResponse:
        with lock:
            try:
                store.set(task_id, text=body.text, done=body.done)
                task = store.get(task_id)
            except TaskNotFoundError as e:
                return not_found(e)
            return JSONResponse(content=GetTaskResponse.from_task(task).model_dump())

    @app.delete("/task/{task_id:task_id}")
    def delete_task(task_id: int) -> Response:
        with lock:
            try:
                store.delete(task_id)
            except TaskNotFoundError as e:
                return not_found(e)
        return Response(status_code=204)

    if expose_metrics:

        @app.get("/health")
        def health() -> JSONResponse:
            """Liveness check endpoint."""
            return JSONResponse(content={"status": "ok", "service": "task-service"})

        @app.get("/metrics")
        def prometheus_metrics() -> Response:
            """Prometheus metrics endpoint."""
            return Response(
                content=generate_latest(metrics.registry),
                media_type=CONTENT_TYPE_LATEST,
            )

    return app
