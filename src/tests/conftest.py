"""Pytest fixtures for the task service tests."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry

from task_service.api.http_server import create_http_server
from task_service.config import Settings
from task_service.core.task_store import TaskStore
from task_service.utils.metrics import Metrics


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with explicit values."""
    return Settings(
        host="127.0.0.1",
        port=8765,
        log_level="DEBUG",
        log_format="console",
        metrics_enabled=False,
    )


@pytest.fixture
def metrics() -> Metrics:
    """Metrics bound to a private registry so tests don't share counters."""
    return Metrics(registry=CollectorRegistry())


@pytest.fixture
def store(metrics: Metrics) -> TaskStore:
    """Create an empty task store."""
    return TaskStore(metrics=metrics)


@pytest.fixture
def client(store: TaskStore, metrics: Metrics) -> Iterator[TestClient]:
    """Test client for an app serving the ``store`` fixture."""
    app = create_http_server(store, metrics=metrics, expose_metrics=True)
    with TestClient(app) as test_client:
        yield test_client
