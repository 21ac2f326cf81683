"""Prometheus metrics for observability."""

from functools import lru_cache

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, Info

from task_service import __version__


class Metrics:
    """Prometheus metrics for the task service."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize all metrics.

        Args:
            registry: Registry to register collectors in (defaults to the global one)
        """
        registry = registry if registry is not None else REGISTRY
        self.registry = registry

        self.info = Info(
            "task_service",
            "Task service information",
            registry=registry,
        )
        self.info.info({"version": __version__})

        # Store operations
        self.task_operations_total = Counter(
            "task_operations_total",
            "Total number of task store operations",
            ["operation", "status"],
            registry=registry,
        )

        self.task_operation_duration_seconds = Histogram(
            "task_operation_duration_seconds",
            "Duration of task store operations in seconds",
            ["operation"],
            buckets=[0.00001, 0.0001, 0.001, 0.01, 0.1],
            registry=registry,
        )

        self.task_count = Gauge(
            "task_count",
            "Current number of tasks in the store",
            registry=registry,
        )

        # HTTP layer
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests served",
            ["method", "status"],
            registry=registry,
        )

    def record_task_operation(
        self,
        operation: str,
        status: str,
        duration: float,
    ) -> None:
        """Record a task store operation metric.

        Args:
            operation: Operation name (add, get, set, delete, list)
            status: Operation status (success, not_found)
            duration: Operation duration in seconds
        """
        self.task_operations_total.labels(
            operation=operation,
            status=status,
        ).inc()
        self.task_operation_duration_seconds.labels(
            operation=operation,
        ).observe(duration)

    def record_http_request(self, method: str, status: int) -> None:
        """Record a served HTTP request.

        Args:
            method: HTTP method, including the custom UPDATE verb
            status: Response status code
        """
        self.http_requests_total.labels(method=method, status=str(status)).inc()


@lru_cache
def get_metrics() -> Metrics:
    """Get cached metrics instance."""
    return Metrics()
