"""Prometheus metrics for the documentation assistant API."""

from prometheus_client import Counter, Histogram, Info, generate_latest, CONTENT_TYPE_LATEST
from prometheus_client.core import CollectorRegistry
from fastapi import FastAPI, Response
import time
from typing import Optional
import logging

logger = logging.getLogger(__name__)

docassist_registry = CollectorRegistry()

# Request metrics
request_count = Counter(
    'docassist_http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status_code'],
    registry=docassist_registry
)

request_duration = Histogram(
    'docassist_http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
    registry=docassist_registry
)

# Chat metrics
chat_requests = Counter(
    'docassist_chat_requests_total',
    'Total number of chat requests by outcome',
    ['status'],
    registry=docassist_registry
)

generation_duration = Histogram(
    'docassist_generation_duration_seconds',
    'Completion call duration in seconds',
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0],
    registry=docassist_registry
)

# Search metrics
search_requests = Counter(
    'docassist_search_requests_total',
    'Total number of documentation search calls',
    ['status'],
    registry=docassist_registry
)

search_results_count = Histogram(
    'docassist_search_results_count',
    'Number of documentation hits returned',
    buckets=[0, 1, 3, 5, 10, 25, 50],
    registry=docassist_registry
)

# Tool metrics
tool_invocations = Counter(
    'docassist_tool_invocations_total',
    'Total number of tool invocations',
    ['tool', 'status'],
    registry=docassist_registry
)

app_info = Info(
    'docassist_app_info',
    'Documentation assistant application information',
    registry=docassist_registry
)

error_count = Counter(
    'docassist_errors_total',
    'Total number of errors',
    ['error_type', 'component'],
    registry=docassist_registry
)

UNMATCHED_ENDPOINT = "unmatched"


def _endpoint_label(scope) -> str:
    # Labelled by route template; unrouted paths share one label
    route = scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ENDPOINT


class PrometheusMiddleware:
    """Middleware to collect Prometheus metrics for HTTP requests."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope["method"]
        start_time = time.time()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            logger.error(f"Request processing error: {e}")
            error_count.labels(error_type=type(e).__name__, component="http").inc()
            raise
        finally:
            endpoint = _endpoint_label(scope)
            request_count.labels(
                method=method,
                endpoint=endpoint,
                status_code=str(status_code)
            ).inc()
            request_duration.labels(method=method, endpoint=endpoint).observe(time.time() - start_time)


def setup_prometheus_metrics(app: FastAPI, version: str = "unknown") -> None:
    """Setup Prometheus metrics collection for FastAPI app."""
    app.add_middleware(PrometheusMiddleware)

    @app.get("/metrics")
    def metrics_endpoint():
        """Prometheus metrics endpoint."""
        return Response(generate_latest(docassist_registry), media_type=CONTENT_TYPE_LATEST)

    app_info.info({'version': version})
    logger.info("Prometheus metrics configured")


def record_chat_metrics(duration: float, success: bool) -> None:
    chat_requests.labels(status="success" if success else "failure").inc()
    generation_duration.observe(duration)
    if not success:
        error_count.labels(error_type="generation_error", component="generation").inc()


def record_search_metrics(result_count: int, error: Optional[str] = None) -> None:
    """Record documentation search metrics."""
    if error:
        search_requests.labels(status="error").inc()
        error_count.labels(error_type=error, component="search").inc()
        return
    search_requests.labels(status="success").inc()
    search_results_count.observe(result_count)


def record_tool_metrics(tool: str, success: bool) -> None:
    tool_invocations.labels(tool=tool, status="success" if success else "error").inc()
