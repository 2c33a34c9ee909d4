"""Observability package for the documentation assistant."""

from .logging import setup_logging, get_logger, log_slow_call, JSONFormatter, ColoredFormatter
from .prometheus_metrics import (
    setup_prometheus_metrics,
    record_chat_metrics,
    record_search_metrics,
    record_tool_metrics,
    PrometheusMiddleware,
    docassist_registry
)

__all__ = [
    'setup_logging',
    'get_logger',
    'log_slow_call',
    'JSONFormatter',
    'ColoredFormatter',
    'setup_prometheus_metrics',
    'record_chat_metrics',
    'record_search_metrics',
    'record_tool_metrics',
    'PrometheusMiddleware',
    'docassist_registry'
]
