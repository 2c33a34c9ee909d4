import logging
import sys
import json
import time
from functools import wraps
from typing import Optional, TextIO
from datetime import datetime, timezone
from pathlib import Path

# Attributes every LogRecord carries; anything else arrived through ``extra=``
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message", "asctime", "taskName",
}

# Third-party loggers held at WARNING
QUIET_LOGGERS = ("uvicorn", "uvicorn.access", "httpx", "urllib3")


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def __init__(self, service_name: str = "docassist"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry = {
            "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        entry.update({k: v for k, v in vars(record).items() if k not in _RESERVED_ATTRS})

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ColoredFormatter(logging.Formatter):
    """Human readable console lines, colored by level on a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime('%H:%M:%S')
        line = f"{stamp} {record.levelname:<8} {record.name}: {record.getMessage()}"

        color = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        if color:
            line = color + line + self.RESET

        if record.exc_info:
            line = line + "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str = "INFO",
    service_name: str = "docassist",
    log_file: Optional[str] = None,
    use_json: bool = False,
    use_colors: bool = True,
    stream: Optional[TextIO] = None
) -> None:
    """Configure the root logger for the assistant process.

    Args:
        level: Log level name; unknown names fall back to INFO
        service_name: Service name stamped on JSON lines
        log_file: Also append JSON lines to this file
        use_json: JSON lines on the console instead of colored text
        use_colors: Color console output when it is a terminal
        stream: Console stream, stdout by default
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    stream = stream or sys.stdout
    if use_json:
        formatter = JSONFormatter(service_name)
    else:
        formatter = ColoredFormatter(use_colors and stream.isatty())

    console = logging.StreamHandler(stream)
    console.setFormatter(formatter)
    handlers = [console]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter(service_name))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(numeric_level)
    for handler in handlers:
        handler.setLevel(numeric_level)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_slow_call(upstream: str, threshold_ms: float = 5000.0):
    """Decorator warning when a call to an upstream service runs long."""
    def decorator(func):
        logger = get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            started = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                duration_ms = (time.time() - started) * 1000
                if duration_ms > threshold_ms:
                    logger.warning(
                        f"Slow {upstream} call: {func.__name__} took {duration_ms:.0f}ms",
                        extra={"upstream": upstream, "duration_ms": round(duration_ms, 1)}
                    )

        return wrapper
    return decorator
