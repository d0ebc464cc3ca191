"""
Structured logging for the mapping engine using structlog.

Services log event names with key/value context; every mapping call binds
a correlation id and the collection name so that all events of one call
can be grouped.
"""
import os
import sys
import time
import uuid
import logging
from functools import wraps
from pathlib import Path
from typing import Optional

import structlog
from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "biztrack-data-mapper"

FILE_LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _add_json_file_handler(log_file: str) -> None:
    """Mirror records into a JSON-lines file."""
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_path)
    handler.setFormatter(JsonFormatter(
        FILE_LOG_FORMAT,
        rename_fields={'levelname': 'level', 'asctime': 'timestamp'},
    ))
    logging.root.addHandler(handler)


def setup_structured_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    json_logs: bool = True,
    service_name: str = SERVICE_NAME
) -> None:
    """
    Configure structlog on top of the standard logging module.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional JSON log file, only used with json_logs
        json_logs: JSON output (True) or colored console output (False)
        service_name: Bound to every event as "service"
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    if json_logs:
        renderers = [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=_shared_processors() + renderers,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if json_logs and log_file:
        _add_json_file_handler(log_file)

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        service=service_name,
        environment=os.getenv("ENVIRONMENT", "development"),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (name is typically __name__)."""
    return structlog.get_logger(name)


class CorrelationIdContext:
    """
    Binds a correlation id, plus any extra key/values such as the
    collection name, for the duration of one mapping call.

    Bindings live in contextvars and are reset on exit, so concurrent calls
    on different threads never see each other's values.
    """

    def __init__(self, correlation_id: Optional[str] = None, **extra):
        self.correlation_id = correlation_id or f"corr-{uuid.uuid4().hex[:16]}"
        self.extra = extra
        self._tokens = None

    def __enter__(self):
        self._tokens = structlog.contextvars.bind_contextvars(
            correlation_id=self.correlation_id,
            **self.extra
        )
        return self.correlation_id

    def __exit__(self, exc_type, exc_val, exc_tb):
        structlog.contextvars.reset_contextvars(**self._tokens)


def log_function_call(logger: structlog.stdlib.BoundLogger):
    """
    Decorator logging entry, exit and failure of a call with its duration.
    Exceptions are logged and re-raised unchanged.

    Example:
        @log_function_call(logger)
        def map_collection(self, analysis):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            logger.debug("function_call_start", function=func.__name__)

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    "function_call_error",
                    function=func.__name__,
                    duration_seconds=round(time.perf_counter() - start_time, 3),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise

            logger.debug(
                "function_call_success",
                function=func.__name__,
                duration_seconds=round(time.perf_counter() - start_time, 3),
            )
            return result

        return wrapper
    return decorator
