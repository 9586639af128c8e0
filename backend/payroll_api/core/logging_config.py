"""
Structured logging configuration for the payroll API.
JSON logs in production, colored human-readable logs everywhere else.
"""

import json
import logging
import sys
import traceback
import uuid
from datetime import datetime
from typing import Optional

from payroll_api.core.config import settings

# Attributes every LogRecord carries; anything else was passed via ``extra``
_RESERVED_RECORD_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "message", "taskName",
})

_UNLOGGED_PATHS = ("/health", "/metrics")


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.
    One JSON object per line, ready for a log aggregator.
    """

    def __init__(self, service_name: str = "payroll-api"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "environment": settings.ENVIRONMENT,
            "source": {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            },
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_RECORD_ATTRS
        }
        if extra_fields:
            log_data["extra"] = extra_fields

        return json.dumps(log_data, default=str)


class ColoredFormatter(logging.Formatter):
    """
    Colored formatter for development console output.
    """

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")

        message = f"{color}{timestamp} | {record.levelname:8} | {record.name} | {record.getMessage()}{self.RESET}"

        if record.exc_info:
            message += f"\n{color}{traceback.format_exception(*record.exc_info)[-1].strip()}{self.RESET}"

        return message


def setup_logging(
    service_name: str = "payroll-api",
    log_level: Optional[str] = None,
    json_logs: Optional[bool] = None,
) -> None:
    """
    Configure application logging.

    Args:
        service_name: Name of the service for log identification
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Override JSON logging (True for production, False for development)
    """
    level = (log_level or settings.LOG_LEVEL or ("DEBUG" if settings.DEBUG else "INFO")).upper()
    use_json = json_logs if json_logs is not None else settings.IS_PRODUCTION

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level, logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level, logging.INFO))
    if use_json:
        console_handler.setFormatter(JSONFormatter(service_name))
    else:
        console_handler.setFormatter(ColoredFormatter())
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger = logging.getLogger("payroll.logging")
    logger.info(
        f"Logging configured: level={level}, format={'JSON' if use_json else 'colored'}, "
        f"environment={settings.ENVIRONMENT}"
    )


def generate_request_id() -> str:
    """Generate a short request ID for tracing."""
    return str(uuid.uuid4())[:8]


class RequestLoggingMiddleware:
    """
    Middleware that logs every request with its status, timing and a request ID.
    The request ID is echoed back in the ``X-Request-ID`` response header.
    """

    def __init__(self, app):
        self.app = app
        self.logger = logging.getLogger("payroll.http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = generate_request_id()
        start_time = datetime.utcnow()

        scope.setdefault("state", {})
        scope["state"]["request_id"] = request_id

        response_status = 0

        async def send_wrapper(message):
            nonlocal response_status
            if message["type"] == "http.response.start":
                response_status = message["status"]
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", request_id.encode("latin-1")))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            response_status = 500
            raise
        finally:
            duration_ms = (datetime.utcnow() - start_time).total_seconds() * 1000
            method = scope.get("method", "UNKNOWN")
            path = scope.get("path", "/")

            if path not in _UNLOGGED_PATHS:
                log_level = logging.WARNING if response_status >= 400 else logging.INFO
                self.logger.log(
                    log_level,
                    f"{method} {path} {response_status} {duration_ms:.1f}ms",
                    extra={
                        "request_id": request_id,
                        "method": method,
                        "path": path,
                        "status": response_status,
                        "duration_ms": duration_ms,
                    },
                )
