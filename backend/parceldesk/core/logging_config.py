"""
Centralized logging configuration for Parcel Desk.

This module provides structured logging with:
- JSON formatting for production
- Console formatting for development
- SQLAlchemy query timing
- Request/response logging
- Optional log rotation

Usage:
    from parceldesk.core.logging_config import setup_logging

    # In main.py
    setup_logging(app, log_level="INFO", enable_sql_echo=True)

    # In any module
    logger = logging.getLogger(__name__)
    logger.info("Delivery registered", extra={"context": {"delivery_id": "abc"}})
"""

import json
import logging
import logging.handlers
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from flask import Flask, g, request
from sqlalchemy import event
from sqlalchemy.engine import Engine

_sql_timing_registered = False


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.
    Outputs logs as JSON with timestamp, level, message, and extra context.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_data["context"] = getattr(record, "context", {})

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter with colors for development.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so file handlers sharing the record keep a plain levelname
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname:8}{self.RESET}"
        message = super().format(record)
        context = getattr(record, "context", None)
        if context:
            message = f"{message} | {json.dumps(context, ensure_ascii=False, default=str)}"
        return message


def _register_sql_timing() -> None:
    """Attach query timing listeners to every SQLAlchemy engine, once per process."""
    global _sql_timing_registered
    if _sql_timing_registered:
        return

    @event.listens_for(Engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.time())

    @event.listens_for(Engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        total_time = time.time() - conn.info["query_start_time"].pop(-1)
        perf_logger = logging.getLogger("sqlalchemy.performance")
        perf_logger.debug(
            f"Query executed in {total_time * 1000:.2f}ms",
            extra={
                "context": {
                    "sql_query": statement[:500],  # Truncate long queries
                    "sql_duration_ms": round(total_time * 1000, 2),
                }
            },
        )

    _sql_timing_registered = True


def setup_logging(
    app: Optional[Flask] = None,
    log_level: Union[int, str] = "INFO",
    enable_sql_echo: bool = False,
    log_to_file: bool = False,
    use_json_format: bool = False,
) -> None:
    """
    Configure logging for the Flask application.

    Args:
        app: Flask application instance (required for request/response hooks)
        log_level: Logging level (can be int like logging.INFO or string "INFO")
        enable_sql_echo: Enable SQLAlchemy query logging
        log_to_file: Write logs to rotating files under backend/logs
        use_json_format: Use JSON format instead of console format
    """
    if isinstance(log_level, int):
        level = log_level
    else:
        level = getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    if use_json_format:
        console_formatter: logging.Formatter = JSONFormatter()
    else:
        console_formatter = ConsoleFormatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_to_file:
        log_dir = Path(__file__).parent.parent.parent / "logs"
        try:
            log_dir.mkdir(exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_dir / "parceldesk.log",
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())  # Always JSON for files
            root_logger.addHandler(file_handler)
        except OSError as e:
            # Disk full, read-only filesystem: keep console logging only
            root_logger.warning(
                f"Failed to create file handler: {e}. Falling back to console-only logging.",
                extra={"context": {"component": "logging_setup"}},
            )

    if enable_sql_echo:
        logging.getLogger("sqlalchemy.performance").setLevel(logging.DEBUG)
        _register_sql_timing()

    if app is not None:

        @app.before_request
        def log_request():
            g.request_start_time = time.time()
            g.request_id = f"{time.time()}-{id(request)}"
            req_logger = logging.getLogger("flask.request")
            req_logger.info(
                f"{request.method} {request.path}",
                extra={
                    "context": {
                        "request_id": g.request_id,
                        "method": request.method,
                        "path": request.path,
                        "remote_addr": request.remote_addr,
                    }
                },
            )

        @app.after_request
        def log_response(response):
            if hasattr(g, "request_start_time"):
                duration_ms = (time.time() - g.request_start_time) * 1000
                resp_logger = logging.getLogger("flask.response")
                resp_logger.info(
                    f"{request.method} {request.path} {response.status_code} in {duration_ms:.2f}ms",
                    extra={
                        "context": {
                            "request_id": g.get("request_id"),
                            "status_code": response.status_code,
                            "duration_ms": round(duration_ms, 2),
                        }
                    },
                )
            return response

    # Suppress noisy third-party loggers
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    app_logger = logging.getLogger("parceldesk")
    app_logger.setLevel(level)
    app_logger.info(
        f"Logging configured: level={level}, sql_echo={enable_sql_echo}, "
        f"log_to_file={log_to_file}, json_format={use_json_format}"
    )
