"""
Logging configuration utilities for playwright-session-mcp

Provides file-only logging configuration to prevent MCP protocol corruption.
The MCP protocol uses stdout for JSON-RPC communication, so all logging must
go exclusively to files.
"""

import json
import logging
import tempfile
from collections.abc import Awaitable, Callable
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

T = TypeVar("T")

SENSITIVE_KEYS = ("token", "password", "secret", "key", "cookie")


def setup_file_logging(
    log_file: str | Path = "logs/playwright-session-mcp.log",
    level: int = logging.INFO,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Configure file-only logging for the application.

    NOTE: We log ONLY to file, NOT to stdout/stderr, because stdout is used
    for MCP protocol communication with the client (FastMCP uses stdio transport).

    If the requested log directory cannot be created, the log file is placed
    in the system temp directory instead.

    Args:
        log_file: Path to the log file (relative or absolute)
        level: Logging level (default: logging.INFO)
        format_string: Custom format string (default: timestamp - name - level - message)

    Returns:
        The root logger instance
    """
    log_path = Path(log_file)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path)
    except OSError:
        log_path = Path(tempfile.gettempdir()) / log_path.name
        handler = logging.FileHandler(log_path)

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        handlers=[handler],
        force=True,  # Override any existing configuration
    )

    logger = logging.getLogger()
    logger.info(f"Logging configured: file={log_path}, level={logging.getLevelName(level)}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def is_sensitive_key(key: str) -> bool:
    """Check whether a key names a value that must not reach the logs"""
    return any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS)


def log_dict(
    logger: logging.Logger, message: str, data: dict[str, Any], level: int = logging.INFO
) -> None:
    """
    Log a dictionary with formatted key-value pairs.

    Args:
        logger: Logger instance
        message: Prefix message
        data: Dictionary to log
        level: Log level (default: INFO)
    """
    logger.log(level, message)
    for key, value in data.items():
        if is_sensitive_key(key):
            value = "***REDACTED***"
        logger.log(level, f"  {key}: {value}")


def log_tool_result(
    logger: logging.Logger | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator that logs the result of an async MCP tool as JSON.

    Results that are not JSON serializable are logged via str(). Exceptions
    raised by the tool are propagated untouched.

    Args:
        logger: Logger to use (default: the decorated function's module logger)
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        tool_logger = logger or logging.getLogger(func.__module__)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            result = await func(*args, **kwargs)
            try:
                rendered = json.dumps(result, default=str)
            except (TypeError, ValueError):
                rendered = str(result)
            tool_logger.info(f"TOOL_RESULT [{func.__name__}]: {rendered}")
            return result

        return wrapper

    return decorator
