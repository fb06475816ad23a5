"""
Error classification for browser automation failures

Playwright reports a dead browser through several exception types whose
messages share a few known phrasings. classify_error() matches those phrasings
first, since a timeout can also be caused by the target closing, and only then
looks at the exception type.
"""

from enum import Enum

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

DISCONNECT_PATTERNS = (
    "Target page, context or browser has been closed",
    "Target closed",
    "Browser has been disconnected",
)


class ErrorKind(Enum):
    """What a collaborator failure means for the session"""

    DISCONNECTED = "disconnected"
    TIMEOUT = "timeout"
    OTHER = "other"


class BrowserSessionError(Exception):
    """Base class for session lifecycle failures"""


class BrowserLaunchError(BrowserSessionError):
    """A new browser session could not be created"""


def is_disconnect_message(message: str) -> bool:
    return any(pattern in message for pattern in DISCONNECT_PATTERNS)


def classify_error(error: BaseException) -> ErrorKind:
    """
    Classify a failure raised by a Playwright call.

    Args:
        error: The exception raised by the automation collaborator

    Returns:
        ErrorKind.DISCONNECTED when the session must be reset before retrying,
        ErrorKind.TIMEOUT for timeouts, ErrorKind.OTHER otherwise
    """
    if is_disconnect_message(str(error)):
        return ErrorKind.DISCONNECTED
    if isinstance(error, PlaywrightTimeoutError):
        return ErrorKind.TIMEOUT
    return ErrorKind.OTHER
