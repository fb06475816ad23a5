"""
Browser session package

Session lifecycle management and error classification for the Playwright
browser that backs the page tools.
"""

from .errors import (
    BrowserLaunchError,
    BrowserSessionError,
    ErrorKind,
    classify_error,
)
from .session import BrowserKind, LaunchOptions, SessionManager

__all__ = [
    "BrowserKind",
    "BrowserLaunchError",
    "BrowserSessionError",
    "ErrorKind",
    "LaunchOptions",
    "SessionManager",
    "classify_error",
]
