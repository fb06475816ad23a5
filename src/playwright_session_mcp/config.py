"""
Configuration management for the Playwright Session MCP Server

Loads configuration from environment variables with sensible defaults for
browser launching, per-tool defaults and logging.
"""

import logging
import os
from pathlib import Path
from typing import TypedDict

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "PW_SESSION_MCP_"

BROWSER_KINDS = ("chromium", "firefox", "webkit")
WAIT_UNTIL_VALUES = ("load", "domcontentloaded", "networkidle", "commit")

DEFAULT_NAVIGATION_TIMEOUT = 30000
DEFAULT_WAIT_UNTIL = "load"
DEFAULT_COOKIE_PATH = "/"

# Load environment variables from .env file
# Try multiple paths for .env file
env_loaded = False
for env_path in [
    Path.cwd() / ".env",
    Path(__file__).parent.parent.parent / ".env",
    Path.home() / ".env",
]:
    if env_path.exists():
        logger.info(f"Loading environment from: {env_path}")
        load_dotenv(env_path)
        env_loaded = True
        break

if not env_loaded:
    logger.debug("No .env file found, using system environment variables only")


class BrowserConfig(TypedDict):
    """Configuration used when launching a new browser"""

    browser: str
    headless: bool
    viewport_width: int
    viewport_height: int
    user_agent: str | None


class ToolDefaults(TypedDict):
    """Defaults applied by tools when the caller omits an argument"""

    navigation_timeout: int
    wait_until: str
    cookie_path: str
    downloads_dir: str


class LoggingConfig(TypedDict):
    """Configuration for file logging"""

    log_file: str
    level: int


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable"""
    value = os.getenv(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer value for {key}: {value!r}")
        return default


def _get_choice_env(key: str, default: str, choices: tuple[str, ...]) -> str:
    """Get an environment variable restricted to a fixed set of values"""
    value = os.getenv(key, default).lower()
    if value not in choices:
        raise ValueError(f"{key} must be one of {', '.join(choices)} (got '{value}')")
    return value


def load_browser_config() -> BrowserConfig:
    """
    Load browser launch configuration from environment variables.

    Raises:
        ValueError: If PW_SESSION_MCP_BROWSER names an unknown browser
    """
    return {
        "browser": _get_choice_env(f"{ENV_PREFIX}BROWSER", "chromium", BROWSER_KINDS),
        "headless": _get_bool_env(f"{ENV_PREFIX}HEADLESS", False),
        "viewport_width": _get_int_env(f"{ENV_PREFIX}VIEWPORT_WIDTH", 1280),
        "viewport_height": _get_int_env(f"{ENV_PREFIX}VIEWPORT_HEIGHT", 720),
        "user_agent": os.getenv(f"{ENV_PREFIX}USER_AGENT") or None,
    }


def load_tool_defaults() -> ToolDefaults:
    """
    Load per-tool defaults from environment variables.

    Raises:
        ValueError: If PW_SESSION_MCP_WAIT_UNTIL is not a Playwright wait condition
    """
    return {
        "navigation_timeout": _get_int_env(
            f"{ENV_PREFIX}NAVIGATION_TIMEOUT", DEFAULT_NAVIGATION_TIMEOUT
        ),
        "wait_until": _get_choice_env(
            f"{ENV_PREFIX}WAIT_UNTIL", DEFAULT_WAIT_UNTIL, WAIT_UNTIL_VALUES
        ),
        "cookie_path": os.getenv(f"{ENV_PREFIX}COOKIE_PATH", DEFAULT_COOKIE_PATH),
        "downloads_dir": os.getenv(
            f"{ENV_PREFIX}DOWNLOADS_DIR", str(Path.home() / "Downloads")
        ),
    }


def load_logging_config() -> LoggingConfig:
    """Load logging configuration from environment variables"""
    level_name = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    return {
        "log_file": os.getenv(f"{ENV_PREFIX}LOG_FILE", "logs/playwright-session-mcp.log"),
        "level": level,
    }
