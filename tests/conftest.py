"""
Pytest Configuration and Fixtures

Shared fixtures for all tests. Playwright objects are replaced with mocks;
no test launches a real browser.
"""

from unittest.mock import Mock

import pytest

from playwright_session_mcp.artifacts import ArtifactStore
from playwright_session_mcp.tools.base import ToolContext
from tests.fixtures.playwright_fixture import make_browser, make_page


@pytest.fixture
def browser_config() -> dict:
    """Provide a browser launch configuration."""
    return {
        "browser": "chromium",
        "headless": True,
        "viewport_width": 1280,
        "viewport_height": 720,
        "user_agent": None,
    }


@pytest.fixture
def tool_defaults(tmp_path) -> dict:
    """Provide tool defaults with downloads going to a temp directory."""
    return {
        "navigation_timeout": 30000,
        "wait_until": "load",
        "cookie_path": "/",
        "downloads_dir": str(tmp_path / "downloads"),
    }


@pytest.fixture
def artifacts() -> ArtifactStore:
    return ArtifactStore()


@pytest.fixture
def mock_page() -> Mock:
    return make_page()


@pytest.fixture
def mock_browser(mock_page) -> Mock:
    return make_browser(mock_page)


@pytest.fixture
def mock_session() -> Mock:
    """Create a mock SessionManager; tools only ever call reset() on it."""
    session = Mock()
    session.reset = Mock()
    return session


@pytest.fixture
def tool_context(mock_session, artifacts, tool_defaults, mock_browser, mock_page) -> ToolContext:
    """Create a ToolContext holding a connected browser and an open page."""
    return ToolContext(
        session=mock_session,
        artifacts=artifacts,
        defaults=tool_defaults,
        browser=mock_browser,
        page=mock_page,
    )
