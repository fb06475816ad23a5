"""
Tests for SessionManager

Session creation, reuse, browser switching, reset and failure cleanup.
"""

from unittest.mock import AsyncMock

import pytest

from playwright_session_mcp.browser.errors import BrowserLaunchError
from playwright_session_mcp.browser.session import BrowserKind, LaunchOptions, SessionManager
from tests.fixtures.playwright_fixture import make_browser, make_page, make_playwright


def make_manager(browser_config, artifacts, *browsers):
    factory, playwright = make_playwright(*browsers)
    return SessionManager(browser_config, artifacts, playwright_factory=factory), playwright


class TestEnsureSession:
    """Tests for ensure_session()."""

    @pytest.mark.asyncio
    async def test_creates_session_lazily(self, browser_config, artifacts):
        """Test that the first call launches the default browser."""
        browser = make_browser()
        manager, playwright = make_manager(browser_config, artifacts, browser)

        assert not manager.is_active
        result = await manager.ensure_session()

        assert result == (browser, browser.page)
        assert manager.browser_kind is BrowserKind.CHROMIUM
        playwright.chromium.launch.assert_awaited_once_with(headless=True)
        browser.new_context.assert_awaited_once_with(viewport={"width": 1280, "height": 720})

    @pytest.mark.asyncio
    async def test_reuses_session_for_same_kind(self, browser_config, artifacts):
        browser = make_browser()
        manager, playwright = make_manager(browser_config, artifacts, browser)

        first = await manager.ensure_session(BrowserKind.CHROMIUM)
        second = await manager.ensure_session(BrowserKind.CHROMIUM)
        third = await manager.ensure_session()

        assert first == second == third
        assert playwright.chromium.launch.await_count == 1

    @pytest.mark.asyncio
    async def test_switches_browser_kind(self, browser_config, artifacts):
        """Test that requesting another kind closes the old browser first."""
        chromium = make_browser()
        firefox = make_browser()
        manager, playwright = make_manager(browser_config, artifacts, chromium, firefox)

        await manager.ensure_session(BrowserKind.CHROMIUM)
        browser, page = await manager.ensure_session(BrowserKind.FIREFOX)

        chromium.close.assert_awaited_once()
        assert browser is firefox
        assert page is firefox.page
        assert manager.browser_kind is BrowserKind.FIREFOX
        playwright.firefox.launch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_switch_ignores_close_errors(self, browser_config, artifacts):
        chromium = make_browser()
        chromium.close.side_effect = Exception("already gone")
        webkit = make_browser()
        manager, _ = make_manager(browser_config, artifacts, chromium, webkit)

        await manager.ensure_session(BrowserKind.CHROMIUM)
        browser, _ = await manager.ensure_session(BrowserKind.WEBKIT)

        assert browser is webkit

    @pytest.mark.asyncio
    async def test_disconnected_browser_is_replaced(self, browser_config, artifacts):
        first = make_browser()
        second = make_browser()
        manager, _ = make_manager(browser_config, artifacts, first, second)

        await manager.ensure_session()
        first.is_connected.return_value = False
        browser, _ = await manager.ensure_session()

        assert browser is second
        first.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_closed_page_is_reopened(self, browser_config, artifacts):
        """Test that a closed page gets a new page in the same browser."""
        first_page = make_page()
        browser = make_browser(first_page)
        manager, playwright = make_manager(browser_config, artifacts, browser)

        await manager.ensure_session()
        first_page.is_closed.return_value = True
        new_page = make_page()
        browser.contexts = [browser.new_context.return_value]
        browser.new_context.return_value.new_page = AsyncMock(return_value=new_page)

        result = await manager.ensure_session()

        assert result == (browser, new_page)
        assert playwright.chromium.launch.await_count == 1

    @pytest.mark.asyncio
    async def test_disconnect_while_reopening_page(self, browser_config, artifacts):
        """Test that a disconnect during page reopen raises instead of returning None."""
        first_page = make_page()
        browser = make_browser(first_page)
        manager, _ = make_manager(browser_config, artifacts, browser)
        await manager.ensure_session()
        _, on_disconnected = browser.on.call_args.args

        async def new_page():
            on_disconnected(browser)
            return make_page()

        first_page.is_closed.return_value = True
        browser.contexts = [browser.new_context.return_value]
        browser.new_context.return_value.new_page = AsyncMock(side_effect=new_page)

        with pytest.raises(BrowserLaunchError, match="lost"):
            await manager.ensure_session()

        assert manager.page is None
        assert not manager.is_active

    @pytest.mark.asyncio
    async def test_launch_options_applied(self, browser_config, artifacts):
        browser = make_browser()
        manager, playwright = make_manager(browser_config, artifacts, browser)

        await manager.ensure_session(
            options=LaunchOptions(headless=False, width=800, height=600, user_agent="bot/1.0")
        )

        playwright.chromium.launch.assert_awaited_once_with(headless=False)
        browser.new_context.assert_awaited_once_with(
            viewport={"width": 800, "height": 600}, user_agent="bot/1.0"
        )

    @pytest.mark.asyncio
    async def test_launch_failure_leaves_no_session(self, browser_config, artifacts):
        manager, playwright = make_manager(browser_config, artifacts)
        playwright.chromium.launch.side_effect = Exception("Executable doesn't exist")

        with pytest.raises(BrowserLaunchError, match="Executable doesn't exist"):
            await manager.ensure_session()

        assert not manager.is_active
        assert manager.page is None
        assert manager.browser_kind is None

    @pytest.mark.asyncio
    async def test_page_failure_closes_browser(self, browser_config, artifacts):
        """Test that a browser whose page could not be opened is closed and cleared."""
        browser = make_browser()
        browser.new_context.side_effect = Exception("context failed")
        manager, _ = make_manager(browser_config, artifacts, browser)

        with pytest.raises(BrowserLaunchError):
            await manager.ensure_session()

        browser.close.assert_awaited_once()
        assert not manager.is_active

    @pytest.mark.asyncio
    async def test_console_listener_feeds_artifacts(self, browser_config, artifacts):
        browser = make_browser()
        manager, _ = make_manager(browser_config, artifacts, browser)

        await manager.ensure_session()
        handlers = {call.args[0]: call.args[1] for call in browser.page.on.call_args_list}

        message = type("Message", (), {"type": "error", "text": "boom"})()
        handlers["console"](message)
        handlers["pageerror"](Exception("Uncaught TypeError"))

        assert artifacts.console_logs() == ["[error] boom", "[exception] Uncaught TypeError"]


class TestResetAndClose:
    """Tests for reset(), close() and shutdown()."""

    @pytest.mark.asyncio
    async def test_reset_forces_new_browser(self, browser_config, artifacts):
        first = make_browser()
        second = make_browser()
        manager, playwright = make_manager(browser_config, artifacts, first, second)

        await manager.ensure_session()
        manager.reset()

        assert not manager.is_active
        browser, _ = await manager.ensure_session()
        assert browser is second
        first.close.assert_not_awaited()
        assert playwright.chromium.launch.await_count == 2

    @pytest.mark.asyncio
    async def test_reset_keeps_artifacts(self, browser_config, artifacts):
        manager, _ = make_manager(browser_config, artifacts, make_browser())
        await manager.ensure_session()
        artifacts.add_console_log("[log] before reset")
        artifacts.add_screenshot("shot", b"png")

        manager.reset()

        assert artifacts.console_logs() == ["[log] before reset"]
        assert artifacts.get_screenshot("shot") == b"png"

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, browser_config, artifacts):
        browser = make_browser()
        manager, _ = make_manager(browser_config, artifacts, browser)
        await manager.ensure_session()

        assert await manager.close() is True
        assert await manager.close() is False
        browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_disconnected_event_resets(self, browser_config, artifacts):
        browser = make_browser()
        manager, _ = make_manager(browser_config, artifacts, browser)
        await manager.ensure_session()

        event, handler = browser.on.call_args.args
        assert event == "disconnected"
        handler(browser)

        assert not manager.is_active

    @pytest.mark.asyncio
    async def test_shutdown_stops_driver(self, browser_config, artifacts):
        browser = make_browser()
        manager, playwright = make_manager(browser_config, artifacts, browser)
        await manager.ensure_session()

        await manager.shutdown()

        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()
        assert not manager.is_active

    def test_status_without_session(self, browser_config, artifacts):
        manager, _ = make_manager(browser_config, artifacts)

        status = manager.status()

        assert status["active"] is False
        assert status["browser_kind"] is None
        assert status["connected"] is False


class TestBrowserKind:
    """Tests for BrowserKind parsing."""

    def test_parse_is_case_insensitive(self):
        assert BrowserKind.parse("Firefox") is BrowserKind.FIREFOX

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError, match="browserType must be one of"):
            BrowserKind.parse("opera")
