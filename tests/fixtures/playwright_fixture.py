"""
Playwright test doubles

Factories for mock Page, Browser and async_playwright objects shaped like the
Playwright async API, so session and tool code can run without a browser.
"""

from unittest.mock import AsyncMock, Mock


def make_page(closed: bool = False) -> Mock:
    """Create a mock Playwright Page with its owning BrowserContext."""
    page = Mock()
    page.is_closed = Mock(return_value=closed)
    page.goto = AsyncMock(return_value=None)
    page.go_back = AsyncMock(return_value=None)
    page.go_forward = AsyncMock(return_value=None)
    page.click = AsyncMock()
    page.fill = AsyncMock()
    page.select_option = AsyncMock()
    page.hover = AsyncMock()
    page.wait_for_selector = AsyncMock()
    page.evaluate = AsyncMock(return_value="test result")
    page.screenshot = AsyncMock(return_value=b"mock-screenshot")
    page.query_selector = AsyncMock(return_value=None)
    page.inner_text = AsyncMock(return_value="Hello world")
    page.content = AsyncMock(return_value="<html><body>Hello world</body></html>")
    page.on = Mock()
    # Page.context is a property in the Python API
    page.context = Mock()
    page.context.add_cookies = AsyncMock(return_value=None)
    return page


def make_browser(page: Mock | None = None, connected: bool = True) -> Mock:
    """Create a mock Playwright Browser whose new context opens the given page."""
    page = page or make_page()
    browser_context = Mock()
    browser_context.new_page = AsyncMock(return_value=page)

    browser = Mock()
    browser.is_connected = Mock(return_value=connected)
    browser.close = AsyncMock()
    browser.contexts = []
    browser.new_context = AsyncMock(return_value=browser_context)
    browser.on = Mock()
    browser.page = page  # test convenience, not part of the Playwright API
    return browser


def make_playwright(*browsers: Mock) -> tuple[Mock, Mock]:
    """
    Create a mock async_playwright factory.

    Each launch() (on any browser type) returns the next browser in order.

    Returns:
        Tuple of (factory, playwright)
    """
    launches = iter(browsers)

    async def launch(**kwargs):
        return next(launches)

    playwright = Mock()
    for name in ("chromium", "firefox", "webkit"):
        browser_type = Mock()
        browser_type.launch = AsyncMock(side_effect=launch)
        setattr(playwright, name, browser_type)
    playwright.stop = AsyncMock()

    request_context = Mock()
    request_context.fetch = AsyncMock()
    request_context.dispose = AsyncMock()
    playwright.request = Mock()
    playwright.request.new_context = AsyncMock(return_value=request_context)

    manager = Mock()
    manager.start = AsyncMock(return_value=playwright)
    factory = Mock(return_value=manager)
    return factory, playwright
