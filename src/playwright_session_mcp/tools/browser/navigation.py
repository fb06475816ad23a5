"""
Navigation tools

NavigationTool is the one place that has to tell a dead browser apart from an
ordinary navigation failure: it runs after long idle periods, when the
browser may have crashed or been closed underneath the session.
"""

from playwright.async_api import Page

from ...browser.errors import ErrorKind, classify_error
from ...responses import create_error_response, create_success_response
from ...types import PlaywrightCookie, ToolResponse
from ...utils.logging_config import get_logger
from ..args import CookieArgs, NavigateArgs
from ..base import BrowserToolBase, ToolContext, ToolHandler

logger = get_logger(__name__)

BROWSER_NOT_CONNECTED_MESSAGE = (
    "Browser is not connected. The connection has been reset - please retry your navigation."
)
PAGE_CLOSED_MESSAGE = "Page is not available or has been closed. Please retry your navigation."
COOKIE_DOMAIN_REQUIRED_MESSAGE = (
    "Cookie domain is required. Please provide a domain for the cookie."
)


def build_cookie(cookie: CookieArgs, default_path: str) -> PlaywrightCookie:
    """Convert cookie arguments into the dict BrowserContext.add_cookies() expects"""
    result: PlaywrightCookie = {
        "name": cookie.name,
        "value": cookie.value,
        "domain": cookie.domain or "",
        "path": cookie.path or default_path,
    }
    if cookie.expires is not None:
        result["expires"] = cookie.expires
    if cookie.http_only is not None:
        result["httpOnly"] = cookie.http_only
    if cookie.secure is not None:
        result["secure"] = cookie.secure
    if cookie.same_site is not None:
        result["sameSite"] = cookie.same_site  # type: ignore[typeddict-item]
    return result


class NavigationTool(BrowserToolBase):
    """Navigate the current page to a URL, optionally setting a cookie first"""

    name = "playwright_navigate"
    description = "Navigate to a URL"
    args_type = NavigateArgs

    async def execute(self, args: NavigateArgs, context: ToolContext) -> ToolResponse:
        browser = context.browser
        if browser is None or not browser.is_connected():
            logger.warning("Navigation requested without a connected browser, resetting session")
            context.session.reset()
            return create_error_response(BROWSER_NOT_CONNECTED_MESSAGE)

        page = context.page
        if page is None or page.is_closed():
            return create_error_response(PAGE_CLOSED_MESSAGE)

        async def navigate(page: Page) -> ToolResponse:
            if args.cookie is not None:
                if not args.cookie.domain:
                    return create_error_response(COOKIE_DOMAIN_REQUIRED_MESSAGE)

                cookie = build_cookie(args.cookie, context.defaults["cookie_path"])
                try:
                    await page.context.add_cookies([cookie])
                except Exception as e:
                    logger.error(f"Failed to set cookie '{cookie['name']}': {e}")
                    return create_error_response(f"Failed to set cookie: {e}")
                logger.info(
                    f"Cookie '{cookie['name']}' set for {cookie['domain']}{cookie['path']}"
                )

            # 0 disables the Playwright timeout and must not fall back to the default
            timeout = (
                args.timeout if args.timeout is not None else context.defaults["navigation_timeout"]
            )
            wait_until = args.wait_until or context.defaults["wait_until"]
            try:
                await page.goto(args.url, timeout=timeout, wait_until=wait_until)
            except Exception as e:
                kind = classify_error(e)
                if kind is ErrorKind.TIMEOUT:
                    logger.warning(
                        f"Navigation to {args.url} timed out after {timeout}ms "
                        f"(waitUntil={wait_until})"
                    )
                elif kind is ErrorKind.DISCONNECTED:
                    logger.warning(f"Browser connection lost while navigating: {e}")
                    context.session.reset()
                    return create_error_response(
                        f"Browser connection issue: {e}. "
                        "Connection has been reset - please retry your navigation."
                    )
                raise

            logger.info(f"Navigated to {args.url}")
            return create_success_response(f"Navigated to {args.url}")

        return await self.safe_execute(context, navigate)


class CloseBrowserTool(ToolHandler):
    """
    Close the browser and clear the session.

    Always succeeds; closing is cleanup, never a user-facing failure.
    """

    name = "playwright_close"
    description = "Close the browser and release all resources"

    async def execute(self, args: object, context: ToolContext) -> ToolResponse:
        browser = context.browser
        if browser is None:
            return create_success_response("No browser instance to close")

        try:
            if browser.is_connected():
                await browser.close()
            else:
                logger.info("Browser already disconnected, cleaning up state")
        except Exception as e:
            logger.error(f"Error while closing browser: {e}")
        finally:
            context.session.reset()

        return create_success_response("Browser closed successfully")


class GoBackTool(BrowserToolBase):
    name = "playwright_go_back"
    description = "Navigate back in browser history"

    async def execute(self, args: object, context: ToolContext) -> ToolResponse:
        async def go_back(page: Page) -> ToolResponse:
            await page.go_back()
            return create_success_response("Navigated back in browser history")

        return await self.safe_execute(context, go_back)


class GoForwardTool(BrowserToolBase):
    name = "playwright_go_forward"
    description = "Navigate forward in browser history"

    async def execute(self, args: object, context: ToolContext) -> ToolResponse:
        async def go_forward(page: Page) -> ToolResponse:
            await page.go_forward()
            return create_success_response("Navigated forward in browser history")

        return await self.safe_execute(context, go_forward)
