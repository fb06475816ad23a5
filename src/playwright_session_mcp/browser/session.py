"""
Browser Session Manager

Owns the Playwright driver and the single current browser/page pair. The
dispatcher provisions sessions through ensure_session(); tools receive the
manager through their ToolContext and may only reset() it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from playwright.async_api import Browser, ConsoleMessage, Page, Playwright, async_playwright

from ..artifacts import ArtifactStore
from ..config import BrowserConfig
from ..types import SessionStatus
from ..utils.logging_config import get_logger
from .errors import BrowserLaunchError

logger = get_logger(__name__)


class BrowserKind(str, Enum):
    """Browser engine a session is bound to"""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"

    @classmethod
    def parse(cls, value: str) -> "BrowserKind":
        try:
            return cls(value.lower())
        except ValueError:
            choices = ", ".join(kind.value for kind in cls)
            raise ValueError(f"browserType must be one of {choices} (got '{value}')") from None


@dataclass
class LaunchOptions:
    """Per-call overrides applied only when a new browser is launched"""

    headless: bool | None = None
    width: int | None = None
    height: int | None = None
    user_agent: str | None = None


class SessionManager:
    """
    Holder of the current browser session.

    At most one browser is live at a time. browser and page are either both
    set or both None; browser_kind is None exactly when there is no session.
    """

    def __init__(
        self,
        config: BrowserConfig,
        artifacts: ArtifactStore,
        playwright_factory: Callable[[], Any] = async_playwright,
    ) -> None:
        self._config = config
        self._artifacts = artifacts
        self._playwright_factory = playwright_factory
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None
        self._kind: BrowserKind | None = None

    @property
    def browser(self) -> Browser | None:
        return self._browser

    @property
    def page(self) -> Page | None:
        return self._page

    @property
    def browser_kind(self) -> BrowserKind | None:
        return self._kind

    @property
    def is_active(self) -> bool:
        return self._browser is not None

    @property
    def default_kind(self) -> BrowserKind:
        return BrowserKind.parse(self._config["browser"])

    async def get_playwright(self) -> Playwright:
        """Start the Playwright driver on first use and return it"""
        if self._playwright is None:
            logger.info("Starting Playwright driver")
            self._playwright = await self._playwright_factory().start()
        return self._playwright

    async def ensure_session(
        self,
        kind: BrowserKind | None = None,
        options: LaunchOptions | None = None,
    ) -> tuple[Browser, Page]:
        """
        Return a live (browser, page) pair for the requested browser kind.

        A session of another kind is closed first. A session whose browser has
        disconnected is discarded and recreated; a session whose page was
        closed gets a fresh page in the same browser.

        Args:
            kind: Browser kind to use; None keeps the current kind (or the
                configured default when there is no session)
            options: Launch overrides, used only if a browser is launched

        Raises:
            BrowserLaunchError: If the browser or page could not be created.
                No partial session is left behind.
        """
        requested = kind or self._kind or self.default_kind

        if self._browser is not None and self._kind != requested:
            logger.info(
                f"Switching browser from {self._kind.value if self._kind else 'none'} "
                f"to {requested.value}"
            )
            await self.close()

        if self._browser is not None and not self._browser.is_connected():
            logger.warning("Browser is no longer connected, discarding session")
            self.reset()

        if self._browser is None:
            await self._launch(requested, options or LaunchOptions())
        elif self._page is None or self._page.is_closed():
            logger.info("Current page was closed, opening a new one")
            try:
                self._page = await self._open_page(self._browser, options or LaunchOptions())
            except Exception as e:
                await self.close()
                raise BrowserLaunchError(f"Failed to open a new page: {e}") from e

        if self._browser is None or self._page is None:
            # the disconnected listener can clear state while a page is being opened
            self.reset()
            raise BrowserLaunchError("Browser session was lost while it was being created")
        return self._browser, self._page

    def reset(self) -> None:
        """
        Forget the current session without closing it.

        Used after a disconnect, where closing would itself fail or hang. The
        next ensure_session() launches an entirely new browser.
        """
        if self._browser is not None:
            logger.info("Resetting browser session state")
        self._browser = None
        self._page = None
        self._kind = None

    async def close(self) -> bool:
        """
        Close the current browser (best effort) and clear the session.

        Returns:
            True if there was a session to close
        """
        browser = self._browser
        if browser is None:
            return False
        try:
            if browser.is_connected():
                await browser.close()
        except Exception as e:
            logger.warning(f"Error while closing browser: {e}")
        finally:
            self.reset()
        return True

    async def shutdown(self) -> None:
        """Close the session and stop the Playwright driver"""
        await self.close()
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.error(f"Error stopping Playwright driver: {e}", exc_info=True)
            finally:
                self._playwright = None
            logger.info("Playwright driver stopped")

    def status(self) -> SessionStatus:
        connected = self._browser is not None and self._browser.is_connected()
        page_open = self._page is not None and not self._page.is_closed()
        return {
            "active": self.is_active,
            "browser_kind": self._kind.value if self._kind else None,
            "connected": connected,
            "page_open": page_open,
            "console_entries": self._artifacts.console_count,
            "screenshots": self._artifacts.screenshot_names,
        }

    async def _launch(self, kind: BrowserKind, options: LaunchOptions) -> None:
        playwright = await self.get_playwright()
        headless = self._config["headless"] if options.headless is None else options.headless

        logger.info(f"Launching {kind.value} browser (headless={headless})")
        try:
            browser = await getattr(playwright, kind.value).launch(headless=headless)
        except Exception as e:
            self.reset()
            logger.error(f"Failed to launch {kind.value}: {e}", exc_info=True)
            raise BrowserLaunchError(f"Failed to launch {kind.value}: {e}") from e

        try:
            page = await self._open_page(browser, options)
        except Exception as e:
            try:
                await browser.close()
            except Exception as close_error:
                logger.warning(f"Error closing half-initialized browser: {close_error}")
            self.reset()
            logger.error(f"Failed to open page in {kind.value}: {e}", exc_info=True)
            raise BrowserLaunchError(f"Failed to open page in {kind.value}: {e}") from e

        browser.on("disconnected", self._on_disconnected)
        self._browser = browser
        self._page = page
        self._kind = kind
        logger.info(f"{kind.value} session ready")

    async def _open_page(self, browser: Browser, options: LaunchOptions) -> Page:
        contexts = browser.contexts
        if contexts:
            context = contexts[0]
        else:
            context_options: dict[str, Any] = {
                "viewport": {
                    "width": options.width or self._config["viewport_width"],
                    "height": options.height or self._config["viewport_height"],
                }
            }
            user_agent = options.user_agent or self._config["user_agent"]
            if user_agent:
                context_options["user_agent"] = user_agent
            context = await browser.new_context(**context_options)

        page = await context.new_page()
        page.on("console", self._on_console)
        page.on("pageerror", self._on_page_error)
        return page

    def _on_console(self, message: ConsoleMessage) -> None:
        self._artifacts.add_console_log(f"[{message.type}] {message.text}")

    def _on_page_error(self, error: Any) -> None:
        self._artifacts.add_console_log(f"[exception] {error}")

    def _on_disconnected(self, browser: Browser) -> None:
        if browser is self._browser:
            logger.warning("Browser disconnected")
            self.reset()
