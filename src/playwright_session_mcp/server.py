"""
Playwright Session MCP Server

An MCP server exposing browser automation and HTTP request tools backed by
Playwright.

This server:
1. Keeps one browser session (browser + page) alive across tool calls
2. Creates the session lazily and recreates it when another browser type is requested
3. Resets the session when the browser is found disconnected, so the next call starts clean
4. Captures console output and screenshots and serves them as MCP resources
"""

import json
import sys
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ResourceError, ToolError

from .artifacts import ArtifactStore
from .browser.session import SessionManager
from .config import load_browser_config, load_logging_config, load_tool_defaults
from .dispatcher import ToolDispatcher
from .middleware import MCPLoggingMiddleware
from .responses import response_text
from .utils.logging_config import get_logger, log_dict, log_tool_result, setup_file_logging

# Configure logging using centralized utility
_logging_config = load_logging_config()
setup_file_logging(log_file=_logging_config["log_file"], level=_logging_config["level"])
logger = get_logger(__name__)

logger.info(f"Python interpreter: {sys.executable}")
logger.info(f"Python version: {sys.version}")

# Global components, created in the lifespan
artifacts = ArtifactStore()
session_manager: SessionManager | None = None
dispatcher: ToolDispatcher | None = None


@asynccontextmanager
async def lifespan_context(server):
    """Lifespan context manager for startup and shutdown"""
    global session_manager, dispatcher

    logger.info("Starting Playwright Session MCP Server...")

    try:
        browser_config = load_browser_config()
        tool_defaults = load_tool_defaults()
        log_dict(logger, "Browser configuration:", dict(browser_config))
        log_dict(logger, "Tool defaults:", dict(tool_defaults))

        session_manager = SessionManager(browser_config, artifacts)
        dispatcher = ToolDispatcher(session_manager, artifacts, tool_defaults)
        logger.info(f"Registered {len(dispatcher.tool_names)} tools")

        yield

    except Exception as e:
        logger.error(f"Failed to start Playwright Session MCP Server: {e}", exc_info=True)
        raise

    finally:
        logger.info("Shutting down Playwright Session MCP Server...")
        try:
            if session_manager:
                await session_manager.shutdown()
            logger.info("Playwright Session MCP Server shut down successfully")
        except Exception as e:
            logger.error(f"Error during shutdown: {e}", exc_info=True)
        session_manager = None
        dispatcher = None


mcp = FastMCP(
    name="Playwright Session MCP",
    instructions="""
    Browser automation and HTTP request tools backed by Playwright.

    A single browser session is kept open between calls. playwright_navigate
    starts it on demand; pass browserType (chromium, firefox, webkit) to switch
    engines. If a tool reports that the connection has been reset, simply
    retry the call: a fresh browser will be launched.

    Console output is available at console://logs and screenshots at
    screenshot://{name}. Call playwright_close when done.
    """,
    lifespan=lifespan_context,
)

# Log every client tool call, with arguments and results, truncated at 10KB
mcp.add_middleware(
    MCPLoggingMiddleware(log_request_params=True, log_response_data=True, max_log_length=10000)
)


class ContextNotifier:
    """Sends side-channel announcements as MCP log messages on the request context"""

    def __init__(self, ctx: Context | None) -> None:
        self._ctx = ctx

    async def notify(self, message: str) -> None:
        if self._ctx is not None:
            await self._ctx.info(message)


def _compact(args: dict[str, Any]) -> dict[str, Any]:
    """Drop arguments the client did not supply"""
    return {key: value for key, value in args.items() if value is not None}


async def _call_tool(name: str, args: dict[str, Any], ctx: Context | None = None) -> str:
    """
    Run a tool through the dispatcher.

    Returns:
        The envelope text on success

    Raises:
        ToolError: If the envelope reports an error, so the MCP result has isError set
    """
    if not dispatcher:
        raise RuntimeError("Tool dispatcher not initialized")

    result = await dispatcher.handle_tool_call(name, _compact(args), ContextNotifier(ctx))
    text = response_text(result)
    if result["isError"]:
        raise ToolError(text)
    return text


# =============================================================================
# NAVIGATION TOOLS
# =============================================================================


@mcp.tool()
@log_tool_result(logger)
async def playwright_navigate(
    url: str,
    browserType: str | None = None,
    timeout: int | None = None,
    waitUntil: str | None = None,
    cookie: dict[str, Any] | None = None,
    width: int | None = None,
    height: int | None = None,
    headless: bool | None = None,
    userAgent: str | None = None,
    ctx: Context | None = None,
) -> str:
    """
    Navigate to a URL, starting a browser session if needed.

    Args:
        url: URL to navigate to
        browserType: Browser engine: 'chromium' (default), 'firefox' or 'webkit'.
            Switching engines closes the current browser.
        timeout: Navigation timeout in milliseconds. Default: 30000
        waitUntil: 'load' (default), 'domcontentloaded', 'networkidle' or 'commit'
        cookie: Cookie to set before navigating: {name, value, domain, path?,
            expires?, httpOnly?, secure?, sameSite?}. domain is required; path defaults to '/'.
        width: Viewport width for a newly launched browser
        height: Viewport height for a newly launched browser
        headless: Launch a new browser headless
        userAgent: User agent for a newly launched browser

    Returns:
        Navigation result
    """
    args = {
        "url": url,
        "browserType": browserType,
        "timeout": timeout,
        "waitUntil": waitUntil,
        "cookie": cookie,
        "width": width,
        "height": height,
        "headless": headless,
        "userAgent": userAgent,
    }
    return await _call_tool("playwright_navigate", args, ctx)


@mcp.tool()
@log_tool_result(logger)
async def playwright_go_back(browserType: str | None = None, ctx: Context | None = None) -> str:
    """Navigate back in browser history."""
    return await _call_tool("playwright_go_back", {"browserType": browserType}, ctx)


@mcp.tool()
@log_tool_result(logger)
async def playwright_go_forward(browserType: str | None = None, ctx: Context | None = None) -> str:
    """Navigate forward in browser history."""
    return await _call_tool("playwright_go_forward", {"browserType": browserType}, ctx)


@mcp.tool()
@log_tool_result(logger)
async def playwright_close(ctx: Context | None = None) -> str:
    """Close the browser and release all resources. Safe to call when no browser is open."""
    return await _call_tool("playwright_close", {}, ctx)


# =============================================================================
# PAGE TOOLS
# =============================================================================


@mcp.tool()
@log_tool_result(logger)
async def playwright_screenshot(
    name: str,
    selector: str | None = None,
    fullPage: bool | None = None,
    savePng: bool | None = None,
    storeBase64: bool | None = None,
    downloadsDir: str | None = None,
    browserType: str | None = None,
    ctx: Context | None = None,
) -> str:
    """
    Take a screenshot of the current page or of one element.

    Args:
        name: Name for the screenshot; it becomes available at screenshot://{name}
        selector: CSS selector of the element to capture. Default: whole viewport
        fullPage: Capture the full scrollable page. Default: False
        savePng: Also write a PNG file to the downloads directory. Default: False
        storeBase64: Keep the image in memory for screenshot://{name}. Default: True
        downloadsDir: Directory for savePng output
        browserType: Browser engine to use

    Returns:
        Where the screenshot was stored
    """
    args = {
        "name": name,
        "selector": selector,
        "fullPage": fullPage,
        "savePng": savePng,
        "storeBase64": storeBase64,
        "downloadsDir": downloadsDir,
        "browserType": browserType,
    }
    return await _call_tool("playwright_screenshot", args, ctx)


@mcp.tool()
@log_tool_result(logger)
async def playwright_click(
    selector: str, browserType: str | None = None, ctx: Context | None = None
) -> str:
    """Click an element on the page, identified by CSS selector."""
    return await _call_tool(
        "playwright_click", {"selector": selector, "browserType": browserType}, ctx
    )


@mcp.tool()
@log_tool_result(logger)
async def playwright_iframe_click(
    iframeSelector: str,
    selector: str,
    browserType: str | None = None,
    ctx: Context | None = None,
) -> str:
    """
    Click an element inside an iframe.

    Args:
        iframeSelector: CSS selector of the iframe
        selector: CSS selector of the element inside the iframe
        browserType: Browser engine to use
    """
    args = {"iframeSelector": iframeSelector, "selector": selector, "browserType": browserType}
    return await _call_tool("playwright_iframe_click", args, ctx)


@mcp.tool()
@log_tool_result(logger)
async def playwright_fill(
    selector: str, value: str, browserType: str | None = None, ctx: Context | None = None
) -> str:
    """Fill out an input field."""
    args = {"selector": selector, "value": value, "browserType": browserType}
    return await _call_tool("playwright_fill", args, ctx)


@mcp.tool()
@log_tool_result(logger)
async def playwright_select(
    selector: str, value: str, browserType: str | None = None, ctx: Context | None = None
) -> str:
    """Select an option in a select element."""
    args = {"selector": selector, "value": value, "browserType": browserType}
    return await _call_tool("playwright_select", args, ctx)


@mcp.tool()
@log_tool_result(logger)
async def playwright_hover(
    selector: str, browserType: str | None = None, ctx: Context | None = None
) -> str:
    """Hover over an element on the page."""
    return await _call_tool(
        "playwright_hover", {"selector": selector, "browserType": browserType}, ctx
    )


@mcp.tool()
@log_tool_result(logger)
async def playwright_evaluate(
    script: str, browserType: str | None = None, ctx: Context | None = None
) -> str:
    """Execute JavaScript in the page and return the JSON-formatted result."""
    return await _call_tool(
        "playwright_evaluate", {"script": script, "browserType": browserType}, ctx
    )


@mcp.tool()
@log_tool_result(logger)
async def playwright_get_visible_text(
    browserType: str | None = None, ctx: Context | None = None
) -> str:
    """Get the visible text content of the current page."""
    return await _call_tool("playwright_get_visible_text", {"browserType": browserType}, ctx)


@mcp.tool()
@log_tool_result(logger)
async def playwright_get_visible_html(
    browserType: str | None = None, ctx: Context | None = None
) -> str:
    """Get the HTML content of the current page."""
    return await _call_tool("playwright_get_visible_html", {"browserType": browserType}, ctx)


@mcp.tool()
@log_tool_result(logger)
async def playwright_console_logs(
    type: str | None = None,
    search: str | None = None,
    limit: int | None = None,
    clear: bool | None = None,
    ctx: Context | None = None,
) -> str:
    """
    Retrieve console messages captured from the browser.

    Args:
        type: 'all' (default), 'error', 'warning', 'log', 'info', 'debug' or 'exception'
        search: Only return entries containing this text
        limit: Return at most this many of the newest entries
        clear: Clear the captured logs after reading them
    """
    args = {"type": type, "search": search, "limit": limit, "clear": clear}
    return await _call_tool("playwright_console_logs", args, ctx)


# =============================================================================
# HTTP REQUEST TOOLS
# =============================================================================


@mcp.tool()
@log_tool_result(logger)
async def playwright_get(
    url: str,
    headers: dict[str, str] | None = None,
    token: str | None = None,
    ctx: Context | None = None,
) -> str:
    """Perform an HTTP GET request. token is sent as a Bearer Authorization header."""
    return await _call_tool(
        "playwright_get", {"url": url, "headers": headers, "token": token}, ctx
    )


@mcp.tool()
@log_tool_result(logger)
async def playwright_post(
    url: str,
    value: str,
    headers: dict[str, str] | None = None,
    token: str | None = None,
    ctx: Context | None = None,
) -> str:
    """Perform an HTTP POST request with a JSON body given as a string in value."""
    args = {"url": url, "value": value, "headers": headers, "token": token}
    return await _call_tool("playwright_post", args, ctx)


@mcp.tool()
@log_tool_result(logger)
async def playwright_put(
    url: str,
    value: str,
    headers: dict[str, str] | None = None,
    token: str | None = None,
    ctx: Context | None = None,
) -> str:
    """Perform an HTTP PUT request with a JSON body given as a string in value."""
    args = {"url": url, "value": value, "headers": headers, "token": token}
    return await _call_tool("playwright_put", args, ctx)


@mcp.tool()
@log_tool_result(logger)
async def playwright_patch(
    url: str,
    value: str,
    headers: dict[str, str] | None = None,
    token: str | None = None,
    ctx: Context | None = None,
) -> str:
    """Perform an HTTP PATCH request with a JSON body given as a string in value."""
    args = {"url": url, "value": value, "headers": headers, "token": token}
    return await _call_tool("playwright_patch", args, ctx)


@mcp.tool()
@log_tool_result(logger)
async def playwright_delete(
    url: str,
    headers: dict[str, str] | None = None,
    token: str | None = None,
    ctx: Context | None = None,
) -> str:
    """Perform an HTTP DELETE request."""
    return await _call_tool(
        "playwright_delete", {"url": url, "headers": headers, "token": token}, ctx
    )


# =============================================================================
# RESOURCES
# =============================================================================


@mcp.resource("console://logs")
async def get_console_logs() -> str:
    """Console messages captured from the browser, one per line"""
    return "\n".join(artifacts.console_logs())


@mcp.resource("screenshot://{name}", mime_type="image/png")
async def get_screenshot(name: str) -> bytes:
    """A stored screenshot as PNG"""
    data = artifacts.get_screenshot(name)
    if data is None:
        raise ResourceError(f"Screenshot not found: {name}")
    return data


@mcp.resource("playwright-session://status")
async def get_session_status() -> str:
    """Get the current browser session status"""
    if not session_manager:
        return "Playwright Session MCP is not initialized"
    return json.dumps(session_manager.status(), indent=2)


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Run the MCP server"""
    logger.info("Initializing Playwright Session MCP Server...")
    mcp.run()


if __name__ == "__main__":
    main()
