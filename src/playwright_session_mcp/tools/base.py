"""
Tool base contract

Every tool implements execute(args, context) and returns a ToolResponse
envelope. The base classes here hold the shared precondition checks and turn
failures raised by Playwright into error envelopes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, ClassVar, Mapping, Protocol

from playwright.async_api import APIRequestContext, Browser, Page

from ..artifacts import ArtifactStore
from ..browser.session import SessionManager
from ..config import ToolDefaults
from ..responses import create_error_response
from ..types import ToolResponse
from ..utils.logging_config import get_logger
from .args import NoArgs

logger = get_logger(__name__)

PAGE_UNAVAILABLE_MESSAGE = (
    "Page is not available or has been closed. Please retry the operation."
)
OPERATION_FAILED_PREFIX = "Operation failed"


class Notifier(Protocol):
    """Out-of-band channel back to the caller (e.g. MCP log notifications)"""

    async def notify(self, message: str) -> None: ...


@dataclass
class ToolContext:
    """Everything a tool may touch during one invocation"""

    session: SessionManager
    artifacts: ArtifactStore
    defaults: ToolDefaults
    browser: Browser | None = None
    page: Page | None = None
    notifier: Notifier | None = None


def operation_failed(error: BaseException) -> ToolResponse:
    return create_error_response(f"{OPERATION_FAILED_PREFIX}: {error}")


class ToolHandler(ABC):
    """
    A named operation with a fixed argument record.

    Instances are created once by the dispatcher and reused, so they must not
    keep per-call state.
    """

    name: ClassVar[str]
    description: ClassVar[str] = ""
    args_type: ClassVar[Any] = NoArgs
    requires_browser: ClassVar[bool] = False

    def parse_args(self, raw: Mapping[str, Any]) -> Any:
        """Validate a raw argument mapping into this tool's argument record"""
        return self.args_type.from_args(raw)

    @abstractmethod
    async def execute(self, args: Any, context: ToolContext) -> ToolResponse:
        """Run the tool and return its envelope"""


class BrowserToolBase(ToolHandler):
    """Base class for tools that operate on the current page"""

    requires_browser = True

    async def safe_execute(
        self,
        context: ToolContext,
        body: Callable[[Page], Awaitable[ToolResponse]],
    ) -> ToolResponse:
        """
        Run body against the current page.

        Returns an error envelope without calling body when the page is
        missing or closed. Envelopes produced by body are returned unchanged;
        exceptions raised by body become "Operation failed: <message>".
        """
        page = context.page
        if page is None or page.is_closed():
            return create_error_response(PAGE_UNAVAILABLE_MESSAGE)

        try:
            return await body(page)
        except Exception as e:
            logger.error(f"{self.name} failed: {type(e).__name__}: {e}", exc_info=True)
            return operation_failed(e)


class ApiToolBase(ToolHandler):
    """
    Base class for HTTP request tools.

    These never touch the browser session; each call gets its own
    APIRequestContext which is disposed afterwards.
    """

    async def safe_execute(
        self,
        context: ToolContext,
        body: Callable[[APIRequestContext], Awaitable[ToolResponse]],
    ) -> ToolResponse:
        try:
            playwright = await context.session.get_playwright()
            request_context = await playwright.request.new_context()
        except Exception as e:
            logger.error(f"{self.name}: could not create request context: {e}", exc_info=True)
            return operation_failed(e)

        try:
            return await body(request_context)
        except Exception as e:
            logger.error(f"{self.name} failed: {type(e).__name__}: {e}", exc_info=True)
            return operation_failed(e)
        finally:
            try:
                await request_context.dispose()
            except Exception as e:
                logger.warning(f"{self.name}: error disposing request context: {e}")
