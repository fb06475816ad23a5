"""
Tool Dispatcher

Maps a tool name and raw argument mapping to a tool instance, provisions the
browser session the tool needs, and converts every failure into an error
envelope. Nothing raised below this layer crosses handle_tool_call().
"""

import time
from typing import Any, Iterable, Mapping

from .artifacts import ArtifactStore
from .browser.session import LaunchOptions, SessionManager
from .config import ToolDefaults
from .responses import create_error_response
from .tools import ToolHandler, default_tools
from .tools.args import ArgumentError, parse_browser_kind
from .tools.base import Notifier, ToolContext, operation_failed
from .types import ToolResponse
from .utils.logging_config import get_logger

logger = get_logger(__name__)


class ToolDispatcher:
    """
    Routes tool calls to tool instances.

    The dispatcher is the only code that creates sessions; tools may only
    reset the session they were handed.
    """

    def __init__(
        self,
        session: SessionManager,
        artifacts: ArtifactStore,
        defaults: ToolDefaults,
        tools: Iterable[ToolHandler] | None = None,
    ) -> None:
        self.session = session
        self.artifacts = artifacts
        self.defaults = defaults
        self._tools: dict[str, ToolHandler] = {}
        for tool in tools if tools is not None else default_tools():
            if tool.name in self._tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self._tools[tool.name] = tool

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    def get_tool(self, name: str) -> ToolHandler | None:
        return self._tools.get(name)

    def get_console_logs(self) -> list[str]:
        return self.artifacts.console_logs()

    def get_screenshots(self) -> dict[str, bytes]:
        return self.artifacts.screenshots()

    async def handle_tool_call(
        self,
        name: str,
        args: Mapping[str, Any] | None,
        notifier: Notifier | None = None,
    ) -> ToolResponse:
        """
        Execute one tool call.

        Args:
            name: Tool name (e.g. "playwright_navigate")
            args: Raw argument mapping as received from the client
            notifier: Optional channel for side-channel announcements

        Returns:
            The tool's envelope; isError is set for every failure
        """
        tool = self._tools.get(name)
        if tool is None:
            logger.warning(f"Unknown tool requested: {name}")
            return create_error_response(f"Unknown tool: {name}")

        raw_args = dict(args or {})
        try:
            parsed = tool.parse_args(raw_args)
            kind = parse_browser_kind(raw_args) if tool.requires_browser else None
        except ArgumentError as e:
            logger.warning(f"Invalid arguments for {name}: {e}")
            return create_error_response(f"Invalid arguments for {name}: {e}")

        context = ToolContext(
            session=self.session,
            artifacts=self.artifacts,
            defaults=self.defaults,
            notifier=notifier,
        )

        if tool.requires_browser:
            launch = getattr(parsed, "launch", None) or LaunchOptions()
            try:
                context.browser, context.page = await self.session.ensure_session(kind, launch)
            except Exception as e:
                logger.error(f"Failed to initialize browser for {name}: {e}", exc_info=True)
                return create_error_response(f"Failed to initialize browser: {e}")
        else:
            context.browser = self.session.browser
            context.page = self.session.page

        console_before = self.artifacts.console_count
        screenshots_before = self.artifacts.screenshot_revisions()

        start_time = time.time()
        try:
            result = await tool.execute(parsed, context)
        except Exception as e:
            logger.error(f"Tool {name} raised: {type(e).__name__}: {e}", exc_info=True)
            result = operation_failed(e)
        duration = (time.time() - start_time) * 1000
        logger.info(
            f"Tool {name} finished in {duration:.2f}ms (isError={result['isError']})"
        )

        await self._announce_artifacts(notifier, console_before, screenshots_before)
        return result

    async def _announce_artifacts(
        self,
        notifier: Notifier | None,
        console_before: int,
        screenshots_before: dict[str, int],
    ) -> None:
        if notifier is None:
            return

        messages: list[str] = []
        new_console = self.artifacts.console_count - console_before
        if new_console > 0:
            messages.append(f"{new_console} new console log entries available at console://logs")
        for shot, revision in self.artifacts.screenshot_revisions().items():
            if screenshots_before.get(shot) != revision:
                messages.append(f"Screenshot available at screenshot://{shot}")

        for message in messages:
            try:
                await notifier.notify(message)
            except Exception as e:
                logger.warning(f"Failed to send notification: {e}")
