"""
MCP request/response logging middleware

Logs every client MCP request handled by the server with a "CLIENT_MCP"
prefix so client traffic can be filtered out of the log file easily.
"""

import json
import time
from typing import Any

from fastmcp.server.middleware import Middleware, MiddlewareContext

from ..utils.logging_config import get_logger, is_sensitive_key

logger = get_logger(__name__)


class MCPLoggingMiddleware(Middleware):
    """FastMCP middleware that logs tool calls and resource reads"""

    def __init__(
        self,
        log_request_params: bool = True,
        log_response_data: bool = False,
        max_log_length: int = 5000,
    ) -> None:
        """
        Initialize the logging middleware.

        Args:
            log_request_params: Log tool arguments (sensitive keys are redacted)
            log_response_data: Log tool results and resource contents
            max_log_length: Maximum characters logged per payload before truncation
        """
        super().__init__()
        self.log_request_params = log_request_params
        self.log_response_data = log_response_data
        self.max_log_length = max_log_length

    def _truncate_data(self, data: Any, max_length: int | None = None) -> str:
        """Render data as JSON, truncated to max_length characters"""
        limit = max_length if max_length is not None else self.max_log_length
        try:
            rendered = json.dumps(data, default=str)
        except (TypeError, ValueError):
            rendered = str(data)

        if len(rendered) <= limit:
            return rendered
        return f"{rendered[:limit]}... ({len(rendered)} chars total)"

    @staticmethod
    def _redact(arguments: dict[str, Any] | None) -> dict[str, Any]:
        if not arguments:
            return {}
        redacted: dict[str, Any] = {}
        for key, value in arguments.items():
            redacted[key] = "***REDACTED***" if is_sensitive_key(key) else value
        return redacted

    async def on_call_tool(self, context: MiddlewareContext, call_next: Any) -> Any:
        tool_name = context.message.name
        logger.info(f"CLIENT_MCP → Tool call: {tool_name}")
        if self.log_request_params:
            arguments = self._redact(context.message.arguments)
            logger.info(
                f"CLIENT_MCP   Tool '{tool_name}' arguments: {self._truncate_data(arguments)}"
            )

        start_time = time.time()
        try:
            result = await call_next(context)
        except Exception as e:
            duration = (time.time() - start_time) * 1000
            logger.error(
                f"CLIENT_MCP ✗ Tool error: {tool_name} ({duration:.2f}ms) - "
                f"{type(e).__name__}: {e}"
            )
            raise

        duration = (time.time() - start_time) * 1000
        logger.info(f"CLIENT_MCP ← Tool result: {tool_name} ({duration:.2f}ms)")
        if self.log_response_data:
            logger.info(
                f"CLIENT_MCP   Tool '{tool_name}' result: {self._truncate_data(result)}"
            )
        return result

    async def on_read_resource(self, context: MiddlewareContext, call_next: Any) -> Any:
        uri = str(context.message.uri)
        logger.info(f"CLIENT_MCP → Resource read: {uri}")

        start_time = time.time()
        try:
            result = await call_next(context)
        except Exception as e:
            logger.error(f"CLIENT_MCP ✗ Resource error: {uri} - {type(e).__name__}: {e}")
            raise

        duration = (time.time() - start_time) * 1000
        logger.info(f"CLIENT_MCP ← Resource result: {uri} ({duration:.2f}ms)")
        if self.log_response_data:
            logger.info(f"CLIENT_MCP   Resource '{uri}' result: {self._truncate_data(result)}")
        return result

    async def on_list_tools(self, context: MiddlewareContext, call_next: Any) -> Any:
        logger.info("CLIENT_MCP → List tools")
        try:
            result = await call_next(context)
        except Exception as e:
            logger.error(f"CLIENT_MCP ✗ List tools error: {type(e).__name__}: {e}")
            raise
        logger.info(f"CLIENT_MCP ← List tools result: {len(result)} tools")
        return result

    async def on_list_resources(self, context: MiddlewareContext, call_next: Any) -> Any:
        logger.info("CLIENT_MCP → List resources")
        try:
            result = await call_next(context)
        except Exception as e:
            logger.error(f"CLIENT_MCP ✗ List resources error: {type(e).__name__}: {e}")
            raise
        logger.info(f"CLIENT_MCP ← List resources result: {len(result)} resources")
        return result
