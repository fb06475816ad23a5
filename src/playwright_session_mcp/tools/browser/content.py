"""Tools that read from the page: evaluate, visible text and HTML."""

import json

from playwright.async_api import Page

from ...responses import create_success_response
from ...types import ToolResponse
from ..args import EvaluateArgs
from ..base import BrowserToolBase, ToolContext

MAX_CONTENT_LENGTH = 20000


def _truncate(text: str, limit: int = MAX_CONTENT_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}\n... (truncated, {len(text)} chars total)"


class EvaluateTool(BrowserToolBase):
    name = "playwright_evaluate"
    description = "Execute JavaScript in the browser console"
    args_type = EvaluateArgs

    async def execute(self, args: EvaluateArgs, context: ToolContext) -> ToolResponse:
        async def evaluate(page: Page) -> ToolResponse:
            result = await page.evaluate(args.script)
            try:
                rendered = json.dumps(result, indent=2, default=str)
            except (TypeError, ValueError):
                rendered = str(result)
            return create_success_response(["Executed JavaScript:", args.script, "Result:", rendered])

        return await self.safe_execute(context, evaluate)


class VisibleTextTool(BrowserToolBase):
    name = "playwright_get_visible_text"
    description = "Get the visible text content of the current page"

    async def execute(self, args: object, context: ToolContext) -> ToolResponse:
        async def visible_text(page: Page) -> ToolResponse:
            text = await page.inner_text("body")
            return create_success_response(f"Visible text content:\n{_truncate(text)}")

        return await self.safe_execute(context, visible_text)


class VisibleHtmlTool(BrowserToolBase):
    name = "playwright_get_visible_html"
    description = "Get the HTML content of the current page"

    async def execute(self, args: object, context: ToolContext) -> ToolResponse:
        async def visible_html(page: Page) -> ToolResponse:
            html = await page.content()
            return create_success_response(f"HTML content:\n{_truncate(html)}")

        return await self.safe_execute(context, visible_html)
