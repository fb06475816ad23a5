"""Element interaction tools: click, iframe click, fill, select and hover."""

from playwright.async_api import Page

from ...responses import create_success_response
from ...types import ToolResponse
from ..args import IframeClickArgs, SelectorArgs, SelectorValueArgs
from ..base import BrowserToolBase, ToolContext


class ClickTool(BrowserToolBase):
    name = "playwright_click"
    description = "Click an element on the page"
    args_type = SelectorArgs

    async def execute(self, args: SelectorArgs, context: ToolContext) -> ToolResponse:
        async def click(page: Page) -> ToolResponse:
            await page.click(args.selector)
            return create_success_response(f"Clicked element: {args.selector}")

        return await self.safe_execute(context, click)


class IframeClickTool(BrowserToolBase):
    name = "playwright_iframe_click"
    description = "Click an element inside an iframe on the page"
    args_type = IframeClickArgs

    async def execute(self, args: IframeClickArgs, context: ToolContext) -> ToolResponse:
        async def click(page: Page) -> ToolResponse:
            await page.frame_locator(args.iframe_selector).locator(args.selector).click()
            return create_success_response(
                f"Clicked element {args.selector} inside iframe {args.iframe_selector}"
            )

        return await self.safe_execute(context, click)


class FillTool(BrowserToolBase):
    name = "playwright_fill"
    description = "Fill out an input field"
    args_type = SelectorValueArgs

    async def execute(self, args: SelectorValueArgs, context: ToolContext) -> ToolResponse:
        async def fill(page: Page) -> ToolResponse:
            await page.wait_for_selector(args.selector)
            await page.fill(args.selector, args.value)
            return create_success_response(f"Filled {args.selector} with: {args.value}")

        return await self.safe_execute(context, fill)


class SelectTool(BrowserToolBase):
    name = "playwright_select"
    description = "Select an option in a select element"
    args_type = SelectorValueArgs

    async def execute(self, args: SelectorValueArgs, context: ToolContext) -> ToolResponse:
        async def select(page: Page) -> ToolResponse:
            await page.wait_for_selector(args.selector)
            await page.select_option(args.selector, args.value)
            return create_success_response(f"Selected {args.selector} with: {args.value}")

        return await self.safe_execute(context, select)


class HoverTool(BrowserToolBase):
    name = "playwright_hover"
    description = "Hover over an element on the page"
    args_type = SelectorArgs

    async def execute(self, args: SelectorArgs, context: ToolContext) -> ToolResponse:
        async def hover(page: Page) -> ToolResponse:
            await page.wait_for_selector(args.selector)
            await page.hover(args.selector)
            return create_success_response(f"Hovered {args.selector}")

        return await self.safe_execute(context, hover)
