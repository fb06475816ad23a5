"""
Screenshot tool

Captures the page (or one element) as PNG. The image is kept in the artifact
store under the caller's name and can also be written to disk.
"""

import asyncio
from datetime import datetime, timezone
from pathlib import Path

from playwright.async_api import Page

from ...responses import create_error_response, create_success_response
from ...types import ToolResponse
from ...utils.logging_config import get_logger
from ..args import ScreenshotArgs
from ..base import BrowserToolBase, ToolContext

logger = get_logger(__name__)


def screenshot_filename(name: str, now: datetime | None = None) -> str:
    timestamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H-%M-%S-%fZ")
    return f"{name}-{timestamp}.png"


def write_png(downloads_dir: Path, filename: str, data: bytes) -> Path:
    downloads_dir.mkdir(parents=True, exist_ok=True)
    output_path = downloads_dir / filename
    output_path.write_bytes(data)
    return output_path


class ScreenshotTool(BrowserToolBase):
    name = "playwright_screenshot"
    description = "Take a screenshot of the current page or a specific element"
    args_type = ScreenshotArgs

    async def execute(self, args: ScreenshotArgs, context: ToolContext) -> ToolResponse:
        async def screenshot(page: Page) -> ToolResponse:
            if args.selector:
                element = await page.query_selector(args.selector)
                if element is None:
                    return create_error_response(f"Element not found: {args.selector}")
                data = await element.screenshot(type="png")
            else:
                data = await page.screenshot(type="png", full_page=args.full_page)

            messages: list[str] = []
            if args.save_png:
                downloads_dir = Path(args.downloads_dir or context.defaults["downloads_dir"])
                # file IO runs off the event loop
                output_path = await asyncio.to_thread(
                    write_png, downloads_dir, screenshot_filename(args.name), data
                )
                logger.info(f"Screenshot '{args.name}' saved to {output_path}")
                messages.append(f"Screenshot saved to: {output_path}")

            if args.store_base64:
                context.artifacts.add_screenshot(args.name, data)
                messages.append(f"Screenshot '{args.name}' stored ({len(data)} bytes)")

            if not messages:
                messages.append(f"Screenshot '{args.name}' taken (not stored)")
            return create_success_response(messages)

        return await self.safe_execute(context, screenshot)
