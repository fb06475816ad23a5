"""
HTTP request tools

Thin wrappers around Playwright's APIRequestContext. They share nothing with
the browser session: each call creates its own request context.
"""

from typing import Any, ClassVar

from playwright.async_api import APIRequestContext, APIResponse

from ...responses import create_success_response
from ...types import ToolResponse
from ...utils.logging_config import get_logger
from ..args import ApiBodyRequestArgs, ApiRequestArgs
from ..base import ApiToolBase, ToolContext

logger = get_logger(__name__)

MAX_BODY_LENGTH = 10000


def build_headers(args: ApiRequestArgs, with_body: bool) -> dict[str, str]:
    headers: dict[str, str] = {}
    if with_body:
        headers["Content-Type"] = "application/json"
    if args.token:
        headers["Authorization"] = f"Bearer {args.token}"
    headers.update(args.headers)
    return headers


async def describe_response(method: str, url: str, response: APIResponse) -> ToolResponse:
    body = await response.text()
    if len(body) > MAX_BODY_LENGTH:
        body = f"{body[:MAX_BODY_LENGTH]}\n... (truncated, {len(body)} chars total)"
    return create_success_response(
        [
            f"{method} request to {url}",
            f"Status: {response.status} {response.status_text}".rstrip(),
            f"Response: {body}",
        ]
    )


class ApiRequestTool(ApiToolBase):
    """One HTTP verb; subclasses only set the name and method"""

    method: ClassVar[str]
    has_body: ClassVar[bool] = False
    args_type = ApiRequestArgs

    async def execute(self, args: ApiRequestArgs, context: ToolContext) -> ToolResponse:
        async def send(request_context: APIRequestContext) -> ToolResponse:
            kwargs: dict[str, Any] = {"headers": build_headers(args, self.has_body)}
            if self.has_body:
                kwargs["data"] = args.value
            logger.info(f"{self.method} {args.url}")
            response = await request_context.fetch(args.url, method=self.method, **kwargs)
            return await describe_response(self.method, args.url, response)

        return await self.safe_execute(context, send)


class GetRequestTool(ApiRequestTool):
    name = "playwright_get"
    description = "Perform an HTTP GET request"
    method = "GET"


class PostRequestTool(ApiRequestTool):
    name = "playwright_post"
    description = "Perform an HTTP POST request with a JSON body"
    method = "POST"
    has_body = True
    args_type = ApiBodyRequestArgs


class PutRequestTool(ApiRequestTool):
    name = "playwright_put"
    description = "Perform an HTTP PUT request with a JSON body"
    method = "PUT"
    has_body = True
    args_type = ApiBodyRequestArgs


class PatchRequestTool(ApiRequestTool):
    name = "playwright_patch"
    description = "Perform an HTTP PATCH request with a JSON body"
    method = "PATCH"
    has_body = True
    args_type = ApiBodyRequestArgs


class DeleteRequestTool(ApiRequestTool):
    name = "playwright_delete"
    description = "Perform an HTTP DELETE request"
    method = "DELETE"
