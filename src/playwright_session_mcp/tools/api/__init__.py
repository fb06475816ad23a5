"""HTTP request tools backed by Playwright's APIRequestContext."""

from .requests import (
    DeleteRequestTool,
    GetRequestTool,
    PatchRequestTool,
    PostRequestTool,
    PutRequestTool,
)

__all__ = [
    "DeleteRequestTool",
    "GetRequestTool",
    "PatchRequestTool",
    "PostRequestTool",
    "PutRequestTool",
]
