"""
Tool implementations

Every tool is a ToolHandler subclass with a unique name; default_tools()
returns one instance of each, which the dispatcher registers by name.
"""

from .api import (
    DeleteRequestTool,
    GetRequestTool,
    PatchRequestTool,
    PostRequestTool,
    PutRequestTool,
)
from .args import ArgumentError
from .base import ApiToolBase, BrowserToolBase, Notifier, ToolContext, ToolHandler
from .browser import (
    ClickTool,
    CloseBrowserTool,
    ConsoleLogsTool,
    EvaluateTool,
    FillTool,
    GoBackTool,
    GoForwardTool,
    HoverTool,
    IframeClickTool,
    NavigationTool,
    ScreenshotTool,
    SelectTool,
    VisibleHtmlTool,
    VisibleTextTool,
)


def default_tools() -> list[ToolHandler]:
    """Instantiate every built-in tool"""
    return [
        NavigationTool(),
        ScreenshotTool(),
        ClickTool(),
        IframeClickTool(),
        FillTool(),
        SelectTool(),
        HoverTool(),
        EvaluateTool(),
        VisibleTextTool(),
        VisibleHtmlTool(),
        GoBackTool(),
        GoForwardTool(),
        ConsoleLogsTool(),
        CloseBrowserTool(),
        GetRequestTool(),
        PostRequestTool(),
        PutRequestTool(),
        PatchRequestTool(),
        DeleteRequestTool(),
    ]


__all__ = [
    "ApiToolBase",
    "ArgumentError",
    "BrowserToolBase",
    "Notifier",
    "ToolContext",
    "ToolHandler",
    "default_tools",
]
