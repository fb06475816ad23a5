"""Tools that drive the browser page."""

from .console import ConsoleLogsTool
from .content import EvaluateTool, VisibleHtmlTool, VisibleTextTool
from .interaction import ClickTool, FillTool, HoverTool, IframeClickTool, SelectTool
from .navigation import CloseBrowserTool, GoBackTool, GoForwardTool, NavigationTool
from .screenshot import ScreenshotTool

__all__ = [
    "ClickTool",
    "CloseBrowserTool",
    "ConsoleLogsTool",
    "EvaluateTool",
    "FillTool",
    "GoBackTool",
    "GoForwardTool",
    "HoverTool",
    "IframeClickTool",
    "NavigationTool",
    "ScreenshotTool",
    "SelectTool",
    "VisibleHtmlTool",
    "VisibleTextTool",
]
