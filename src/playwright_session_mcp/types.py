"""
Type Definitions

Define TypedDict classes for the tool response envelope and the data
structures passed to and from Playwright.
"""

from typing import Literal, TypedDict


class TextContent(TypedDict):
    """A single text item in a tool response"""

    type: Literal["text"]
    text: str


class ToolResponse(TypedDict):
    """
    Uniform result envelope returned by every tool.

    content is never empty; isError is the only field callers branch on.
    """

    isError: bool
    content: list[TextContent]


class PlaywrightCookie(TypedDict, total=False):
    """Cookie in the shape accepted by BrowserContext.add_cookies()"""

    name: str
    value: str
    domain: str
    path: str
    expires: float
    httpOnly: bool
    secure: bool
    sameSite: Literal["Strict", "Lax", "None"]


class SessionStatus(TypedDict):
    """Snapshot of the current browser session"""

    active: bool
    browser_kind: str | None
    connected: bool
    page_open: bool
    console_entries: int
    screenshots: list[str]
