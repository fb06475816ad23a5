"""
Typed tool arguments

Each tool name maps to one argument record. Raw argument mappings coming in
over MCP are validated here, at the dispatch boundary, before any tool or
session code runs.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..browser.session import BrowserKind, LaunchOptions
from ..config import WAIT_UNTIL_VALUES

SAME_SITE_VALUES = ("Strict", "Lax", "None")
CONSOLE_LOG_TYPES = ("all", "error", "warning", "log", "info", "debug", "exception")


class ArgumentError(ValueError):
    """Raised when a raw argument mapping does not fit a tool's argument record"""


def _require_str(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        raise ArgumentError(f"'{key}' is required")
    if not isinstance(value, str):
        raise ArgumentError(f"'{key}' must be a string")
    if not value:
        raise ArgumentError(f"'{key}' must not be empty")
    return value


def _optional_str(raw: Mapping[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ArgumentError(f"'{key}' must be a string")
    return value


def _optional_int(raw: Mapping[str, Any], key: str, minimum: int = 0) -> int | None:
    value = raw.get(key)
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ArgumentError(f"'{key}' must be a number")
    if value < minimum:
        raise ArgumentError(f"'{key}' must be >= {minimum}")
    return int(value)


def _optional_bool(raw: Mapping[str, Any], key: str) -> bool | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ArgumentError(f"'{key}' must be a boolean")
    return value


def _optional_choice(raw: Mapping[str, Any], key: str, choices: tuple[str, ...]) -> str | None:
    value = _optional_str(raw, key)
    if value is not None and value not in choices:
        raise ArgumentError(f"'{key}' must be one of {', '.join(choices)} (got '{value}')")
    return value


def parse_browser_kind(raw: Mapping[str, Any]) -> BrowserKind | None:
    """Read the optional browserType argument shared by all page tools"""
    value = _optional_str(raw, "browserType")
    if value is None:
        return None
    try:
        return BrowserKind.parse(value)
    except ValueError as e:
        raise ArgumentError(str(e)) from e


@dataclass
class NoArgs:
    """Tools that take no arguments"""

    @classmethod
    def from_args(cls, raw: Mapping[str, Any]) -> "NoArgs":
        return cls()


@dataclass
class CookieArgs:
    """
    Cookie to inject before navigating.

    domain stays optional here: the navigation tool rejects a missing domain
    itself, after its session precondition checks. A cookie without a domain
    is not validated any further, so the domain error is what the caller sees.
    """

    name: str | None = None
    value: str | None = None
    domain: str | None = None
    path: str | None = None
    expires: float | None = None
    http_only: bool | None = None
    secure: bool | None = None
    same_site: str | None = None

    @classmethod
    def from_args(cls, raw: Any) -> "CookieArgs":
        if not isinstance(raw, Mapping):
            raise ArgumentError("'cookie' must be an object")
        domain = raw.get("domain")
        if not isinstance(domain, str) or not domain:
            return cls()

        value = raw.get("value")
        if not isinstance(value, str):
            raise ArgumentError("'cookie.value' must be a string")
        expires = raw.get("expires")
        if expires is not None and (isinstance(expires, bool) or not isinstance(expires, (int, float))):
            raise ArgumentError("'cookie.expires' must be a number")
        try:
            return cls(
                name=_require_str(raw, "name"),
                value=value,
                domain=domain,
                path=_optional_str(raw, "path") or None,
                expires=expires,
                http_only=_optional_bool(raw, "httpOnly"),
                secure=_optional_bool(raw, "secure"),
                same_site=_optional_choice(raw, "sameSite", SAME_SITE_VALUES),
            )
        except ArgumentError as e:
            raise ArgumentError(f"cookie: {e}") from e


@dataclass
class NavigateArgs:
    url: str
    timeout: int | None = None
    wait_until: str | None = None
    cookie: CookieArgs | None = None
    launch: LaunchOptions = field(default_factory=LaunchOptions)

    @classmethod
    def from_args(cls, raw: Mapping[str, Any]) -> "NavigateArgs":
        cookie = raw.get("cookie")
        return cls(
            url=_require_str(raw, "url"),
            timeout=_optional_int(raw, "timeout"),
            wait_until=_optional_choice(raw, "waitUntil", WAIT_UNTIL_VALUES),
            cookie=CookieArgs.from_args(cookie) if cookie is not None else None,
            launch=LaunchOptions(
                headless=_optional_bool(raw, "headless"),
                width=_optional_int(raw, "width", minimum=1),
                height=_optional_int(raw, "height", minimum=1),
                user_agent=_optional_str(raw, "userAgent"),
            ),
        )


@dataclass
class ScreenshotArgs:
    name: str
    selector: str | None = None
    full_page: bool = False
    save_png: bool = False
    store_base64: bool = True
    downloads_dir: str | None = None

    @classmethod
    def from_args(cls, raw: Mapping[str, Any]) -> "ScreenshotArgs":
        full_page = _optional_bool(raw, "fullPage")
        save_png = _optional_bool(raw, "savePng")
        store_base64 = _optional_bool(raw, "storeBase64")
        return cls(
            name=_require_str(raw, "name"),
            selector=_optional_str(raw, "selector"),
            full_page=bool(full_page),
            save_png=bool(save_png),
            store_base64=True if store_base64 is None else store_base64,
            downloads_dir=_optional_str(raw, "downloadsDir"),
        )


@dataclass
class SelectorArgs:
    selector: str

    @classmethod
    def from_args(cls, raw: Mapping[str, Any]) -> "SelectorArgs":
        return cls(selector=_require_str(raw, "selector"))


@dataclass
class IframeClickArgs:
    iframe_selector: str
    selector: str

    @classmethod
    def from_args(cls, raw: Mapping[str, Any]) -> "IframeClickArgs":
        return cls(
            iframe_selector=_require_str(raw, "iframeSelector"),
            selector=_require_str(raw, "selector"),
        )


@dataclass
class SelectorValueArgs:
    selector: str
    value: str

    @classmethod
    def from_args(cls, raw: Mapping[str, Any]) -> "SelectorValueArgs":
        value = raw.get("value")
        if not isinstance(value, str):
            raise ArgumentError("'value' must be a string")
        return cls(selector=_require_str(raw, "selector"), value=value)


@dataclass
class EvaluateArgs:
    script: str

    @classmethod
    def from_args(cls, raw: Mapping[str, Any]) -> "EvaluateArgs":
        return cls(script=_require_str(raw, "script"))


@dataclass
class ConsoleLogsArgs:
    type: str = "all"
    search: str | None = None
    limit: int | None = None
    clear: bool = False

    @classmethod
    def from_args(cls, raw: Mapping[str, Any]) -> "ConsoleLogsArgs":
        return cls(
            type=_optional_choice(raw, "type", CONSOLE_LOG_TYPES) or "all",
            search=_optional_str(raw, "search"),
            limit=_optional_int(raw, "limit", minimum=1),
            clear=bool(_optional_bool(raw, "clear")),
        )


@dataclass
class ApiRequestArgs:
    """Arguments for the HTTP request tools; value is only used for verbs with a body"""

    url: str
    value: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    token: str | None = None

    @classmethod
    def from_args(cls, raw: Mapping[str, Any]) -> "ApiRequestArgs":
        headers = raw.get("headers") or {}
        if not isinstance(headers, Mapping) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in headers.items()
        ):
            raise ArgumentError("'headers' must be an object of string values")
        return cls(
            url=_require_str(raw, "url"),
            value=_optional_str(raw, "value"),
            headers=dict(headers),
            token=_optional_str(raw, "token"),
        )


@dataclass
class ApiBodyRequestArgs(ApiRequestArgs):
    """HTTP request arguments where a request body is mandatory"""

    @classmethod
    def from_args(cls, raw: Mapping[str, Any]) -> "ApiBodyRequestArgs":
        base = ApiRequestArgs.from_args(raw)
        if base.value is None:
            raise ArgumentError("'value' is required")
        return cls(url=base.url, value=base.value, headers=base.headers, token=base.token)
