"""Tests for typed tool argument records."""

import pytest

from playwright_session_mcp.browser.session import BrowserKind
from playwright_session_mcp.tools.args import (
    ApiBodyRequestArgs,
    ApiRequestArgs,
    ArgumentError,
    ConsoleLogsArgs,
    CookieArgs,
    IframeClickArgs,
    NavigateArgs,
    ScreenshotArgs,
    SelectorValueArgs,
    parse_browser_kind,
)


class TestNavigateArgs:
    def test_minimal(self):
        args = NavigateArgs.from_args({"url": "https://example.com"})

        assert args.url == "https://example.com"
        assert args.timeout is None
        assert args.wait_until is None
        assert args.cookie is None
        assert args.launch.headless is None

    def test_full(self):
        args = NavigateArgs.from_args(
            {
                "url": "https://example.com",
                "timeout": 5000,
                "waitUntil": "domcontentloaded",
                "browserType": "webkit",
                "width": 800,
                "height": 600,
                "headless": True,
                "userAgent": "bot/1.0",
            }
        )

        assert args.timeout == 5000
        assert args.wait_until == "domcontentloaded"
        assert (args.launch.width, args.launch.height) == (800, 600)
        assert args.launch.headless is True
        assert args.launch.user_agent == "bot/1.0"

    @pytest.mark.parametrize(
        "raw, message",
        [
            ({}, "'url' is required"),
            ({"url": 42}, "'url' must be a string"),
            ({"url": ""}, "'url' must not be empty"),
            ({"url": "https://x.test", "timeout": "soon"}, "'timeout' must be a number"),
            ({"url": "https://x.test", "timeout": True}, "'timeout' must be a number"),
            ({"url": "https://x.test", "timeout": -1}, "'timeout' must be >= 0"),
            ({"url": "https://x.test", "waitUntil": "idle"}, "'waitUntil' must be one of"),
            ({"url": "https://x.test", "width": 0}, "'width' must be >= 1"),
            ({"url": "https://x.test", "headless": "yes"}, "'headless' must be a boolean"),
            ({"url": "https://x.test", "cookie": "s=v"}, "'cookie' must be an object"),
        ],
    )
    def test_invalid(self, raw, message):
        with pytest.raises(ArgumentError, match=message):
            NavigateArgs.from_args(raw)


class TestCookieArgs:
    def test_domain_is_optional_here(self):
        cookie = CookieArgs.from_args({"name": "s", "value": "v"})

        assert cookie.domain is None
        assert cookie.path is None

    @pytest.mark.parametrize(
        "raw", [{"value": "v"}, {"name": 1, "value": None}, {"name": "s", "value": "v", "domain": ""}]
    )
    def test_cookie_without_domain_is_not_validated_further(self, raw):
        assert CookieArgs.from_args(raw).domain is None

    def test_empty_path_becomes_none(self):
        cookie = CookieArgs.from_args({"name": "s", "value": "v", "domain": "a.test", "path": ""})

        assert cookie.domain == "a.test"
        assert cookie.path is None

    def test_empty_value_allowed(self):
        assert CookieArgs.from_args({"name": "s", "value": "", "domain": "a.test"}).value == ""

    @pytest.mark.parametrize(
        "raw, message",
        [
            ({"value": "v", "domain": "a.test"}, "cookie: 'name' is required"),
            ({"name": "s", "domain": "a.test"}, "'cookie.value' must be a string"),
            (
                {"name": "s", "value": "v", "domain": "a.test", "expires": "never"},
                "'cookie.expires' must be a number",
            ),
            (
                {"name": "s", "value": "v", "domain": "a.test", "sameSite": "lax"},
                "cookie: 'sameSite' must be one of",
            ),
            (
                {"name": "s", "value": "v", "domain": "a.test", "secure": 1},
                "cookie: 'secure' must be a boolean",
            ),
        ],
    )
    def test_invalid(self, raw, message):
        with pytest.raises(ArgumentError, match=message):
            CookieArgs.from_args(raw)


class TestBrowserKindArgument:
    def test_absent(self):
        assert parse_browser_kind({}) is None

    def test_parsed(self):
        assert parse_browser_kind({"browserType": "FIREFOX"}) is BrowserKind.FIREFOX

    def test_unknown(self):
        with pytest.raises(ArgumentError, match="browserType must be one of"):
            parse_browser_kind({"browserType": "safari"})


class TestPageToolArgs:
    def test_screenshot_defaults(self):
        args = ScreenshotArgs.from_args({"name": "home"})

        assert args.full_page is False
        assert args.save_png is False
        assert args.store_base64 is True
        assert args.downloads_dir is None

    def test_screenshot_store_base64_disabled(self):
        assert ScreenshotArgs.from_args({"name": "h", "storeBase64": False}).store_base64 is False

    def test_iframe_click_requires_both_selectors(self):
        with pytest.raises(ArgumentError, match="'iframeSelector' is required"):
            IframeClickArgs.from_args({"selector": "button"})

    def test_fill_value_must_be_string(self):
        with pytest.raises(ArgumentError, match="'value' must be a string"):
            SelectorValueArgs.from_args({"selector": "#age", "value": 42})

    def test_console_logs_defaults(self):
        args = ConsoleLogsArgs.from_args({})

        assert args.type == "all"
        assert args.limit is None
        assert args.clear is False

    def test_console_logs_rejects_zero_limit(self):
        with pytest.raises(ArgumentError, match="'limit' must be >= 1"):
            ConsoleLogsArgs.from_args({"limit": 0})


class TestApiArgs:
    def test_get_request(self):
        args = ApiRequestArgs.from_args(
            {"url": "https://api.example.com", "headers": {"X-Trace": "1"}, "token": "t"}
        )

        assert args.headers == {"X-Trace": "1"}
        assert args.token == "t"
        assert args.value is None

    def test_headers_must_be_strings(self):
        with pytest.raises(ArgumentError, match="'headers'"):
            ApiRequestArgs.from_args({"url": "https://api.example.com", "headers": {"X-N": 1}})

    def test_body_required_for_body_verbs(self):
        with pytest.raises(ArgumentError, match="'value' is required"):
            ApiBodyRequestArgs.from_args({"url": "https://api.example.com"})

    def test_body_request(self):
        args = ApiBodyRequestArgs.from_args({"url": "https://api.example.com", "value": "{}"})

        assert isinstance(args, ApiBodyRequestArgs)
        assert args.value == "{}"
