"""
Playwright Session MCP Server

Browser automation and HTTP request tools over MCP, with a single managed
Playwright browser session shared across tool calls.
"""

__version__ = "1.0.0"
