"""
Tool response envelope

Every tool returns the same structure: an isError flag and a non-empty list
of text content items. Callers branch on isError only; the text is for humans.
"""

from .types import TextContent, ToolResponse


def _text(text: str) -> TextContent:
    return {"type": "text", "text": text}


def create_success_response(message: str | list[str]) -> ToolResponse:
    """Build a success envelope from one message or several lines"""
    messages = [message] if isinstance(message, str) else list(message)
    if not messages:
        messages = [""]
    return {"isError": False, "content": [_text(m) for m in messages]}


def create_error_response(message: str) -> ToolResponse:
    """Build an error envelope"""
    return {"isError": True, "content": [_text(message)]}


def response_text(response: ToolResponse) -> str:
    """Join the text of every content item, one per line"""
    return "\n".join(item["text"] for item in response["content"])
