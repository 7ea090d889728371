"""Errors raised by the MCP client and docs search pipeline."""
from typing import Optional


class McpClientError(Exception):
    """Base class for failures surfaced by the search pipeline."""


class InvalidArgument(McpClientError, ValueError):
    """Caller supplied an empty or otherwise unusable argument."""


class ToolUnavailable(McpClientError):
    """The endpoint does not advertise the requested tool."""

    def __init__(self, tool_name: str, endpoint_url: Optional[str] = None):
        self.tool_name = tool_name
        self.endpoint_url = endpoint_url
        where = f" at {endpoint_url}" if endpoint_url else ""
        super().__init__(f"Tool '{tool_name}' is not available{where}")


class InvocationFailed(McpClientError):
    """Transport or protocol failure while talking to an MCP endpoint.

    The underlying error is kept on ``__cause__`` (raise ... from ...).
    """
