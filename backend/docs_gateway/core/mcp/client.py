"""Universal MCP client service.

Wraps the ``mcp`` SDK client transports behind a small API used by the docs
search pipeline: tool discovery, tool calls and text extraction from results.
Every session is opened and closed inside one ``async with`` block.
"""
import logging
import uuid
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Any, AsyncIterator, Dict, List, Optional

from mcp import ClientSession
from mcp.client.sse import sse_client
from mcp.client.streamable_http import streamablehttp_client
from mcp.types import CallToolResult, TextContent

from ..exceptions import InvalidArgument, InvocationFailed, McpClientError, ToolUnavailable
from .registry import EndpointRegistry
from ...models import McpEndpointConfig, McpTransportType

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Enterprise MCP Client/1.0"
DEFAULT_TIMEOUT_SECONDS = 30.0
CONNECTION_TEST_TIMEOUT_SECONDS = 10.0
# Text blocks with this prefix are upstream error notices, not documentation
ERROR_NOTICE_PREFIX = "an error occurred"


class McpClientService:
    """Talks to MCP endpoints described by ``McpEndpointConfig``."""

    def __init__(self, registry: Optional[EndpointRegistry] = None):
        self.registry = registry if registry is not None else EndpointRegistry()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    # --- Connection -------------------------------------------------------

    @staticmethod
    def build_headers(config: McpEndpointConfig) -> Dict[str, str]:
        headers = {"User-Agent": config.user_agent or DEFAULT_USER_AGENT}
        if config.custom_headers:
            headers.update(config.custom_headers)
        return headers

    @asynccontextmanager
    async def connect(self, config: McpEndpointConfig) -> AsyncIterator[ClientSession]:
        """Open an initialized client session for ``config``."""
        if config is None:
            raise InvalidArgument("Endpoint config is required")

        headers = self.build_headers(config)
        timeout = config.timeout_seconds or DEFAULT_TIMEOUT_SECONDS

        if config.transport_type == McpTransportType.SSE:
            transport = sse_client(
                config.endpoint_url,
                headers=headers,
                timeout=timeout,
                sse_read_timeout=timeout,
            )
        elif config.transport_type == McpTransportType.HTTP:
            transport = streamablehttp_client(
                config.endpoint_url,
                headers=headers,
                timeout=timedelta(seconds=timeout),
                sse_read_timeout=timedelta(seconds=timeout),
            )
        else:
            raise InvalidArgument(f"Transport type {config.transport_type} is not supported")

        logger.debug(f"Opening {config.transport_type.value} session to {config.endpoint_url}")
        async with transport as streams:
            # sse_client yields (read, write); streamable HTTP adds a session-id getter
            read_stream, write_stream = streams[0], streams[1]
            async with ClientSession(
                read_stream,
                write_stream,
                read_timeout_seconds=timedelta(seconds=timeout),
            ) as session:
                await session.initialize()
                yield session
        logger.debug(f"Closed session to {config.endpoint_url}")

    # --- Tool operations --------------------------------------------------

    async def list_tools(self, config: McpEndpointConfig) -> List[str]:
        """Names of the tools advertised by the endpoint."""
        self._ensure_open()
        try:
            async with self.connect(config) as session:
                return await self._discover_tools(session)
        except McpClientError:
            raise
        except Exception as e:
            logger.error(f"Tool discovery failed for {config.endpoint_url}: {e}", exc_info=True)
            raise InvocationFailed(f"Tool discovery failed: {e}") from e

    async def call_tool(
        self,
        config: McpEndpointConfig,
        tool_name: str,
        parameters: Dict[str, Any],
    ) -> List[str]:
        """Call ``tool_name`` without checking discovery first."""
        self._ensure_open()
        self._validate_call(tool_name, parameters)
        try:
            async with self.connect(config) as session:
                result = await self._call(session, tool_name, parameters)
        except McpClientError:
            raise
        except Exception as e:
            logger.error(f"Failed to call tool {tool_name}: {e}", exc_info=True)
            raise InvocationFailed(f"Tool call failed for '{tool_name}': {e}") from e
        return self.process_response(result)

    async def invoke(
        self,
        config: McpEndpointConfig,
        tool_name: str,
        parameters: Dict[str, Any],
    ) -> List[str]:
        """Discover tools and call ``tool_name`` over a single session.

        Returns the usable text payloads of the result. Raises
        ``ToolUnavailable`` when the endpoint does not advertise the tool and
        ``InvocationFailed`` on any transport or protocol error.
        """
        self._ensure_open()
        self._validate_call(tool_name, parameters)

        result: Optional[CallToolResult] = None
        try:
            async with self.connect(config) as session:
                tool_names = await self._discover_tools(session)
                if tool_name in tool_names:
                    result = await self._call(session, tool_name, parameters)
        except McpClientError:
            raise
        except Exception as e:
            logger.error(f"Failed to invoke tool {tool_name} at {config.endpoint_url}: {e}", exc_info=True)
            raise InvocationFailed(f"Tool call failed for '{tool_name}': {e}") from e

        if result is None:
            logger.error(f"Tool '{tool_name}' is not advertised by {config.endpoint_url}")
            raise ToolUnavailable(tool_name, config.endpoint_url)

        return self.process_response(result)

    def process_response(self, result: Optional[CallToolResult]) -> List[str]:
        """Extract usable text blocks from a tool result."""
        if result is None or not result.content:
            return []

        if result.isError:
            logger.warning("Tool result is flagged as an error; filtering its content")

        responses = []
        for block in result.content:
            if not isinstance(block, TextContent):
                continue
            text = block.text
            if not text or not text.strip():
                continue
            if text.lower().startswith(ERROR_NOTICE_PREFIX):
                logger.debug("Dropping upstream error notice from tool result")
                continue
            responses.append(text)
            logger.debug(f"Processed content block with {len(text)} characters")

        logger.info(f"Processed {len(responses)} valid content blocks from MCP response")
        return responses

    async def test_connection(
        self,
        endpoint_url: str,
        transport_type: McpTransportType = McpTransportType.SSE,
    ) -> bool:
        """Return True when the endpoint answers a tool listing."""
        if not endpoint_url or not endpoint_url.strip():
            logger.warning("Connection test skipped: endpoint URL is empty")
            return False

        config = McpEndpointConfig(
            name=f"test-{uuid.uuid4().hex}",
            endpoint_url=endpoint_url,
            transport_type=transport_type,
            timeout_seconds=CONNECTION_TEST_TIMEOUT_SECONDS,
        )
        try:
            tools = await self.list_tools(config)
        except Exception as e:
            logger.warning(f"Connection test failed for {endpoint_url}: {e}")
            return False

        logger.info(f"Connection test successful for {endpoint_url}. Found {len(tools)} tools")
        return True

    # --- Registry passthroughs --------------------------------------------

    def register_endpoint(self, name: str, config: McpEndpointConfig) -> McpEndpointConfig:
        return self.registry.register(name, config)

    def get_endpoint_config(self, name: str) -> Optional[McpEndpointConfig]:
        return self.registry.get(name)

    def get_all_endpoint_configs(self) -> Dict[str, McpEndpointConfig]:
        return self.registry.all()

    # --- Lifecycle --------------------------------------------------------

    async def aclose(self) -> None:
        """Release every registry entry and refuse further calls."""
        if self._closed:
            return
        self._closed = True
        self.registry.clear()
        logger.info("McpClientService closed")

    # --- Internals --------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise InvocationFailed("MCP client service is closed")

    @staticmethod
    def _validate_call(tool_name: str, parameters: Dict[str, Any]) -> None:
        if not tool_name or not tool_name.strip():
            raise InvalidArgument("Tool name cannot be empty")
        if parameters is None:
            raise InvalidArgument("Tool parameters are required")

    @staticmethod
    async def _discover_tools(session: ClientSession) -> List[str]:
        listing = await session.list_tools()
        names = [tool.name for tool in listing.tools]
        logger.info(f"Discovered {len(names)} tools from MCP endpoint")
        return names

    @staticmethod
    async def _call(session: ClientSession, tool_name: str, parameters: Dict[str, Any]) -> CallToolResult:
        logger.debug(f"Calling tool {tool_name} with {len(parameters)} parameters")
        result = await session.call_tool(tool_name, parameters)
        logger.info(
            f"Successfully called tool {tool_name}. "
            f"Response contains {len(result.content or [])} content blocks"
        )
        return result
