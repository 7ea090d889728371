"""Microsoft documentation search service."""
import logging
from typing import Optional

from ..exceptions import InvalidArgument, McpClientError
from ..mcp.client import McpClientService
from .normalizer import normalize_response
from .sanitizer import sanitize_query
from ...models import McpEndpointConfig, McpTransportType, SearchResponse

logger = logging.getLogger(__name__)

MICROSOFT_DOCS_TOOL_NAME = "microsoft_docs_search"
MICROSOFT_LEARN_ENDPOINT_NAME = "MicrosoftLearn"
DEFAULT_MICROSOFT_LEARN_URL = "https://learn.microsoft.com/api/mcp"


def create_microsoft_learn_config(
    endpoint_url: str,
    transport_type: McpTransportType = McpTransportType.HTTP,
    timeout_seconds: float = 300.0,
    user_agent: str = "Enterprise Microsoft Docs MCP Client/1.0",
    enable_retry: bool = True,
    max_retry_attempts: int = 3,
) -> McpEndpointConfig:
    """Endpoint configuration for the Microsoft Learn MCP server."""
    if not endpoint_url or not endpoint_url.strip():
        raise InvalidArgument("Endpoint URL cannot be empty")

    return McpEndpointConfig(
        name=MICROSOFT_LEARN_ENDPOINT_NAME,
        endpoint_url=endpoint_url,
        transport_type=transport_type,
        user_agent=user_agent,
        timeout_seconds=timeout_seconds,
        enable_retry=enable_retry,
        max_retry_attempts=max_retry_attempts,
    )


class MicrosoftDocsService:
    """Searches Microsoft Learn through its MCP server."""

    def __init__(self, mcp_client: McpClientService, endpoint_config: Optional[McpEndpointConfig] = None):
        self.mcp_client = mcp_client
        self._default_config = endpoint_config or create_microsoft_learn_config(DEFAULT_MICROSOFT_LEARN_URL)
        self.mcp_client.register_endpoint(MICROSOFT_LEARN_ENDPOINT_NAME, self._default_config)

    @property
    def endpoint_config(self) -> McpEndpointConfig:
        """Currently registered Microsoft Learn config."""
        config = self.mcp_client.get_endpoint_config(MICROSOFT_LEARN_ENDPOINT_NAME)
        return config if config is not None else self._default_config

    async def query_docs(self, query: str) -> SearchResponse:
        """
        Search Microsoft documentation with a natural-language query.

        Raises:
            InvalidArgument: empty query.
            ToolUnavailable: endpoint does not expose the search tool.
            InvocationFailed: transport or protocol failure.
        """
        sanitized = sanitize_query(query)
        config = self.endpoint_config

        logger.info(f"Starting Microsoft Docs search for query: {sanitized[:100]}")

        try:
            raw_responses = await self.mcp_client.invoke(
                config,
                MICROSOFT_DOCS_TOOL_NAME,
                {"question": sanitized},
            )
        except McpClientError as e:
            logger.error(f"Failed to search Microsoft documentation: {e}")
            raise

        response = normalize_response(raw_responses, sanitized, config.endpoint_url)

        logger.info(
            f"Completed Microsoft Docs search. Found {response.total_chunks} documentation chunks"
        )
        return response
