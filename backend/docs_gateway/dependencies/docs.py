"""Docs search dependency management."""
from typing import Annotated
from fastapi import Depends

from ..core.config import Settings
from ..core.docs.service import MicrosoftDocsService, create_microsoft_learn_config
from ..core.mcp.client import McpClientService
from ..core.mcp.registry import EndpointRegistry
from ..models import McpTransportType


# Process-wide instances - initialized at startup
_mcp_client: McpClientService | None = None
_docs_service: MicrosoftDocsService | None = None


def init_docs_service(settings: Settings) -> MicrosoftDocsService:
    """Initialize the MCP client and docs service instances."""
    global _mcp_client, _docs_service
    if _docs_service is None:
        _mcp_client = McpClientService(EndpointRegistry())
        endpoint_config = create_microsoft_learn_config(
            settings.microsoft_docs_endpoint_url,
            transport_type=McpTransportType(settings.mcp_transport),
            timeout_seconds=settings.mcp_timeout_seconds,
            user_agent=settings.mcp_user_agent,
            enable_retry=settings.mcp_enable_retry,
            max_retry_attempts=settings.mcp_max_retry_attempts,
        )
        _docs_service = MicrosoftDocsService(_mcp_client, endpoint_config)
    return _docs_service


async def shutdown_docs_service() -> None:
    """Close the MCP client and drop the instances."""
    global _mcp_client, _docs_service
    if _mcp_client is not None:
        await _mcp_client.aclose()
    _mcp_client = None
    _docs_service = None


def get_docs_service() -> MicrosoftDocsService:
    """Get the docs service instance."""
    if _docs_service is None:
        raise RuntimeError("Docs service not initialized")
    return _docs_service


def get_mcp_client() -> McpClientService:
    """Get the MCP client instance."""
    if _mcp_client is None:
        raise RuntimeError("MCP client not initialized")
    return _mcp_client


# Type aliases for cleaner dependency injection
DocsServiceDep = Annotated[MicrosoftDocsService, Depends(get_docs_service)]
McpClientDep = Annotated[McpClientService, Depends(get_mcp_client)]
