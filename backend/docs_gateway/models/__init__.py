"""Models package for the Microsoft Docs gateway."""
from .search import (
    MAX_QUERY_LENGTH,
    SearchRequest,
    DocumentationChunk,
    SearchResponse,
)
from .mcp import McpTransportType, McpEndpointConfig, EndpointSummary, EndpointHealth

__all__ = [
    "MAX_QUERY_LENGTH",
    "SearchRequest",
    "DocumentationChunk",
    "SearchResponse",
    "McpTransportType",
    "McpEndpointConfig",
    "EndpointSummary",
    "EndpointHealth",
]
