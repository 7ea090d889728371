"""MCP endpoint configuration models."""
from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class McpTransportType(str, Enum):
    """Supported MCP client transports."""
    SSE = "sse"
    HTTP = "http"  # streamable HTTP


class McpEndpointConfig(BaseModel):
    """Connection settings for one MCP endpoint."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Registry key")
    endpoint_url: str = Field(..., min_length=1, description="MCP server URL")
    transport_type: McpTransportType = Field(default=McpTransportType.SSE)
    user_agent: Optional[str] = Field(default=None)
    custom_headers: Optional[Dict[str, str]] = Field(default=None)
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    # Retry settings
    enable_retry: bool = Field(default=True)
    max_retry_attempts: int = Field(default=3, ge=0)


class EndpointSummary(BaseModel):
    """Public view of a registered endpoint (headers are never exposed)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    endpoint_url: str
    transport_type: McpTransportType
    timeout_seconds: Optional[float] = None

    @classmethod
    def from_config(cls, config: McpEndpointConfig) -> "EndpointSummary":
        return cls(
            name=config.name,
            endpoint_url=config.endpoint_url,
            transport_type=config.transport_type,
            timeout_seconds=config.timeout_seconds,
        )


class EndpointHealth(BaseModel):
    """Result of an endpoint connection test."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    endpoint_url: str
    reachable: bool
