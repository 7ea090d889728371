"""Registered MCP endpoint routes."""
import logging
from typing import List
from fastapi import APIRouter, HTTPException

from ...dependencies.docs import McpClientDep
from ...models import EndpointHealth, EndpointSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/endpoints", tags=["endpoints"])


@router.get("", response_model=List[EndpointSummary])
async def list_endpoints(mcp_client: McpClientDep):
    """List registered MCP endpoints."""
    configs = mcp_client.get_all_endpoint_configs()
    return [EndpointSummary.from_config(config) for _, config in sorted(configs.items())]


@router.get("/{name}/health", response_model=EndpointHealth)
async def endpoint_health(name: str, mcp_client: McpClientDep):
    """Check that a registered endpoint answers a tool listing."""
    config = mcp_client.get_endpoint_config(name)
    if config is None:
        raise HTTPException(status_code=404, detail=f"Endpoint '{name}' is not registered")

    reachable = await mcp_client.test_connection(config.endpoint_url, config.transport_type)
    logger.info(f"Health check for {name}: reachable={reachable}")
    return EndpointHealth(name=name, endpoint_url=config.endpoint_url, reachable=reachable)
