"""Shared fixtures for the Microsoft Docs gateway tests."""
from contextlib import asynccontextmanager
from typing import List, Optional
from unittest.mock import AsyncMock

import pytest
from mcp.types import CallToolResult, ListToolsResult, TextContent, Tool

from docs_gateway.core.docs.service import MICROSOFT_DOCS_TOOL_NAME, MicrosoftDocsService
from docs_gateway.core.mcp.client import McpClientService
from docs_gateway.core.mcp.registry import EndpointRegistry
from docs_gateway.models import McpEndpointConfig, McpTransportType

ENDPOINT_URL = "https://learn.example.com/api/mcp"


def make_tool_listing(*names: str) -> ListToolsResult:
    return ListToolsResult(tools=[Tool(name=name, inputSchema={"type": "object"}) for name in names])


def make_text_result(*texts: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=text) for text in texts],
        isError=is_error,
    )


class FakeSession:
    """Stands in for an initialized ``mcp.ClientSession``."""

    def __init__(self, tools: Optional[List[str]] = None, result: Optional[CallToolResult] = None):
        self.list_tools = AsyncMock(return_value=make_tool_listing(*(tools or [])))
        self.call_tool = AsyncMock(return_value=result or make_text_result())


def attach_session(client: McpClientService, session: FakeSession) -> List[McpEndpointConfig]:
    """Route ``client.connect`` to ``session``; returns the configs it was opened with."""
    opened = []

    @asynccontextmanager
    async def fake_connect(config):
        opened.append(config)
        yield session

    client.connect = fake_connect
    return opened


@pytest.fixture
def endpoint_config():
    return McpEndpointConfig(
        name="MicrosoftLearn",
        endpoint_url=ENDPOINT_URL,
        transport_type=McpTransportType.HTTP,
        timeout_seconds=5,
    )


@pytest.fixture
def registry():
    return EndpointRegistry()


@pytest.fixture
def mcp_client(registry):
    return McpClientService(registry)


@pytest.fixture
def docs_session():
    """Session that advertises the docs search tool and returns one document."""
    return FakeSession(
        tools=[MICROSOFT_DOCS_TOOL_NAME, "microsoft_docs_fetch"],
        result=make_text_result('[{"title":"T1","content":"C1","contentUrl":"U1"}]'),
    )


@pytest.fixture
def docs_service(mcp_client, endpoint_config):
    return MicrosoftDocsService(mcp_client, endpoint_config)
