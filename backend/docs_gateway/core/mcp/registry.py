"""Thread-safe registry of MCP endpoint configurations."""
import logging
import threading
from typing import Dict, Optional

from ..exceptions import InvalidArgument
from ...models import McpEndpointConfig

logger = logging.getLogger(__name__)


class EndpointRegistry:
    """Maps endpoint names to immutable endpoint configs.

    Entries are frozen models, so a reader either sees the previous config or
    the new one in full. Registering an existing name replaces it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._configs: Dict[str, McpEndpointConfig] = {}

    def register(self, name: str, config: McpEndpointConfig) -> McpEndpointConfig:
        """Store ``config`` under ``name`` and return the stored entry."""
        if not name or not name.strip():
            raise InvalidArgument("Endpoint name cannot be empty")
        if config is None:
            raise InvalidArgument("Endpoint config is required")

        entry = config if config.name == name else config.model_copy(update={"name": name})
        with self._lock:
            self._configs[name] = entry

        logger.info(f"Registered endpoint configuration: {name} -> {entry.endpoint_url}")
        return entry

    def get(self, name: str) -> Optional[McpEndpointConfig]:
        with self._lock:
            return self._configs.get(name)

    def unregister(self, name: str) -> Optional[McpEndpointConfig]:
        with self._lock:
            return self._configs.pop(name, None)

    def all(self) -> Dict[str, McpEndpointConfig]:
        """Snapshot of every registered config."""
        with self._lock:
            return dict(self._configs)

    def clear(self) -> None:
        with self._lock:
            count = len(self._configs)
            self._configs.clear()
        logger.info(f"Released {count} endpoint configuration(s)")

    def __len__(self) -> int:
        with self._lock:
            return len(self._configs)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._configs
