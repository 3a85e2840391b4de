"""Transport adapters for line-oriented JSON-RPC streams."""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from calcufy.mcp.server.base import JSONRPC_VERSION, PARSE_ERROR, MCPServerBase
from calcufy.utils.logger import logger


class Transport(ABC):
    """A bidirectional message channel carrying one JSON document per message."""

    @abstractmethod
    async def receive(self) -> Optional[str]:
        """Return the next raw message, or None once the channel is closed."""

    @abstractmethod
    async def send(self, message: str) -> None:
        """Deliver one raw message."""

    async def close(self) -> None:
        pass


def parse_error_response() -> Dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": None,
        "error": {
            "code": PARSE_ERROR,
            "message": "Parse error",
        },
    }


async def serve(server: MCPServerBase, transport: Transport) -> None:
    """Pump requests from ``transport`` through ``server`` until it closes."""
    try:
        while True:
            raw = await transport.receive()
            if raw is None:
                break
            if not raw.strip():
                continue

            try:
                request = json.loads(raw)
            except json.JSONDecodeError as e:
                logger.error(f"Invalid JSON received: {e}")
                await transport.send(json.dumps(parse_error_response()))
                continue

            response = await server.handle_request(request)
            if response is not None:
                await transport.send(json.dumps(response, ensure_ascii=False))
    finally:
        await transport.close()
