"""STDIO transport for MCP servers."""

import asyncio
import sys
from typing import Optional, TextIO

from calcufy.mcp.server.base import MCPServerBase
from calcufy.mcp.server.transport import Transport, serve
from calcufy.utils.logger import setup_logger

# stdout carries JSON-RPC; everything else goes to stderr
logger = setup_logger("calcufy", stream=sys.stderr)


class StdioTransport(Transport):
    """Newline-delimited JSON over a pair of text streams."""

    def __init__(self, reader: TextIO = None, writer: TextIO = None):
        self.reader = reader or sys.stdin
        self.writer = writer or sys.stdout

    async def receive(self) -> Optional[str]:
        """Read a line without blocking the event loop."""
        loop = asyncio.get_running_loop()
        line = await loop.run_in_executor(None, self.reader.readline)
        return line.rstrip("\r\n") if line else None

    async def send(self, message: str) -> None:
        self.writer.write(message + "\n")
        self.writer.flush()


class StdioMCPServer:
    """MCP server using STDIO transport."""

    def __init__(self, server: MCPServerBase, transport: Transport = None):
        self.server = server
        self.transport = transport or StdioTransport()

    async def start(self):
        """Serve until stdin reaches EOF."""
        logger.info(f"Starting MCP STDIO server: {self.server.name}")
        try:
            await serve(self.server, self.transport)
        finally:
            logger.info(f"MCP STDIO server stopped: {self.server.name}")
