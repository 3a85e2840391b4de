"""MCP server for the calculator tool over stdio."""

import asyncio

from dotenv import load_dotenv

from calcufy.mcp.server.calculator import CalculatorServer
from calcufy.mcp.server.stdio_server import StdioMCPServer, logger
from calcufy.utils.config import Settings
from calcufy.widgets.registry import WidgetRegistry


async def main():
    """Run calculator MCP server."""
    load_dotenv()
    settings = Settings()
    registry = WidgetRegistry.from_settings(settings)
    server = CalculatorServer(registry, name=settings.server_name, version=settings.server_version)
    logger.info(f"Widget source: {settings.widget_source} (base URL {settings.base_url})")
    await StdioMCPServer(server).start()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
