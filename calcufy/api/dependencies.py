"""FastAPI dependencies."""

from fastapi import Request

from calcufy.mcp.server.calculator import CalculatorServer


def get_mcp_server(request: Request) -> CalculatorServer:
    """The server built during application start-up."""
    return request.app.state.mcp_server
