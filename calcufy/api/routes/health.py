"""Health check routes."""

from fastapi import APIRouter, Depends

from calcufy.api.dependencies import get_mcp_server
from calcufy.mcp.server.calculator import CalculatorServer

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    """Basic health check."""
    return {"status": "healthy", "service": "calcufy-calculator"}


@router.get("/widgets")
async def widgets_health(server: CalculatorServer = Depends(get_mcp_server)):
    """Report the widgets loaded at start-up."""
    return {
        "status": "healthy",
        "widgets": [widget.uri for widget in server.registry.list_widgets()],
    }
