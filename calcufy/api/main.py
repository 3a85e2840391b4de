"""FastAPI application main entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from calcufy.api.routes import health, mcp
from calcufy.mcp.server.calculator import CalculatorServer
from calcufy.utils.config import Settings, settings
from calcufy.utils.logger import logger
from calcufy.widgets.registry import WidgetRegistry


def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the HTTP application for the given settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load widgets once and share the server for the process lifetime."""
        logger.info("Starting Calcufy MCP server...")
        registry = WidgetRegistry.from_settings(app_settings)
        app.state.mcp_server = CalculatorServer(
            registry,
            name=app_settings.server_name,
            version=app_settings.server_version,
        )
        logger.info("Application startup complete ✓")
        yield
        logger.info("Shutdown complete ✓")

    app = FastAPI(
        title="Calcufy Calculator MCP",
        description="Interactive calculator tool served over MCP (JSON-RPC 2.0)",
        version=app_settings.server_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # /mcp for direct clients, /api/mcp for the hosted deployment layout
    app.include_router(mcp.router)
    app.include_router(mcp.router, prefix="/api")
    app.include_router(health.router, prefix="/api")

    return app


app = create_app()

