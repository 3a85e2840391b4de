"""JSON-RPC endpoint for MCP over HTTP."""

import json

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from calcufy.api.dependencies import get_mcp_server
from calcufy.mcp.server.base import INTERNAL_ERROR, INVALID_REQUEST
from calcufy.mcp.server.calculator import CalculatorServer
from calcufy.mcp.server.transport import parse_error_response
from calcufy.utils.logger import logger

router = APIRouter(tags=["mcp"])


@router.get("/mcp")
async def server_info(server: CalculatorServer = Depends(get_mcp_server)):
    """Describe the server for clients probing the endpoint."""
    return {
        "name": server.name,
        "version": server.version,
        "description": "Interactive Calculator MCP Server",
        "protocol": "MCP/JSON-RPC 2.0",
        "endpoints": {
            "mcp": "/api/mcp",
            "health": "/api/health",
        },
    }


@router.post("/mcp")
async def handle_rpc(request: Request, server: CalculatorServer = Depends(get_mcp_server)):
    """Handle one JSON-RPC message."""
    try:
        body = json.loads(await request.body())
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Invalid JSON received: {e}")
        return JSONResponse(parse_error_response(), status_code=400)

    try:
        response = await server.handle_request(body)
    except Exception as e:
        logger.exception(f"MCP request error: {e}")
        return JSONResponse(
            {
                "jsonrpc": "2.0",
                "id": None,
                "error": {"code": INTERNAL_ERROR, "message": "Internal error", "data": str(e)},
            },
            status_code=500,
        )

    if response is None:
        return Response(status_code=202)

    error = response.get("error")
    status_code = 400 if error and error["code"] == INVALID_REQUEST else 200
    return JSONResponse(response, status_code=status_code)
