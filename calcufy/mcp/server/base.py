"""Base MCP server class following Model Context Protocol specification."""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Optional

from calcufy.utils.logger import logger

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

# JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
# MCP: resource not found
RESOURCE_NOT_FOUND = -32002

Handler = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]


class MCPError(Exception):
    """Protocol-level failure, reported to the caller as a JSON-RPC error."""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data


class MCPTool:
    """Represents an MCP tool definition."""

    def __init__(
        self,
        name: str,
        description: str,
        input_schema: Dict[str, Any],
    ):
        self.name = name
        self.description = description
        self.input_schema = input_schema

    def to_dict(self) -> Dict[str, Any]:
        """Convert to MCP tool format."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class MCPServerBase(ABC):
    """Base class for MCP servers.

    Requests are dispatched through ``self.handlers``, a method name to
    coroutine table. Subclasses add entries (e.g. ``resources/list``) and
    advertise them in ``self.capabilities``.
    """

    def __init__(self, name: str, version: str = "1.0.0"):
        self.name = name
        self.version = version
        self.tools: Dict[str, MCPTool] = {}
        self.capabilities: Dict[str, Any] = {"tools": {}}
        self.handlers: Dict[str, Handler] = {
            "initialize": self._handle_initialize,
            "tools/list": self._handle_list_tools,
            "tools/call": self._handle_call_tool,
        }

    def register_tool(self, tool: MCPTool):
        """Register a tool with this server."""
        self.tools[tool.name] = tool
        logger.info(f"MCP Server '{self.name}' registered tool: {tool.name}")

    @abstractmethod
    async def execute_tool(self, tool_name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """
        Execute a tool with given arguments.

        Returns:
            The ``tools/call`` result (``content`` plus optional
            ``structuredContent``, ``_meta`` and ``isError``). Raise
            :class:`MCPError` for protocol-level failures.
        """
        pass

    async def handle_request(self, request: Any) -> Optional[Dict[str, Any]]:
        """Handle an MCP protocol request.

        Returns the response envelope, or None for a notification. Never raises.
        """
        if not isinstance(request, dict) or not isinstance(request.get("method"), str):
            request_id = request.get("id") if isinstance(request, dict) else None
            return self._error_response(request_id, INVALID_REQUEST, "Invalid Request")

        method = request["method"]
        params = request.get("params") or {}
        request_id = request.get("id")
        is_notification = "id" not in request

        if is_notification:
            logger.debug(f"Notification received: {method}")
            return None

        handler = self.handlers.get(method)
        if handler is None:
            return self._error_response(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")

        try:
            if not isinstance(params, dict):
                raise MCPError(INVALID_PARAMS, "Invalid params: expected an object")
            result = await handler(params)
        except MCPError as e:
            logger.warning(f"{method} failed: {e.message}")
            return self._error_response(request_id, e.code, e.message, e.data)
        except Exception as e:
            logger.exception(f"Error handling request {method}: {e}")
            return self._error_response(request_id, INTERNAL_ERROR, "Internal error", str(e))

        return self._result_response(request_id, result)

    async def _handle_initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle initialize request."""
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "serverInfo": {
                "name": self.name,
                "version": self.version,
            },
            "capabilities": self.capabilities,
        }

    async def _handle_list_tools(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle tools/list request."""
        return {"tools": [tool.to_dict() for tool in self.tools.values()]}

    async def _handle_call_tool(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle tools/call request."""
        tool_name = params.get("name")
        arguments = params.get("arguments") or {}

        if not isinstance(tool_name, str) or tool_name not in self.tools:
            raise MCPError(METHOD_NOT_FOUND, f"Unknown tool: {tool_name}")
        if not isinstance(arguments, dict):
            raise MCPError(INVALID_PARAMS, "Invalid params: arguments must be an object")

        logger.info(f"Executing tool {tool_name} with arguments: {sorted(arguments)}")
        return await self.execute_tool(tool_name, arguments)

    @staticmethod
    def _result_response(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "jsonrpc": JSONRPC_VERSION,
            "id": request_id,
            "result": result,
        }

    @staticmethod
    def _error_response(request_id: Any, code: int, message: str, data: Any = None) -> Dict[str, Any]:
        """Create an error response."""
        error: Dict[str, Any] = {
            "code": code,
            "message": message,
        }
        if data is not None:
            error["data"] = data
        return {
            "jsonrpc": JSONRPC_VERSION,
            "id": request_id,
            "error": error,
        }
