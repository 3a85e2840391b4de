"""MCP server exposing the staged calculator tool and its widgets."""

from typing import Any, Dict

from pydantic import ValidationError

from calcufy.core.engine import Operation
from calcufy.core.models import CalculationRequest
from calcufy.core.router import render_tool_result, route, widget_meta
from calcufy.mcp.server.base import (
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    RESOURCE_NOT_FOUND,
    MCPError,
    MCPServerBase,
    MCPTool,
)
from calcufy.utils.logger import logger
from calcufy.widgets.registry import WIDGET_MIME_TYPE, WidgetNotFoundError, WidgetRegistry

TOOL_NAME = "calculator_tool"
TOOL_DESCRIPTION = (
    "An interactive calculator that performs basic arithmetic operations "
    "(addition, subtraction, multiplication, division). The user can select an "
    "operation and provide two numbers to calculate."
)

INPUT_SCHEMA = {
    "type": "object",
    "properties": {
        "operation": {
            "type": "string",
            "enum": [op.value for op in Operation],
            "description": "The operation to perform",
        },
        "operand1": {
            "type": "number",
            "description": "The first number",
        },
        "operand2": {
            "type": "number",
            "description": "The second number",
        },
    },
    # Every field is optional: missing ones select the earlier stages
}


class CalculatorServer(MCPServerBase):
    """Single-tool MCP server with widget resources."""

    def __init__(self, registry: WidgetRegistry, name: str = "calcufy-calculator", version: str = "1.0.0"):
        super().__init__(name=name, version=version)
        self.registry = registry
        self.capabilities["resources"] = {}
        self.handlers["resources/list"] = self._handle_list_resources
        self.handlers["resources/read"] = self._handle_read_resource
        self.register_tool(MCPTool(name=TOOL_NAME, description=TOOL_DESCRIPTION, input_schema=INPUT_SCHEMA))

    async def execute_tool(self, tool_name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        if tool_name != TOOL_NAME:
            raise MCPError(METHOD_NOT_FOUND, f"Unknown tool: {tool_name}")

        try:
            request = CalculationRequest.model_validate(arguments)
        except ValidationError as e:
            raise MCPError(
                INVALID_PARAMS,
                "Invalid params",
                e.errors(include_url=False, include_context=False, include_input=False),
            ) from e

        response = route(request)
        logger.info(f"{TOOL_NAME} stage={response.stage}")
        return render_tool_result(response, self.registry)

    async def _handle_list_resources(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "resources": [
                {
                    "uri": widget.uri,
                    "name": widget.title,
                    "description": f"{widget.title} widget markup",
                    "mimeType": WIDGET_MIME_TYPE,
                    "_meta": widget_meta(),
                }
                for widget in self.registry.list_widgets()
            ]
        }

    async def _handle_read_resource(self, params: Dict[str, Any]) -> Dict[str, Any]:
        uri = params.get("uri")
        if not isinstance(uri, str):
            raise MCPError(INVALID_PARAMS, "Invalid params: 'uri' is required")

        try:
            widget = self.registry.resolve(uri)
        except WidgetNotFoundError as e:
            raise MCPError(RESOURCE_NOT_FOUND, str(e), {"uri": uri}) from e

        return {
            "contents": [
                {
                    "uri": widget.uri,
                    "mimeType": WIDGET_MIME_TYPE,
                    "text": widget.html,
                    "_meta": widget_meta(),
                }
            ]
        }
