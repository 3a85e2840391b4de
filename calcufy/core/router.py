"""Interaction router: picks the widget stage for a calculator tool call."""

import math
from typing import Any, Dict, Optional

from calcufy.core.engine import DivisionByZeroError, compute, format_number, symbol_for, to_float
from calcufy.core.models import (
    AwaitingOperandsResponse,
    AwaitingOperationResponse,
    CalculationRequest,
    CompletedResponse,
    ErrorResponse,
    Stage,
    StagedResponse,
)
from calcufy.utils.logger import logger
from calcufy.widgets.registry import WidgetRegistry

SELECT_OPERATION_PROMPT = "Please select a calculation operation from the options below."

# (invoking, invoked) status strings shown by the host while the widget loads
INVOCATION_STATUS = {
    Stage.AWAITING_OPERATION: ("Loading calculator...", "Calculator ready!"),
    Stage.AWAITING_OPERANDS: ("Preparing input form...", "Ready for input!"),
    Stage.COMPLETED: ("Calculating...", "Calculation complete!"),
}


def route(request: CalculationRequest) -> StagedResponse:
    """Map the supplied arguments onto a stage response.

    Nothing is remembered between calls: the host resubmits the chosen
    operation together with the operands, and the stage is recomputed.
    """
    stage = request.stage

    if stage is Stage.AWAITING_OPERATION:
        return AwaitingOperationResponse(message=SELECT_OPERATION_PROMPT)

    operation = request.operation
    symbol = symbol_for(operation)

    if stage is Stage.AWAITING_OPERANDS:
        return AwaitingOperandsResponse(
            message=f"Please enter two numbers to {operation.value}.",
            operation=operation,
            symbol=symbol,
        )

    try:
        value = compute(operation, request.operand1, request.operand2)
    except DivisionByZeroError as e:
        logger.warning(
            f"Calculation rejected: {format_number(request.operand1)} {symbol} "
            f"{format_number(request.operand2)}: {e}"
        )
        return ErrorResponse(message=f"Error: {e}")

    return CompletedResponse(
        message=(
            f"{format_number(request.operand1)} {symbol} "
            f"{format_number(request.operand2)} = {format_number(value)}"
        ),
        operation=operation,
        symbol=symbol,
        operand1=to_float(request.operand1),
        operand2=to_float(request.operand2),
        value=value,
    )


def json_number(value: float) -> Optional[float]:
    """JSON has no inf/nan; non-finite numbers travel as null."""
    return value if math.isfinite(value) else None


def structured_content(response: StagedResponse) -> Dict[str, Any]:
    """Machine-readable payload for the stage, empty when there is none."""
    if isinstance(response, AwaitingOperandsResponse):
        return {"operation": response.operation.value, "symbol": response.symbol}
    if isinstance(response, CompletedResponse):
        return {
            "step": "show-result",
            "operation": response.operation.value,
            "symbol": response.symbol,
            "operand1": json_number(response.operand1),
            "operand2": json_number(response.operand2),
            "value": json_number(response.value),
        }
    return {}


def widget_meta() -> Dict[str, Any]:
    return {
        "openai/widgetAccessible": True,
        "openai/resultCanProduceWidget": True,
    }


def render_tool_result(response: StagedResponse, registry: WidgetRegistry) -> Dict[str, Any]:
    """Convert a stage response into an MCP ``tools/call`` result."""
    result: Dict[str, Any] = {
        "content": [{"type": "text", "text": response.message}],
    }

    if isinstance(response, ErrorResponse):
        result["isError"] = True
        return result

    payload = structured_content(response)
    if payload:
        result["structuredContent"] = payload

    stage = Stage(response.stage)
    widget = registry.for_stage(stage)
    invoking, invoked = INVOCATION_STATUS[stage]
    result["_meta"] = {
        "openai/outputTemplate": widget.uri,
        "openai/toolInvocation/invoking": invoking,
        "openai/toolInvocation/invoked": invoked,
        **widget_meta(),
    }
    return result
