"""Pydantic models for the calculator interaction."""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator

from calcufy.core.engine import Operation

Operand = Union[StrictInt, StrictFloat]


class Stage(str, Enum):
    """Step of the interaction implied by which arguments are present."""

    AWAITING_OPERATION = "awaiting_operation"
    AWAITING_OPERANDS = "awaiting_operands"
    COMPLETED = "completed"


class CalculationRequest(BaseModel):
    """Arguments of a single tool call. Absent fields mean "not yet provided"."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    operation: Optional[Operation] = Field(None, description="The operation to perform")
    operand1: Optional[Operand] = Field(None, description="The first number")
    operand2: Optional[Operand] = Field(None, description="The second number")

    @field_validator("operation", mode="before")
    @classmethod
    def _falsy_operation_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        # false, 0, [] and {} select the operation picker like a missing field
        return value if value else None

    @field_validator("operand1", "operand2", mode="before")
    @classmethod
    def _blank_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def stage(self) -> Stage:
        if not self.operation:
            return Stage.AWAITING_OPERATION
        if self.operand1 is None or self.operand2 is None:
            return Stage.AWAITING_OPERANDS
        return Stage.COMPLETED


class AwaitingOperationResponse(BaseModel):
    """No operation chosen yet; the host shows the operation selector."""

    stage: Literal["awaiting_operation"] = "awaiting_operation"
    message: str


class AwaitingOperandsResponse(BaseModel):
    """Operation chosen; the host collects the two numbers."""

    stage: Literal["awaiting_operands"] = "awaiting_operands"
    message: str
    operation: Operation
    symbol: str


class CompletedResponse(BaseModel):
    """Calculation finished successfully."""

    stage: Literal["completed"] = "completed"
    message: str
    operation: Operation
    symbol: str
    operand1: float
    operand2: float
    value: float


class ErrorResponse(BaseModel):
    """The tool ran but reported a domain error (e.g. division by zero)."""

    stage: Literal["error"] = "error"
    message: str


StagedResponse = Annotated[
    Union[AwaitingOperationResponse, AwaitingOperandsResponse, CompletedResponse, ErrorResponse],
    Field(discriminator="stage"),
]


class WidgetDescriptor(BaseModel):
    """A widget document the host can render for one interaction stage."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Component name, e.g. 'number-input'")
    uri: str = Field(..., description="Template URI the host resolves via resources/read")
    title: str = Field(..., description="Human readable title")
    html: str = Field(..., description="Markup served for the URI")
