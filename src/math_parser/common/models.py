"""Pydantic models for batch evaluation requests and outcomes."""
from typing import Dict

from pydantic import BaseModel, Field


class OperationRequest(BaseModel):
    """Represents a single expression to evaluate, with its variable bindings."""

    expression: str = Field(..., description="Mathematical expression as a string")
    bindings: Dict[int, float] = Field(default_factory=dict, description="Variable values by index")


class OperationResult(BaseModel):
    """Represents the result of an evaluated expression."""

    expression: str = Field(..., description="Original mathematical expression")
    result: float = Field(..., description="Evaluated numeric result of the expression")

    def format_line(self) -> str:
        return f"{self.expression} = {self.result}"


class OperationFailure(BaseModel):
    """Represents an expression that could not be evaluated."""

    expression: str = Field(..., description="Original mathematical expression")
    error: str = Field(..., description="Failure message")
    stage: str = Field(..., description="Pipeline stage that failed")

    def format_line(self) -> str:
        return f"{self.expression} -> ERROR: {self.error}"
