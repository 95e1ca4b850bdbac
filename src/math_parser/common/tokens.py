"""Tokens exchanged between the tokenizer, the shunting-yard converter and the evaluator."""
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class _Token(BaseModel):
    # Tokens are immutable values, compared by kind and content
    model_config = ConfigDict(frozen=True)


class Number(_Token):
    """A numeric literal."""

    value: float = Field(..., description="Literal value")

    def __str__(self) -> str:
        return repr(self.value)


class Variable(_Token):
    """A reference to a caller-supplied binding slot, written ``x[index]``."""

    index: int = Field(..., ge=0, description="Binding index")

    def __str__(self) -> str:
        return f"[{self.index}]"


class OperatorSymbol(_Token):
    """A registered binary operator."""

    name: str = Field(..., min_length=1)

    def __str__(self) -> str:
        return self.name


class FunctionSymbol(_Token):
    """A registered function."""

    name: str = Field(..., min_length=1)

    def __str__(self) -> str:
        return self.name


class LeftParen(_Token):
    def __str__(self) -> str:
        return "("


class RightParen(_Token):
    def __str__(self) -> str:
        return ")"


class Comma(_Token):
    def __str__(self) -> str:
        return ","


Token = Union[Number, Variable, OperatorSymbol, FunctionSymbol, LeftParen, RightParen, Comma]
