"""
Failure types raised by the expression pipeline.

Every failure extends ExpressionError, which is a ValueError, and records the
pipeline stage that detected it.
"""
from typing import Optional


class ExpressionError(ValueError):
    """Base class for all expression failures."""

    stage: str = "expression"

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Return the message followed by the expression and a caret under the failing position.

        :return: Formatted message
        :rtype: str
        """
        if self.expression is None or self.position is None:
            return f"[{self.stage}] {self.message}"

        pointer = " " * self.position + "^"
        return f"[{self.stage}] {self.message}\n  {self.expression}\n  {pointer}"


class TokenizationError(ExpressionError):
    """No segmentation of the input into known tokens exists."""

    stage = "tokenizer"


class StructuralError(ExpressionError):
    """Mismatched parentheses or a misplaced argument separator."""

    stage = "shunting-yard"


class ArityError(ExpressionError):
    """An operator or function found fewer operands on the stack than it needs."""

    stage = "evaluator"

    def __init__(self, symbol: str, arity: int, available: int):
        message = f"'{symbol}' expects {arity} operand(s), only {available} available"
        super().__init__(message)
        self.symbol = symbol
        self.arity = arity
        self.available = available


class CardinalityError(ExpressionError):
    """Evaluation did not leave exactly one value on the stack."""

    stage = "evaluator"

    def __init__(self, remaining: int):
        if remaining == 0:
            message = "Empty expression"
        else:
            message = f"Invalid expression ({remaining} values left, missing operator)"
        super().__init__(message)
        self.remaining = remaining


class UnboundVariableError(ExpressionError):
    """A variable index has no value in the supplied bindings."""

    stage = "evaluator"

    def __init__(self, index: int):
        super().__init__(f"No value bound for variable index {index}")
        self.index = index
