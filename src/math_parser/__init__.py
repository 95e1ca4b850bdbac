"""Evaluate user-supplied mathematical expressions with pluggable operators and functions."""
from math_parser.common.errors import (
    ArityError,
    CardinalityError,
    ExpressionError,
    StructuralError,
    TokenizationError,
    UnboundVariableError,
)
from math_parser.common.parser import MathParser
from math_parser.common.symbols import Associativity, SymbolTable

__all__ = [
    "ArityError",
    "Associativity",
    "CardinalityError",
    "ExpressionError",
    "MathParser",
    "StructuralError",
    "SymbolTable",
    "TokenizationError",
    "UnboundVariableError",
]
