"""Standard operators and functions."""
import math
import operator
from typing import TYPE_CHECKING, Callable, Dict, Tuple

from math_parser.common.symbols import Associativity

if TYPE_CHECKING:
    from math_parser.common.parser import MathParser


# Mapping of operator symbols to (precedence, associativity, function)
OPERATORS: Dict[str, Tuple[int, Associativity, Callable[[float, float], float]]] = {
    "+": (1, Associativity.LEFT, operator.add),
    "-": (1, Associativity.LEFT, operator.sub),
    "*": (2, Associativity.LEFT, operator.mul),
    "/": (2, Associativity.LEFT, operator.truediv),
    "%": (2, Associativity.LEFT, math.fmod),
    "^": (3, Associativity.RIGHT, math.pow),
}

# Mapping of function names to (arity, function)
FUNCTIONS: Dict[str, Tuple[int, Callable[..., float]]] = {
    "abs": (1, abs),
    "sqrt": (1, math.sqrt),
    "exp": (1, math.exp),
    "log": (1, math.log),
    "sin": (1, math.sin),
    "cos": (1, math.cos),
    "tan": (1, math.tan),
    "floor": (1, math.floor),
    "ceil": (1, math.ceil),
    "min": (2, min),
    "max": (2, max),
    "pow": (2, math.pow),
}


def register_standard_library(parser: "MathParser") -> None:
    """
    Register the standard operators and functions on a parser.

    Arity is given explicitly, since builtins such as ``min`` have no inspectable signature.

    :param MathParser parser: Parser to configure

    :return: None
    """
    for name, (precedence, associativity, fn) in OPERATORS.items():
        parser.register_operator(name, fn, precedence=precedence, associativity=associativity, arity=2)
    for name, (arity, fn) in FUNCTIONS.items():
        parser.register_function(name, fn, arity=arity)
