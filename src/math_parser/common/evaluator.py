"""Evaluate RPN token sequences with an explicit stack."""
from typing import List, Mapping, Sequence

from math_parser.common.errors import ArityError, CardinalityError, StructuralError, UnboundVariableError
from math_parser.common.symbols import SymbolTable
from math_parser.common.tokens import FunctionSymbol, Number, OperatorSymbol, Token, Variable


def evaluate_rpn(
    rpn: Sequence[Token],
    symbols: SymbolTable,
    bindings: Mapping[int, float],
) -> float:
    """
    Evaluate an expression in Reverse Polish Notation.

    Operands are pushed; an operator or function pops as many values as its
    arity, in left-to-right order, and pushes its result.

    :param Sequence[Token] rpn: Tokens in RPN order
    :param SymbolTable symbols: Source of operations and their arity
    :param Mapping[int, float] bindings: Variable values by index

    :return: Computed result as float
    :rtype: float
    :raises UnboundVariableError: If a variable has no binding
    :raises ArityError: If an operation lacks operands
    :raises CardinalityError: If the expression does not reduce to a single value
    """
    stack: List[float] = []

    for token in rpn:
        if isinstance(token, Number):
            stack.append(token.value)

        elif isinstance(token, Variable):
            if token.index not in bindings:
                raise UnboundVariableError(token.index)
            stack.append(float(bindings[token.index]))

        elif isinstance(token, (OperatorSymbol, FunctionSymbol)):
            entry = symbols.lookup(token.name)
            if len(stack) < entry.arity:
                raise ArityError(token.name, entry.arity, len(stack))
            split = len(stack) - entry.arity
            args = stack[split:]
            del stack[split:]
            stack.append(float(entry.operation(*args)))

        else:
            raise StructuralError(f"Unexpected token in RPN sequence: {token}")

    if len(stack) != 1:
        raise CardinalityError(len(stack))

    return stack[0]
