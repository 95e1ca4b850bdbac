"""Convert infix token sequences to Reverse Polish Notation (RPN)."""
from typing import List, Sequence

from math_parser.common.errors import StructuralError
from math_parser.common.symbols import SymbolTable
from math_parser.common.tokens import (
    Comma,
    FunctionSymbol,
    LeftParen,
    Number,
    OperatorSymbol,
    RightParen,
    Token,
    Variable,
)


def _pops_before(incoming: OperatorSymbol, top: OperatorSymbol, symbols: SymbolTable) -> bool:
    """Return True if ``top`` must leave the stack before ``incoming`` is pushed."""
    current = symbols.operator(incoming.name)
    stacked = symbols.operator(top.name)
    return (current.left_assoc and current.precedence <= stacked.precedence) or (
        current.right_assoc and current.precedence < stacked.precedence
    )


def to_rpn(tokens: Sequence[Token], symbols: SymbolTable) -> List[Token]:
    """
    Convert tokens into Reverse Polish Notation using the Shunting-yard algorithm.

    Operators are held on a stack until an operator of lower precedence (or a
    closing parenthesis) forces them out. A function symbol stays on the stack
    until its argument list is closed.

    Examples:
        - Infix: 3 + 4 * 2 -> RPN: 3 4 2 * +
        - Infix: max(1, 2) + 1 -> RPN: 1 2 max 1 +

    :param Sequence[Token] tokens: Infix tokens
    :param SymbolTable symbols: Precedence and associativity source

    :return: Tokens in RPN order
    :rtype: List[Token]
    :raises StructuralError: On mismatched parentheses or a misplaced separator
    """
    output: List[Token] = []
    stack: List[Token] = []

    for token in tokens:
        if isinstance(token, (Number, Variable)):
            output.append(token)

        elif isinstance(token, FunctionSymbol):
            stack.append(token)

        elif isinstance(token, Comma):
            # Flush the current argument
            while stack and not isinstance(stack[-1], LeftParen):
                output.append(stack.pop())
            if not stack:
                raise StructuralError("Misplaced argument separator or parenthesis")

        elif isinstance(token, OperatorSymbol):
            while (
                stack
                and isinstance(stack[-1], OperatorSymbol)
                and _pops_before(token, stack[-1], symbols)
            ):
                output.append(stack.pop())
            stack.append(token)

        elif isinstance(token, LeftParen):
            stack.append(token)

        elif isinstance(token, RightParen):
            while stack and not isinstance(stack[-1], LeftParen):
                output.append(stack.pop())
            if not stack:
                raise StructuralError("Misplaced parenthesis: unmatched ')'")
            stack.pop()
            # The closed group was the argument list of this function
            if stack and isinstance(stack[-1], FunctionSymbol):
                output.append(stack.pop())

    while stack:
        token = stack.pop()
        if isinstance(token, LeftParen):
            raise StructuralError("Misplaced parenthesis: unmatched '('")
        output.append(token)

    return output
