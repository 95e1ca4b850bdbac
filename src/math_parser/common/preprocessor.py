"""Normalize raw expression text before tokenization."""
from enum import Enum
import string
from typing import List, Sequence, Union


class Marker(Enum):
    """Non-textual items inserted into the character stream."""

    # A minus sign that negates the literal following it
    UNARY_MINUS = "unary-minus"
    # Whitespace that separated two characters; no token may span it
    BOUNDARY = "boundary"


Item = Union[str, Marker]

# Characters after which a minus sign is a subtraction
_BINARY_MINUS_PREDECESSORS = frozenset(string.digits + ")]")


def preprocess(expression: str) -> List[Item]:
    """
    Strip whitespace and rewrite unary minus signs into Marker.UNARY_MINUS.

    A minus sign is unary when it starts the expression or when the previous
    non-whitespace character is not a digit, ``)`` or ``]``.

    Examples:
        - "-3 + 5" -> [UNARY_MINUS, "3", "+", "5"]
        - "4-3" -> ["4", "-", "3"]
        - "1 2" -> ["1", BOUNDARY, "2"]

    :param str expression: Raw expression text

    :return: Characters and markers, left to right
    :rtype: List[Item]
    """
    items: List[Item] = []
    previous = None
    pending_boundary = False

    for ch in expression:
        if ch.isspace():
            pending_boundary = True
            continue

        if pending_boundary and items and items[-1] is not Marker.UNARY_MINUS:
            items.append(Marker.BOUNDARY)
        pending_boundary = False

        if ch == "-" and (previous is None or previous not in _BINARY_MINUS_PREDECESSORS):
            items.append(Marker.UNARY_MINUS)
        else:
            items.append(ch)
        previous = ch

    return items


def render(items: Sequence[Item]) -> str:
    """
    Render preprocessed items back to text, for error messages.

    Unary minus is shown as ``-`` and boundaries are dropped, so positions in the
    result match positions in the whitespace-free expression.

    :param Sequence[Item] items: Preprocessed items

    :return: Whitespace-free expression text
    :rtype: str
    """
    return "".join(
        "-" if item is Marker.UNARY_MINUS else item
        for item in items
        if item is not Marker.BOUNDARY
    )
