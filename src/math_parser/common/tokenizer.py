"""Split preprocessed expressions into tokens by backtracking segmentation."""
from dataclasses import dataclass
import re
from typing import Dict, List, NoReturn, Optional, Sequence, Tuple

from math_parser.common.errors import TokenizationError
from math_parser.common.preprocessor import Item, Marker, render
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


_NUMBER_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
# Matches every prefix of a numeric literal (and a few strings that are not)
_NUMBER_PREFIX_PATTERN = re.compile(r"[+-]?[0-9]*\.?[0-9]*(?:[eE][+-]?[0-9]*)?")

_PUNCTUATION = {
    "(": LeftParen(),
    ")": RightParen(),
    ",": Comma(),
}


def _is_number(text: str) -> bool:
    """Return True if the whole text is a numeric literal."""
    return _NUMBER_PATTERN.fullmatch(text) is not None


def _skip_boundaries(items: Sequence[Item], start: int) -> int:
    """Return the first position at or after start that is not a boundary."""
    while start < len(items) and items[start] is Marker.BOUNDARY:
        start += 1
    return start


@dataclass
class _Frame:
    """A candidate token being grown from one start position."""

    start: int
    candidate: Optional[str]
    end: int

    def grow(self, items: Sequence[Item]) -> None:
        """Append the next character, or drop the candidate when it cannot grow."""
        # A candidate never grows across a marker
        if self.end >= len(items) or not isinstance(items[self.end], str):
            self.candidate = None
            return
        self.candidate += items[self.end]
        self.end += 1


def _open_frame(items: Sequence[Item], start: int) -> _Frame:
    """Start a frame at a non-boundary position."""
    first = items[start]
    if first is Marker.UNARY_MINUS:
        # The marker only ever negates the literal that follows it
        if start + 1 >= len(items) or not isinstance(items[start + 1], str):
            return _Frame(start, None, start + 1)
        return _Frame(start, "-" + items[start + 1], start + 2)
    return _Frame(start, first, start + 1)


class Tokenizer:
    """
    Tokenize preprocessed expressions against a symbol table.

    Algorithm:
        1. Grow a candidate one character at a time from the current position.
        2. Once the candidate is a complete token, tokenize the remainder.
        3. If the remainder cannot be tokenized, keep growing the candidate.

    This finds a segmentation even when registered symbols share prefixes
    (e.g. ``<`` and ``<=``), at the cost of backtracking on pathological input.
    """

    def __init__(self, symbols: SymbolTable, variable_symbol: str = "x"):
        self._symbols = symbols
        self._variable_symbol = variable_symbol

    def tokenize(self, items: Sequence[Item]) -> List[Token]:
        """
        Tokenize a preprocessed expression.

        :param Sequence[Item] items: Output of ``preprocess``

        :return: Tokens in input order
        :rtype: List[Token]
        :raises TokenizationError: If no valid segmentation exists
        """
        choices = self._segment(items)

        tokens: List[Token] = []
        start = _skip_boundaries(items, 0)
        while start < len(items):
            choice = choices[start]
            if choice is None:
                self._fail(items, choices)
            token, start = choice
            tokens.append(token)
            start = _skip_boundaries(items, start)
        return tokens

    def _segment(self, items: Sequence[Item]) -> Dict[int, Optional[Tuple[Token, int]]]:
        """
        Find, for every reachable start position, the first token whose remainder is tokenizable.

        Positions are resolved with an explicit stack of frames, so the depth of
        the search does not depend on the Python call stack. A frame waiting on a
        suffix re-tests its candidate once the suffix is resolved, then either
        accepts it or keeps growing.

        :param Sequence[Item] items: Output of ``preprocess``

        :return: ``(token, end)`` per start position, None where no segmentation exists
        :rtype: Dict[int, Optional[Tuple[Token, int]]]
        """
        choices: Dict[int, Optional[Tuple[Token, int]]] = {}
        root = _skip_boundaries(items, 0)
        if root == len(items):
            return choices

        names = self._symbols.function_names + self._symbols.operator_names
        stack: List[_Frame] = [_open_frame(items, root)]
        while stack:
            frame = stack[-1]
            pending = None

            while frame.candidate is not None:
                token = self._complete_token(frame.candidate, items, frame.end)
                if token is not None:
                    suffix = _skip_boundaries(items, frame.end)
                    if suffix == len(items) or choices.get(suffix) is not None:
                        choices[frame.start] = (token, frame.end)
                        break
                    if suffix not in choices:
                        pending = suffix
                        break
                if not self._can_grow(frame.candidate, names):
                    break
                frame.grow(items)

            if pending is not None:
                stack.append(_open_frame(items, pending))
                continue
            if frame.start not in choices:
                choices[frame.start] = None
            stack.pop()

        return choices

    def _fail(self, items: Sequence[Item], choices: Dict[int, Optional[Tuple[Token, int]]]) -> NoReturn:
        """Raise a TokenizationError pointing at the furthest position that could not be tokenized."""
        furthest = max(start for start, choice in choices.items() if choice is None)
        position = sum(1 for item in items[:furthest] if item is not Marker.BOUNDARY)
        text = render(items)
        raise TokenizationError(
            f"Unrecognized input starting at {text[position:]!r}",
            position,
            text,
        )

    def _can_grow(self, candidate: str, names: Sequence[str]) -> bool:
        """Return True while appending characters could still make the candidate a complete token."""
        if _NUMBER_PREFIX_PATTERN.fullmatch(candidate):
            return True
        if any(name.startswith(candidate) for name in names):
            return True
        opening = self._variable_symbol + "["
        if opening.startswith(candidate):
            return True
        return candidate.startswith(opening) and all("0" <= ch <= "9" for ch in candidate[len(opening):])

    def _complete_token(
        self, candidate: str, items: Sequence[Item], end: int
    ) -> Optional[Token]:
        """Return the token ``candidate`` stands for, if it is a complete token."""
        if _is_number(candidate):
            following = items[end] if end < len(items) else None
            # Numbers are grown greedily and never split
            if not (isinstance(following, str) and _is_number(candidate + following)):
                return Number(value=float(candidate))

        if self._symbols.is_function(candidate):
            return FunctionSymbol(name=candidate)
        if self._symbols.is_operator(candidate):
            return OperatorSymbol(name=candidate)
        if candidate in _PUNCTUATION:
            return _PUNCTUATION[candidate]
        return self._parse_variable(candidate)

    def _parse_variable(self, candidate: str) -> Optional[Variable]:
        """
        Parse a variable reference of the form ``prefix[index]``.

        :param str candidate: Candidate token text

        :return: Variable token, or None if the text is not a variable
        :rtype: Optional[Variable]
        """
        opening = self._variable_symbol + "["
        if not candidate.startswith(opening) or not candidate.endswith("]"):
            return None
        digits = candidate[len(opening):-1]
        if not digits or not all("0" <= ch <= "9" for ch in digits):
            return None
        return Variable(index=int(digits))
