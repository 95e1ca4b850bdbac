"""Shared fixtures."""
import operator

import pytest

from math_parser.common.parser import MathParser


@pytest.fixture
def parser() -> MathParser:
    """Parser with the standard operators and functions."""
    return MathParser.with_standard_library()


@pytest.fixture
def bare_parser() -> MathParser:
    """Parser with only + (precedence 1) and * (precedence 2), both left-associative."""
    p = MathParser()
    p.register_operator("+", operator.add, precedence=1, associativity="left")
    p.register_operator("*", operator.mul, precedence=2, associativity="left")
    return p
