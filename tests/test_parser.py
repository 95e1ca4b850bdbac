"""Test class MathParser."""
import operator

from pydantic import ValidationError
import pytest

from math_parser.common.errors import (
    ArityError,
    CardinalityError,
    ExpressionError,
    StructuralError,
    TokenizationError,
    UnboundVariableError,
)
from math_parser.common.parser import MathParser
from math_parser.common.tokens import FunctionSymbol


def test_precedence(bare_parser):
    """Multiplication binds tighter than addition."""
    assert bare_parser.evaluate("2+3*4", {}) == 14.0


def test_right_associativity():
    """A right-associative power groups from the right."""
    p = MathParser()
    p.register_operator("^", operator.pow, precedence=3, associativity="right")
    assert p.evaluate("2^3^2", {}) == 512.0


def test_both_associativity_is_left_on_ties():
    """The default associativity groups left for equal precedence."""
    p = MathParser()
    p.register_operator("-", operator.sub)
    assert p.evaluate("8-3-2") == 3.0


@pytest.mark.parametrize("expr,expected", [
    ("-3+5", 2.0),
    ("4-3", 1.0),
    ("10 - -2", 12.0),
    ("2*-3", -6.0),
    ("-2.5 * 4", -10.0),
    ("2^-1", 0.5),
])
def test_unary_minus(parser, expr, expected):
    """Unary minus negates literals, binary minus subtracts."""
    assert parser.evaluate(expr, {}) == expected


@pytest.mark.parametrize("expr,expected", [
    ("3 + 4", 7.0),
    ("10 - 2", 8.0),
    ("3 * 5", 15.0),
    ("8 / 2", 4.0),
    ("7 % 4", 3.0),
    ("3 + 4 * 2", 11.0),
    ("7 + 3 * 2 - 4 / 2", 11.0),
    ("2 * (3 + 4)", 14.0),
    ("(1)", 1.0),
    ("max(1,2)+1", 3.0),
    ("sqrt(16) + abs(-3)", 7.0),
    ("pow(2, 10)", 1024.0),
    ("min(max(1, 5), 3)", 3.0),
    ("floor(2.7) + ceil(2.2)", 5.0),
])
def test_evaluate_valid(parser, expr, expected):
    """Evaluate returns correct result for valid expressions."""
    assert parser.evaluate(expr) == expected


def test_variables(parser):
    """Variables are read from the bindings."""
    assert parser.get_variable_ids("x[0]+x[2]*x[0]") == [0, 2]
    assert parser.evaluate("x[0]+x[2]", {0: 5, 2: 7}) == 12.0
    assert parser.evaluate("min(x[0], 4)", {0: 7}) == 4.0


def test_same_parser_different_bindings(parser):
    """Bindings are per call and never retained."""
    assert parser.evaluate("x[0]*2", {0: 1}) == 2.0
    assert parser.evaluate("x[0]*2", {0: 21}) == 42.0
    with pytest.raises(UnboundVariableError):
        parser.evaluate("x[0]*2")


@pytest.mark.parametrize("expr,bindings,error", [
    ("1 2", {}, CardinalityError),
    ("", {}, CardinalityError),
    ("(1+2", {}, StructuralError),
    ("max(1,2", {}, StructuralError),
    ("1++", {}, ArityError),
    ("3 +", {}, ArityError),
    ("1 $ 2", {}, TokenizationError),
    ("x[1]", {}, UnboundVariableError),
])
def test_evaluate_invalid_expression(parser, expr, bindings, error):
    """Each kind of malformed input fails with its own error."""
    with pytest.raises(error):
        parser.evaluate(expr, bindings)


@pytest.mark.parametrize("expr", ["3 +", "3 4 + 5", "", "(1", "1 ? 2"])
def test_errors_are_value_errors(parser, expr):
    """Every expression failure can be caught as a ValueError."""
    with pytest.raises(ValueError) as excinfo:
        parser.evaluate(expr)
    assert isinstance(excinfo.value, ExpressionError)


def test_get_variable_ids_is_idempotent(parser):
    """Repeated calls return the same ids and leave the symbol table alone."""
    size = len(parser.symbols)
    first = parser.get_variable_ids("x[3] + x[1] * x[3] - x[10]")
    second = parser.get_variable_ids("x[3] + x[1] * x[3] - x[10]")
    assert first == second == [3, 1, 10]
    assert len(parser.symbols) == size


def test_get_variable_ids_without_variables(parser):
    """Expressions without variables have no ids, even if not evaluable."""
    assert parser.get_variable_ids("1 2") == []


def test_get_variable_ids_fails_like_tokenization(parser):
    """Untokenizable input fails the same way as evaluation would."""
    with pytest.raises(TokenizationError):
        parser.get_variable_ids("x[0] $ x[1]")


def test_register_function_derives_arity(parser):
    """Arity is taken from the required positional parameters."""
    parser.register_function("hyp", lambda a, b: (a * a + b * b) ** 0.5)
    assert parser.symbols.function("hyp").arity == 2
    assert parser.evaluate("hyp(3, 4)") == 5.0


def test_register_function_explicit_arity(parser):
    """Callables without a signature need an explicit arity."""
    parser.register_function("sum3", lambda *args: sum(args), arity=3)
    assert parser.evaluate("sum3(1, 2, 3)") == 6.0


def test_reregistration_overwrites(parser):
    """Registering a name again replaces the previous entry, whatever its kind."""
    size = len(parser.symbols)
    parser.register_function("+", lambda a: a + 1)
    assert len(parser.symbols) == size
    assert parser.tokenize("+") == [FunctionSymbol(name="+")]
    assert parser.evaluate("+(1)") == 2.0


def test_register_operator_rejects_unknown_associativity(parser):
    """Associativity must be left, right or both."""
    with pytest.raises(ValueError):
        parser.register_operator("&", operator.and_, associativity="sideways")


@pytest.mark.parametrize("symbol", ["", "x[", "a b", "]"])
def test_invalid_variable_symbol(symbol):
    """The variable prefix cannot be empty or contain brackets or whitespace."""
    with pytest.raises(ValidationError):
        MathParser(variable_symbol=symbol)


def test_parsers_do_not_share_symbols():
    """Each parser owns its symbol table."""
    first = MathParser()
    second = MathParser()
    first.register_operator("+", operator.add)
    assert "+" in first.symbols
    assert "+" not in second.symbols


def test_evaluate_long_expression(parser):
    """A long flat sum evaluates without recursion limits."""
    assert parser.evaluate("+".join(["1"] * 2000)) == 2000.0


def test_register_function_uninspectable_requires_arity(parser):
    """Registration fails when the arity can neither be given nor derived."""
    with pytest.raises(ValueError):
        parser.register_function("biggest", max)
    parser.register_function("biggest", max, arity=2)
    assert parser.evaluate("biggest(2, 9)") == 9.0
