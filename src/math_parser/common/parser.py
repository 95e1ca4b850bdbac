"""Parse and evaluate mathematical expressions against registered operators and functions."""
from typing import Callable, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from math_parser.common.builtins import register_standard_library
from math_parser.common.evaluator import evaluate_rpn
from math_parser.common.logger import logger
from math_parser.common.preprocessor import preprocess
from math_parser.common.shunting_yard import to_rpn
from math_parser.common.symbols import (
    Associativity,
    OperationEntry,
    OperatorEntry,
    SymbolTable,
    derive_arity,
)
from math_parser.common.tokenizer import Tokenizer
from math_parser.common.tokens import Token, Variable


class MathParser(BaseModel):
    """
    Parse and evaluate mathematical expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Only registered operators and functions are recognized

    Algorithm:
        1. Preprocess: strip whitespace, mark unary minus signs
        2. Tokenize by backtracking segmentation over the registered symbols
        3. Convert to Reverse Polish Notation (RPN) using Shunting-yard
        4. Evaluate RPN using a stack and the caller's variable bindings

    Variables are written ``x[n]``, where ``x`` is ``variable_symbol`` and ``n``
    indexes the bindings passed to ``evaluate``.

    Examples:
        - parser.evaluate("2 + 3 * 4") -> 14.0
        - parser.evaluate("x[0] + x[2]", {0: 5, 2: 7}) -> 12.0
    """

    variable_symbol: str = Field(default="x", min_length=1, description="Prefix of variable references")

    _symbols: SymbolTable = PrivateAttr(default_factory=SymbolTable)

    @field_validator("variable_symbol")
    def variable_symbol_must_be_plain(cls, v: str) -> str:
        """Ensure the prefix cannot be confused with the index brackets or whitespace."""
        if any(ch.isspace() or ch in "[]" for ch in v):
            raise ValueError("Variable symbol cannot contain whitespace or brackets")
        return v

    @classmethod
    def with_standard_library(cls, **config) -> "MathParser":
        """
        Build a parser with the standard operators and functions registered.

        :return: Configured parser
        :rtype: MathParser
        """
        parser = cls(**config)
        register_standard_library(parser)
        return parser

    @property
    def symbols(self) -> SymbolTable:
        return self._symbols

    def register_function(
        self,
        name: str,
        operation: Callable[..., float],
        arity: Optional[int] = None,
    ) -> None:
        """
        Register a function symbol; raises ValueError if its arity can be neither given nor derived.

        :param str name: Function name as written in expressions
        :param Callable operation: Callable receiving the arguments positionally
        :param Optional[int] arity: Number of arguments, derived from the signature when omitted

        :return: None
        :raises ValueError: If arity is omitted and the signature cannot be inspected
        """
        if arity is None:
            arity = derive_arity(operation)
        self._symbols.add_function(OperationEntry(name=name, operation=operation, arity=arity))
        logger.debug(f"Registered function {name!r} (arity {arity})")

    def register_operator(
        self,
        name: str,
        operation: Callable[..., float],
        precedence: int = 1,
        associativity: Union[Associativity, str] = Associativity.BOTH,
        arity: Optional[int] = None,
    ) -> None:
        """
        Register an operator symbol; raises ValueError for an unknown associativity or an underivable arity.

        :param str name: Operator symbol as written in expressions
        :param Callable operation: Callable receiving the operands positionally
        :param int precedence: Binding strength, higher binds tighter
        :param associativity: "left", "right" or "both"
        :param Optional[int] arity: Number of operands, derived from the signature when omitted

        :return: None
        :raises ValueError: If the associativity is unknown, or arity is omitted
            and the signature cannot be inspected
        """
        associativity = Associativity(associativity)
        if arity is None:
            arity = derive_arity(operation)
        entry = OperatorEntry(
            name=name,
            operation=operation,
            arity=arity,
            precedence=precedence,
            left_assoc=associativity in (Associativity.LEFT, Associativity.BOTH),
            right_assoc=associativity in (Associativity.RIGHT, Associativity.BOTH),
        )
        self._symbols.add_operator(entry)
        logger.debug(
            f"Registered operator {name!r} (precedence {precedence}, {associativity.value})"
        )

    def tokenize(self, expression: str) -> List[Token]:
        """
        Preprocess and split an expression into tokens.

        :param str expression: Mathematical expression as a string

        :return: List of tokens
        :rtype: List[Token]
        :raises TokenizationError: If the expression contains unknown symbols
        """
        tokenizer = Tokenizer(self._symbols, self.variable_symbol)
        return tokenizer.tokenize(preprocess(expression))

    def to_rpn(self, tokens: Sequence[Token]) -> List[Token]:
        """
        Convert infix tokens into Reverse Polish Notation.

        :param Sequence[Token] tokens: Infix tokens

        :return: Tokens in RPN order
        :rtype: List[Token]
        :raises StructuralError: On mismatched parentheses or misplaced separators
        """
        return to_rpn(tokens, self._symbols)

    def evaluate_rpn(
        self, rpn: Sequence[Token], bindings: Optional[Mapping[int, float]] = None
    ) -> float:
        """
        Evaluate tokens already in Reverse Polish Notation.

        :param Sequence[Token] rpn: Tokens in RPN order
        :param bindings: Variable values by index

        :return: Computed result as float
        :rtype: float
        """
        return evaluate_rpn(rpn, self._symbols, bindings or {})

    def evaluate(self, expression: str, bindings: Optional[Mapping[int, float]] = None) -> float:
        """
        Evaluate a mathematical expression.

        :param str expression: Mathematical expression as a string
        :param bindings: Variable values by index

        :return: Computed result as float
        :rtype: float
        :raises ExpressionError: The subclass names the failing stage
        """
        tokens = self.tokenize(expression)
        rpn = self.to_rpn(tokens)
        result = self.evaluate_rpn(rpn, bindings)
        logger.debug(f"Evaluated {expression!r} -> {result}")
        return result

    def get_variable_ids(self, expression: str) -> List[int]:
        """
        Return the distinct variable indices referenced by an expression, without evaluating it.

        :param str expression: Mathematical expression as a string

        :return: Indices in order of first occurrence
        :rtype: List[int]
        :raises TokenizationError: If the expression cannot be tokenized
        """
        ids: List[int] = []
        for token in self.tokenize(expression):
            if isinstance(token, Variable) and token.index not in ids:
                ids.append(token.index)
        return ids
