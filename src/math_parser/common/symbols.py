"""Registered operators and functions with their arity, precedence and associativity."""
from enum import Enum
import inspect
from typing import Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# Type alias for operations (taking positional floats, returning a float)
Operation = Callable[..., float]


class Associativity(str, Enum):
    """Grouping of an operator relative to neighbours of equal precedence."""

    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"


class OperationEntry(BaseModel):
    """A registered function: its callable and the number of operands it consumes."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Symbol as written in expressions")
    operation: Operation = Field(..., description="Callable invoked with the operands")
    arity: int = Field(..., ge=0, description="Number of operands consumed")


class OperatorEntry(OperationEntry):
    """A registered operator, which additionally carries precedence and associativity."""

    precedence: int = Field(default=1, description="Binding strength, higher binds tighter")
    left_assoc: bool = Field(default=True)
    right_assoc: bool = Field(default=True)


def derive_arity(operation: Operation) -> int:
    """
    Count the required positional parameters of a callable.

    :param Operation operation: Callable to inspect

    :return: Number of positional parameters without a default
    :rtype: int
    :raises ValueError: If the callable has no inspectable signature
    """
    try:
        signature = inspect.signature(operation)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"Cannot derive arity of {operation!r}, register it with an explicit arity"
        ) from exc

    positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    return sum(
        1
        for param in signature.parameters.values()
        if param.kind in positional and param.default is inspect.Parameter.empty
    )


class SymbolTable:
    """
    Operators and functions known to one parser instance.

    Each name maps to exactly one entry; registering a name again replaces the
    previous entry, even if it switches between operator and function.
    Registration is not synchronized: finish it before evaluating concurrently.
    """

    def __init__(self) -> None:
        self._functions: Dict[str, OperationEntry] = {}
        self._operators: Dict[str, OperatorEntry] = {}

    def add_function(self, entry: OperationEntry) -> None:
        self._operators.pop(entry.name, None)
        self._functions[entry.name] = entry

    def add_operator(self, entry: OperatorEntry) -> None:
        self._functions.pop(entry.name, None)
        self._operators[entry.name] = entry

    def is_function(self, name: str) -> bool:
        return name in self._functions

    def is_operator(self, name: str) -> bool:
        return name in self._operators

    def function(self, name: str) -> Optional[OperationEntry]:
        return self._functions.get(name)

    def operator(self, name: str) -> Optional[OperatorEntry]:
        return self._operators.get(name)

    def lookup(self, name: str) -> Union[OperationEntry, OperatorEntry]:
        """
        Return the entry registered under ``name``, whatever its kind.

        :param str name: Symbol name

        :return: Registered entry
        :rtype: OperationEntry
        :raises KeyError: If nothing is registered under that name
        """
        if name in self._functions:
            return self._functions[name]
        return self._operators[name]

    @property
    def function_names(self) -> List[str]:
        return list(self._functions)

    @property
    def operator_names(self) -> List[str]:
        return list(self._operators)

    def __contains__(self, name: object) -> bool:
        return name in self._functions or name in self._operators

    def __len__(self) -> int:
        return len(self._functions) + len(self._operators)
