"""Load evaluation requests from a text file, one expression per line."""
from pathlib import Path
from typing import Dict, List, Tuple

from math_parser.common.models import OperationRequest


COMMENT_PREFIX = "#"
BINDINGS_SEPARATOR = ";"


def parse_binding(text: str) -> Tuple[int, float]:
    """
    Parse a ``INDEX=VALUE`` variable binding.

    :param str text: Raw binding, surrounding whitespace allowed

    :return: Index and value
    :rtype: Tuple[int, float]
    :raises ValueError: If the text is not a valid binding or the index is negative
    """
    index, sep, value = text.strip().partition("=")
    try:
        if not sep:
            raise ValueError
        parsed = int(index), float(value)
    except ValueError:
        raise ValueError(f"expected INDEX=VALUE, got {text.strip()!r}") from None
    if parsed[0] < 0:
        raise ValueError(f"variable index must be non-negative, got {parsed[0]}")
    return parsed


def parse_request(line: str) -> OperationRequest:
    """
    Parse one input line into a request.

    A line is an expression, optionally followed by ``;`` and comma-separated
    ``INDEX=VALUE`` bindings that apply to that line only::

        x[0] * x[1] ; 0=2, 1=21

    :param str line: Raw input line

    :return: Request with the expression and its own bindings
    :rtype: OperationRequest
    :raises ValueError: If a binding is malformed
    """
    expression, _, tail = line.partition(BINDINGS_SEPARATOR)
    bindings: Dict[int, float] = dict(
        parse_binding(part) for part in tail.split(",") if part.strip()
    )
    return OperationRequest(expression=expression.strip(), bindings=bindings)


def read_requests(input_file: Path) -> List[OperationRequest]:
    """
    Read the requests contained in a .txt file.

    Blank lines and lines starting with ``#`` are skipped.

    :param Path input_file: Path to a .txt file

    :return: Requests in file order
    :rtype: List[OperationRequest]
    :raises ValueError: If the file is not a .txt file or a line has a malformed binding
    """
    if input_file.suffix != ".txt":
        raise ValueError(f"📄❌ Unsupported input format: {input_file.suffix or input_file.name}")

    requests = []
    content = input_file.read_text(encoding="utf-8")
    for line_number, line in enumerate(content.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        try:
            requests.append(parse_request(line))
        except ValueError as exc:
            raise ValueError(f"📄❌ {input_file.name}:{line_number}: {exc}") from exc
    return requests
