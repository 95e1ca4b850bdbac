"""Test parse_binding, parse_request and read_requests."""
import pytest

from math_parser.batch.reader import parse_binding, parse_request, read_requests
from math_parser.common.models import OperationRequest


@pytest.mark.parametrize("text,expected", [
    ("0=5", (0, 5.0)),
    (" 3 = -2.5 ", (3, -2.5)),
])
def test_parse_binding(text: str, expected) -> None:
    """Bindings are INDEX=VALUE, whitespace around them is ignored."""
    assert parse_binding(text) == expected


@pytest.mark.parametrize("text", ["5", "a=1", "1=b", "-1=2", "1="])
def test_parse_binding_invalid(text: str) -> None:
    """Malformed bindings raise a ValueError."""
    with pytest.raises(ValueError):
        parse_binding(text)


@pytest.mark.parametrize("line,expected", [
    ("1 + 1", OperationRequest(expression="1 + 1")),
    ("x[0] * 2 ; 0=4", OperationRequest(expression="x[0] * 2", bindings={0: 4.0})),
    ("x[0] - x[2];0=1,2=3", OperationRequest(expression="x[0] - x[2]", bindings={0: 1.0, 2: 3.0})),
    ("x[1] ;", OperationRequest(expression="x[1]")),
])
def test_parse_request(line: str, expected: OperationRequest) -> None:
    """A line holds an expression and, after ';', its own bindings."""
    assert parse_request(line) == expected


def test_read_requests_skips_blank_and_comment_lines(tmp_path) -> None:
    """Blank lines and '#' comments do not produce requests."""
    txt = tmp_path / "ops.txt"
    txt.write_text("# header\n1+1\n\n  x[0] * 2 ; 0=3  \n   \n")

    assert read_requests(txt) == [
        OperationRequest(expression="1+1"),
        OperationRequest(expression="x[0] * 2", bindings={0: 3.0}),
    ]


def test_read_requests_reports_line_of_bad_binding(tmp_path) -> None:
    """A malformed binding names the file and line it came from."""
    txt = tmp_path / "ops.txt"
    txt.write_text("1+1\nx[0] ; zero=1\n")

    with pytest.raises(ValueError, match="ops.txt:2"):
        read_requests(txt)


def test_read_requests_unsupported_format(tmp_path) -> None:
    """Only .txt input is accepted."""
    file_path = tmp_path / "ops.zip"
    file_path.write_text("1+1")

    with pytest.raises(ValueError):
        read_requests(file_path)
