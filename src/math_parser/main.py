"""
Command-line entrypoint.

This script:
- Reads expressions, with optional per-line variable bindings, from the text file given as argument
- Evaluates each one with the standard operators and functions
- Writes one result line per expression next to the input file
"""

import argparse
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, FilePath, ValidationError

from math_parser.batch import reader
from math_parser.batch.runner import BatchEvaluator
from math_parser.common.logger import configure_logging, logger
from math_parser.common.models import OperationFailure
from math_parser.common.parser import MathParser


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : FilePath
        Path to the file containing expressions.
    output : Optional[Path]
        Where to write results, derived from file_path when omitted.
    bindings : Dict[int, float]
        Variable values by index.
    variable_symbol : str
        Prefix of variable references.
    """

    file_path: FilePath
    output: Optional[Path] = None
    bindings: Dict[int, float] = Field(default_factory=dict)
    variable_symbol: str = "x"


def parse_binding(text: str) -> Tuple[int, float]:
    """
    Parse a ``INDEX=VALUE`` variable binding.

    :param str text: Raw argument

    :return: Index and value
    :rtype: Tuple[int, float]
    :raises argparse.ArgumentTypeError: If the text is not a valid binding
    """
    try:
        return reader.parse_binding(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc))


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        description="Evaluate the mathematical expressions of a file"
    )

    parser.add_argument(
        "file_path",
        help="Path to the .txt file containing one expression per line, optionally followed by '; INDEX=VALUE, ...'",
    )
    parser.add_argument(
        "--var",
        dest="bindings",
        action="append",
        type=parse_binding,
        default=[],
        metavar="INDEX=VALUE",
        help="Bind variable x[INDEX] to VALUE on every line, may be repeated",
    )
    parser.add_argument(
        "--variable-symbol",
        default="x",
        help="Prefix of variable references (default: x)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Results file, defaults to <input>_results.txt",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(
            file_path=args.file_path,
            output=args.output,
            bindings=dict(args.bindings),
            variable_symbol=args.variable_symbol,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct a safe output file path based on the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/formulas.txt
    output: resources/formulas_txt_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    stem = input_path.name[: len(input_path.name) - len("".join(input_path.suffixes))]
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main function executed by the ``math-parser`` console script.
    """
    configure_logging()
    cli_args = parse_args(argv)
    input_path: Path = Path(cli_args.file_path)
    output_path: Path = cli_args.output or build_output_path(input_path)

    try:
        parser = MathParser.with_standard_library(variable_symbol=cli_args.variable_symbol)
    except ValidationError as exc:
        raise SystemExit(f"Invalid variable symbol: {exc}")

    try:
        requests = reader.read_requests(input_path)
    except ValueError as exc:
        raise SystemExit(str(exc))
    logger.info(f"📄 Loaded {len(requests)} expression(s) from {input_path}")

    evaluator = BatchEvaluator(parser=parser, bindings=cli_args.bindings)
    outcomes = evaluator.run(requests, output_path)

    failures = sum(1 for outcome in outcomes if isinstance(outcome, OperationFailure))
    logger.info(f"🏁 {len(outcomes) - failures} evaluated, {failures} failed")


if __name__ == "__main__":
    main()
