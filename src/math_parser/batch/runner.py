"""Evaluate a batch of expressions and write the outcomes to a results file."""
from pathlib import Path
from typing import Dict, Iterable, List, Union

from pydantic import BaseModel, Field

from math_parser.common.errors import ExpressionError
from math_parser.common.logger import logger
from math_parser.common.models import OperationFailure, OperationRequest, OperationResult
from math_parser.common.parser import MathParser


Outcome = Union[OperationResult, OperationFailure]


class BatchEvaluator(BaseModel):
    """
    Evaluate many expressions with one configured parser.

    Features:
        - Shares the parser's registered operators and functions across all lines.
        - Applies default variable bindings to every line; a line's own bindings override them.
        - Writes each outcome to disk as soon as it is computed.
        - Records failures per line instead of stopping the batch.
    """

    parser: MathParser = Field(default_factory=MathParser.with_standard_library)
    bindings: Dict[int, float] = Field(default_factory=dict, description="Default variable values by index")

    def evaluate_line(self, request: OperationRequest, line_number: int) -> Outcome:
        """
        Evaluate one request, recording a failure instead of raising.

        :param OperationRequest request: Expression and its own bindings
        :param int line_number: Position of the request in the batch

        :return: Result or failure for this line
        :rtype: Outcome
        """
        bindings = {**self.bindings, **request.bindings}
        logger.info(f"👷🏁 Evaluating line {line_number}: {request.expression}")

        try:
            result = self.parser.evaluate(request.expression, bindings)
        except (ValueError, ArithmeticError) as exc:
            stage = exc.stage if isinstance(exc, ExpressionError) else "operation"
            logger.error(
                f"👷❌ Line {line_number} failed in {stage}: {exc}\n"
                f"Invalid expression, could not evaluate: {request.expression!r}"
            )
            return OperationFailure(expression=request.expression, error=str(exc), stage=stage)

        logger.info(f"👷✅ Line {line_number}: {result}")
        return OperationResult(expression=request.expression, result=result)

    def run(self, requests: Iterable[OperationRequest], output_file: Path) -> List[Outcome]:
        """
        Evaluate every request and write one result line per request.

        :param Iterable[OperationRequest] requests: Requests in input order
        :param Path output_file: Path where results will be written

        :return: Outcomes in input order
        :rtype: List[Outcome]
        """
        outcomes: List[Outcome] = []
        with output_file.open("w", encoding="utf-8") as f_out:
            for line_number, request in enumerate(requests, start=1):
                outcome = self.evaluate_line(request, line_number)
                outcomes.append(outcome)
                f_out.write(outcome.format_line() + "\n")
                # Keep progress on disk if the batch is interrupted
                f_out.flush()

        logger.info(f"✉️ Results written to {output_file}")
        return outcomes
