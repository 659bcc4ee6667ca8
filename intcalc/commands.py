import enum
import logging
import re
from dataclasses import dataclass
from typing import Optional

from intcalc.environment import Environment
from intcalc.runtime import calculate
from intcalc.tokens import INTEGER_PATTERN
from intcalc.utils import CalcError, PrintableEnum

logger = logging.getLogger(__name__)

HELP_TEXT = "\n".join(
    [
        "The program evaluates integer expressions of any size.",
        "  operators: + - * / ^ and parentheses; / rounds toward zero",
        "  a run of minus signs is an addition if it is even, a subtraction if odd",
        "  name = value  stores a number or copies another variable",
        "  /help  shows this message, /exit  quits",
    ]
)
FAREWELL = "Bye!"
UNKNOWN_COMMAND = "Unknown command"


class InputType(PrintableEnum):
    HELP = enum.auto()
    EXIT = enum.auto()
    ASSIGNMENT = enum.auto()
    SINGLE_NUMBER = enum.auto()
    EMPTY_LINE = enum.auto()
    EXPRESSION = enum.auto()
    UNKNOWN_COMMAND = enum.auto()


# first full match wins
INPUT_PATTERNS: list[tuple[InputType, re.Pattern]] = [
    (InputType.HELP, re.compile(r"/help")),
    (InputType.EXIT, re.compile(r"/exit")),
    (InputType.ASSIGNMENT, re.compile(r"\w+\s*=.*")),
    (InputType.SINGLE_NUMBER, re.compile(INTEGER_PATTERN)),
    (InputType.EMPTY_LINE, re.compile(r"\s*")),
    (InputType.EXPRESSION, re.compile(r"[^/].*")),
]


def classify(line: str) -> InputType:
    for input_type, pattern in INPUT_PATTERNS:
        if pattern.fullmatch(line):
            return input_type
    return InputType.UNKNOWN_COMMAND


@dataclass
class Reply:
    text: Optional[str] = None
    finished: bool = False


class Session:
    def __init__(self, environment: Optional[Environment] = None) -> None:
        self.environment = environment if environment is not None else Environment()

    def handle(self, line: str) -> Reply:
        line = line.strip()
        input_type = classify(line)
        logger.debug("%s: %r", input_type, line)

        if input_type is InputType.HELP:
            return Reply(HELP_TEXT)
        elif input_type is InputType.EXIT:
            return Reply(FAREWELL, finished=True)
        elif input_type is InputType.EMPTY_LINE:
            return Reply()
        elif input_type is InputType.UNKNOWN_COMMAND:
            return Reply(UNKNOWN_COMMAND)

        try:
            if input_type is InputType.ASSIGNMENT:
                self.assign(line)
                return Reply()
            elif input_type is InputType.SINGLE_NUMBER:
                return Reply(str(self.environment.resolve_text(line)))
            else:
                return Reply(str(calculate(line, self.environment)))
        except CalcError as e:
            logger.debug("%s\n%s", type(e).__name__, e)
            return Reply(e.summary)

    def assign(self, line: str) -> None:
        """Handles ``name = value``; the environment is untouched on failure."""
        lhs, rhs = (part.strip() for part in line.split("=", 1))
        self.environment.check_name(lhs)
        value = self.environment.resolve_text(rhs)
        self.environment.assign(lhs, value)
