import logging
import re
from typing import Iterator, Optional

from intcalc.tokens import IDENTIFIER_PATTERN, Operand, parse_operand
from intcalc.utils import CalcError

logger = logging.getLogger(__name__)


class UnknownIdentifier(CalcError):
    summary = "Unknown variable"

    def __init__(self, name: str) -> None:
        super().__init__(f"Reference to non-existent variable {name!r}")
        self.name = name


class InvalidIdentifier(CalcError):
    summary = "Invalid identifier"


class InvalidAssignment(CalcError):
    summary = "Invalid assignment"


class Environment:
    """Variables of one session, name -> arbitrary-precision integer."""

    def __init__(self, variables: Optional[dict[str, int]] = None) -> None:
        self._variables: dict[str, int] = dict(variables or {})

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __len__(self) -> int:
        return len(self._variables)

    def __iter__(self) -> Iterator[str]:
        return iter(self._variables)

    def get(self, name: str, default: Optional[int] = None) -> Optional[int]:
        return self._variables.get(name, default)

    def resolve(self, operand: Operand) -> int:
        if operand.name is None:
            return operand.literal  # type: ignore[return-value]
        try:
            return self._variables[operand.name]
        except KeyError:
            raise UnknownIdentifier(operand.name) from None

    def resolve_text(self, text: str) -> int:
        operand = parse_operand(text.strip())
        if operand is None:
            raise InvalidAssignment(f"Not a number or variable name: {text!r}")
        return self.resolve(operand)

    @staticmethod
    def check_name(name: str) -> None:
        if not re.fullmatch(IDENTIFIER_PATTERN, name):
            raise InvalidIdentifier(f"Not a valid variable name: {name!r}")

    def assign(self, name: str, value: int) -> None:
        self.check_name(name)
        logger.debug("%s := %d", name, value)
        self._variables[name] = value
