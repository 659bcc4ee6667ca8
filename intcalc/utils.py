import enum
from typing import ClassVar


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


class CalcError(Exception):
    """Base for every error reported on a single input line.

    ``summary`` is the one-line message shown to the user, ``str()`` may carry
    a more detailed diagnostic for the debug log.
    """

    summary: ClassVar[str] = "Invalid expression"
