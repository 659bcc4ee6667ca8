import re
import sys
from dataclasses import dataclass
from typing import Callable, Optional

from intcalc.utils import PrintableEnum

INTEGER_PATTERN = r"[+-]?\d+"
IDENTIFIER_PATTERN = r"[A-Za-z]+"

MAX_EXPONENT = 2**31 - 1

# results and literals of any size must convert to and from decimal text
if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)


class Tier(PrintableEnum):
    ADDITIVE = 1
    MULTIPLICATIVE = 2
    EXPONENTIAL = 3


def _divide(a: int, b: int) -> int:
    # rounds toward zero, unlike //
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _power(a: int, b: int) -> int:
    if b < 0 or b > MAX_EXPONENT:
        raise ValueError(f"Exponent must be between 0 and {MAX_EXPONENT}")
    return a**b


BinaryFn = Callable[[int, int], int]


class Operator(PrintableEnum):
    LEFT_PAREN = ("(", None, None)
    ADD = ("+", Tier.ADDITIVE, lambda a, b: a + b)
    SUBTRACT = ("-", Tier.ADDITIVE, lambda a, b: a - b)
    MULTIPLY = ("*", Tier.MULTIPLICATIVE, lambda a, b: a * b)
    DIVIDE = ("/", Tier.MULTIPLICATIVE, _divide)
    POWER = ("^", Tier.EXPONENTIAL, _power)
    RIGHT_PAREN = (")", None, None)

    def __init__(self, symbol: str, tier: Optional[Tier], fn: Optional[BinaryFn]) -> None:
        self.symbol = symbol
        self.tier = tier
        self.fn = fn

    @property
    def is_paren(self) -> bool:
        return self.tier is None

    def binds_at_least_as_tight(self, other: "Operator") -> bool:
        if self.tier is None or other.tier is None:
            return False
        return self.tier.value >= other.tier.value

    def apply(self, a: int, b: int) -> int:
        if self.fn is None:
            raise TypeError(f"{self.name} is structural and cannot be applied")
        return self.fn(a, b)

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class Operand:
    name: Optional[str] = None
    literal: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.name is None) == (self.literal is None):
            raise ValueError("Operand needs exactly one of name and literal")

    def __str__(self) -> str:
        return self.name if self.name is not None else str(self.literal)


Token = Operand | Operator


def parse_operand(text: str) -> Optional[Operand]:
    """Reads a whole string as a single integer literal or identifier."""
    if re.fullmatch(INTEGER_PATTERN, text):
        return Operand(literal=int(text))
    if re.fullmatch(IDENTIFIER_PATTERN, text):
        return Operand(name=text)
    return None
