import logging
import re
from dataclasses import dataclass
from typing import Callable

from intcalc.tokens import IDENTIFIER_PATTERN, INTEGER_PATTERN, Operand, Operator, Token
from intcalc.utils import CalcError

logger = logging.getLogger(__name__)


@dataclass
class TokenizerError(CalcError):
    errmsg: str
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        print_start_idx = max(0, self.error_char_idx - 10)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(self.code), self.error_char_idx + 10)
        print_ellipsis_post = print_end_idx < len(self.code)
        return "\n".join(
            [
                f"[Tokenizer error] {self.errmsg}",
                (
                    ("..." if print_ellipsis_pre else "")
                    + f"{self.code[print_start_idx:print_end_idx]}"
                    + ("..." if print_ellipsis_post else "")
                ),
                " " * (self.error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
            ]
        )


# an operator must be followed by an operand, a parenthesis or the end of input
_OPERATOR_END = r"\s*(?=\w|[()]|$)"
# an operand must not run straight into another word character
_OPERAND_END = r"(?!\w)\s*"


@dataclass
class TokenRule:
    name: str
    pattern: re.Pattern
    build: Callable[[str], Token]

    def match(self, residual: str) -> re.Match | None:
        return self.pattern.match(residual)


def _operator_rule(operator: Operator, regexp: str) -> TokenRule:
    return TokenRule(name=operator.name, pattern=re.compile(regexp), build=lambda _: operator)


# Tried in this order, operators before operands. The order only settles overlapping
# patterns, precedence is handled by the parser.
TOKEN_RULES: list[TokenRule] = [
    _operator_rule(Operator.LEFT_PAREN, r"\(\s*"),
    _operator_rule(Operator.RIGHT_PAREN, r"\)\s*"),
    _operator_rule(Operator.ADD, r"(?:\+(?:\s*\+)*|-\s*-(?:\s*-\s*-)*)(?!\s*[-+])" + _OPERATOR_END),
    _operator_rule(Operator.SUBTRACT, r"-(?:\s*-\s*-)*(?!\s*-)" + _OPERATOR_END),
    _operator_rule(Operator.MULTIPLY, r"\*" + _OPERATOR_END),
    _operator_rule(Operator.DIVIDE, r"/" + _OPERATOR_END),
    _operator_rule(Operator.POWER, r"\^" + _OPERATOR_END),
    TokenRule(
        name="INTEGER",
        pattern=re.compile(INTEGER_PATTERN + _OPERAND_END),
        build=lambda text: Operand(literal=int(text.strip())),
    ),
    TokenRule(
        name="IDENTIFIER",
        pattern=re.compile(IDENTIFIER_PATTERN + _OPERAND_END),
        build=lambda text: Operand(name=text.strip()),
    ),
]


def next_token(residual: str) -> tuple[Token, str]:
    """Strips one token off the front of ``residual``.

    Returns the token and the trimmed remainder. Raises TokenizerError if no rule
    matches at position 0.
    """
    residual = residual.lstrip()
    for rule in TOKEN_RULES:
        match = rule.match(residual)
        if match is None:
            continue
        token = rule.build(match.group(0))
        logger.debug("Matched %s %r in %r", rule.name, match.group(0), residual)
        return token, residual[match.end() :].strip()
    raise TokenizerError("No token matches", code=residual, error_char_idx=0)


def tokenize(code: str) -> list[Token]:
    tokens: list[Token] = []
    residual = code.strip()
    while residual:
        try:
            token, residual = next_token(residual)
        except TokenizerError as e:
            raise TokenizerError(
                f"Unexpected input: {residual[:10]!r}",
                code=code,
                error_char_idx=len(code.rstrip()) - len(residual),
            ) from e
        tokens.append(token)
    return tokens


def untokenize(tokens: list[Token]) -> str:
    result = " ".join(str(t) for t in tokens)

    # ( 1 + 2 ) => (1 + 2)
    result = re.sub(r"\(\s+", "(", result)
    result = re.sub(r"\s+\)", ")", result)
    return result
