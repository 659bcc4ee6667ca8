import logging
from dataclasses import dataclass

from intcalc.tokenizer import untokenize
from intcalc.tokens import Operand, Operator, Token
from intcalc.utils import CalcError

logger = logging.getLogger(__name__)


@dataclass
class ParserError(CalcError):
    errmsg: str
    tokens: list[Token]
    error_token_idx: int

    def __str__(self) -> str:
        parsed_tokens = self.tokens[: self.error_token_idx]
        filler_whitespace = " " * len(untokenize(parsed_tokens)) + " "
        return "\n".join([f"Parser error: {self.errmsg}", untokenize(self.tokens), filler_whitespace + "^"])


class UnbalancedParentheses(ParserError):
    pass


def to_postfix(tokens: list[Token]) -> list[Token]:
    """Shunting-yard conversion of an infix token list.

    Operators of equal tier are left-associative, so ``2 ^ 3 ^ 2`` groups as
    ``(2 ^ 3) ^ 2``. Raises UnbalancedParentheses as soon as a closing parenthesis
    has no partner, or at the end if an opening one was never closed.
    """
    postfix: list[Token] = []
    operators: list[Operator] = []
    level = 0

    for i, token in enumerate(tokens):
        if isinstance(token, Operand):
            postfix.append(token)
        elif token is Operator.LEFT_PAREN:
            operators.append(token)
            level += 1
        elif token is Operator.RIGHT_PAREN:
            level -= 1
            while operators and operators[-1] is not Operator.LEFT_PAREN:
                postfix.append(operators.pop())
            # an unmatched closing bracket empties the stack before level can go negative
            if not operators:
                raise UnbalancedParentheses("Unmatched closing bracket", tokens=tokens, error_token_idx=i)
            operators.pop()
        else:
            while operators and operators[-1].binds_at_least_as_tight(token):
                postfix.append(operators.pop())
            operators.append(token)
            logger.debug("Operators: %s", " ".join(str(op) for op in operators))

    if level != 0:
        raise UnbalancedParentheses("Unclosed bracket", tokens=tokens, error_token_idx=len(tokens))

    while operators:
        postfix.append(operators.pop())

    logger.debug("Postfix: %s", untokenize(postfix))
    return postfix
