import logging
from dataclasses import dataclass

from intcalc.environment import Environment
from intcalc.parser import to_postfix
from intcalc.tokenizer import tokenize, untokenize
from intcalc.tokens import Operand, Operator, Token
from intcalc.utils import CalcError

logger = logging.getLogger(__name__)


@dataclass
class CalcRuntimeError(CalcError):
    errmsg: str

    def __str__(self) -> str:
        return self.errmsg


class StackUnderflow(CalcRuntimeError):
    pass


class ArithmeticFault(CalcRuntimeError):
    pass


class DivisionByZero(ArithmeticFault):
    summary = "Division by zero"


class InvalidExponent(ArithmeticFault):
    summary = "Invalid exponent"


def evaluate(postfix: list[Token], environment: Environment) -> int:
    stack: list[int] = []
    for token in postfix:
        if isinstance(token, Operand):
            stack.append(environment.resolve(token))
        elif token.is_paren:
            raise CalcRuntimeError(f"Unexpected parenthesis in postfix sequence: {token}")
        else:
            if len(stack) < 2:
                raise StackUnderflow(f"Operator {token} needs two operands, {len(stack)} available")
            b = stack.pop()
            a = stack.pop()
            stack.append(apply_operator(token, a, b))

    if len(stack) != 1:
        raise StackUnderflow(f"Expected a single result, {len(stack)} values left")
    logger.debug("Evaluated %s", untokenize(postfix))
    return stack[0]


def apply_operator(operator: Operator, a: int, b: int) -> int:
    try:
        return operator.apply(a, b)
    except ZeroDivisionError:
        raise DivisionByZero("Integer division by zero") from None
    except ValueError as e:
        raise InvalidExponent(str(e)) from e


def calculate(code: str, environment: Environment) -> int:
    """Tokenizes, converts and evaluates one infix expression."""
    return evaluate(to_postfix(tokenize(code)), environment)
