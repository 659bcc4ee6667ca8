from typing import Type

import pytest

from intcalc.environment import Environment, UnknownIdentifier
from intcalc.parser import UnbalancedParentheses
from intcalc.runtime import DivisionByZero, InvalidExponent, StackUnderflow, calculate
from intcalc.tokenizer import TokenizerError
from intcalc.utils import CalcError


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1", 1),
        pytest.param("3 + 4", 7),
        pytest.param("(1+2)", 3),
        pytest.param("(((7)))", 7),
        pytest.param("8 - 3 - 2", 3),
        pytest.param("10 - 2 - 3 + 4", 9),
        pytest.param("1 * 4 + 5", 9),
        pytest.param("1 + 4 * 5", 21),
        pytest.param("(2 + 3) * 4", 20),
        pytest.param("10 + 2 * (5 + 3 - 1)", 24),
        pytest.param("3 + 12 * 2 - 4 / 2 + (5 - 2)", 28),
        pytest.param("8 * 3 + 12 * (4 - 2)", 48),
        pytest.param("100 / 5 / 2", 10),
        # runs of signs
        pytest.param("5 - - 3", 8),
        pytest.param("5 - - - 3", 2),
        pytest.param("5 -- 3", 8),
        pytest.param("5 --- 3", 2),
        pytest.param("1 +++ 2", 3),
        pytest.param("1 + + 2", 3),
        pytest.param("2 - -3", 5),
        # powers, grouped left to right
        pytest.param("2 ^ 10", 1024),
        pytest.param("2 ^ 3 ^ 2", 64),
        pytest.param("2 * (3 + 4) ^ 2", 98),
        pytest.param("2 ^ 100", 2**100),
        pytest.param("7 ^ 0", 1),
        # division rounds toward zero
        pytest.param("7 / 2", 3),
        pytest.param("(0 - 7) / 2", -3),
        pytest.param("7 / (0 - 2)", -3),
        pytest.param("(0 - 8) / (0 - 3)", 2),
        # big numbers
        pytest.param("99999999999999999999 * 99999999999999999999", (10**20 - 1) ** 2),
        pytest.param("123456789012345678901234567890 - 123456789012345678901234567890", 0),
    ],
)
def test_eval_arithmetic(code: str, expected_ret_val: int) -> None:
    assert calculate(code, Environment()) == expected_ret_val


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("a", 4),
        pytest.param("a * b + 1", 21),
        pytest.param("a ^ 2 - b", 11),
        pytest.param("(a + b) * (a - b)", -9),
        pytest.param("big / a", 25 * 10**29),
    ],
)
def test_eval_with_variables(code: str, expected_ret_val: int) -> None:
    environment = Environment({"a": 4, "b": 5, "big": 10**31})
    assert calculate(code, environment) == expected_ret_val


@pytest.mark.parametrize(
    "code, error_type, summary",
    [
        pytest.param("x + 1", UnknownIdentifier, "Unknown variable"),
        pytest.param("1 / 0", DivisionByZero, "Division by zero"),
        pytest.param("1 / (2 - 2)", DivisionByZero, "Division by zero"),
        pytest.param("2 ^ (0 - 1)", InvalidExponent, "Invalid exponent"),
        pytest.param("2 ^ 3000000000", InvalidExponent, "Invalid exponent"),
        pytest.param("(1 + 2", UnbalancedParentheses, "Invalid expression"),
        pytest.param("1 + 2)", UnbalancedParentheses, "Invalid expression"),
        pytest.param("1 +", StackUnderflow, "Invalid expression"),
        pytest.param("-3", StackUnderflow, "Invalid expression"),
        pytest.param("1 2", StackUnderflow, "Invalid expression"),
        pytest.param("2 (3)", StackUnderflow, "Invalid expression"),
        pytest.param("()", StackUnderflow, "Invalid expression"),
        pytest.param("2 ** 3", TokenizerError, "Invalid expression"),
        pytest.param("2x + 1", TokenizerError, "Invalid expression"),
        pytest.param("5 % 2", TokenizerError, "Invalid expression"),
    ],
)
def test_eval_errors(code: str, error_type: Type[CalcError], summary: str) -> None:
    with pytest.raises(error_type) as exc_info:
        calculate(code, Environment())
    assert exc_info.value.summary == summary


def test_evaluation_is_repeatable() -> None:
    environment = Environment({"n": 12})
    first = calculate("n * (n - 1) / 2", environment)
    second = calculate("n * (n - 1) / 2", environment)
    assert first == second == 66
