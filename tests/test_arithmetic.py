import math
import random
from typing import Type

import pytest

from formula.errors import FormulaError
from formula.parser import FormulaSyntaxError, UnmatchedParenError, evaluate
from formula.runtime import DivisionByZeroError
from formula.tokenizer import NumberFormatError, UndefinedVariableError, UnexpectedCharacterError


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1", 1.0),
        pytest.param("1+2", 3.0),
        pytest.param("(1+2)", 3.0),
        pytest.param("(((1)))", 1.0),
        pytest.param("1 * 4 + 5", 9.0),
        pytest.param("1 + 4 * 5", 21.0),
        pytest.param("10 / 5 / 2 / 2", 0.5),
        pytest.param("10 - 4 - 3", 3.0),
        pytest.param("10 + 2 * (5 + 3 - 1)", 24.0),
        pytest.param("2+3*4", 14.0),
        pytest.param("(2+3)*4", 20.0),
        pytest.param("1.5 * 4", 6.0),
        # modulo shares a tier with * and /
        pytest.param("10%3", 1.0),
        pytest.param("7 % 4 * 3", 9.0),
        pytest.param("2 * 7 % 4", 2.0),
        pytest.param("7.5 % 2", 1.5),
        pytest.param("(0 - 7) % 3", -1.0),
        # power binds tightest and groups from the left
        pytest.param("2 * 3 ^ 2", 18.0),
        pytest.param("2^3^2", 64.0),
        pytest.param("2^(3^2)", 512.0),
        pytest.param("4 ^ 0.5", 2.0),
        pytest.param("2 ^ (0 - 1)", 0.5),
        # whitespace
        pytest.param(" \t1 +\n  2 ", 3.0),
    ],
)
def test_eval_arithmetic(code: str, expected_ret_val: float) -> None:
    assert evaluate(code, variables={}) == expected_ret_val


@pytest.mark.parametrize(
    "code, variables, expected_ret_val",
    [
        pytest.param("x * 2", {"x": 3.0}, 6.0),
        pytest.param("a + A", {"a": 1.0, "A": 2.0}, 3.0),
        pytest.param("_tmp1 ^ two", {"_tmp1": 3.0, "two": 2.0}, 9.0),
        pytest.param("30*n - 2*(50+55) + a%3 + 2^3", {"n": 20.0, "a": 10.0}, 399.0),
    ],
)
def test_eval_with_variables(code: str, variables: dict[str, float], expected_ret_val: float) -> None:
    assert evaluate(code, variables) == expected_ret_val


@pytest.mark.parametrize(
    "code, error_type, error_char_idx",
    [
        pytest.param("1/0", DivisionByZeroError, 1),
        pytest.param("5 % (2 - 2)", DivisionByZeroError, 2),
        pytest.param("a+1", UndefinedVariableError, 0),
        pytest.param("2 # 3", UnexpectedCharacterError, 2),
        pytest.param("1.2.3", NumberFormatError, 0),
        pytest.param("1 + 2.", NumberFormatError, 4),
        pytest.param("", FormulaSyntaxError, 0),
        pytest.param("   ", FormulaSyntaxError, 3),
        pytest.param("1 +", FormulaSyntaxError, 3),
        pytest.param("* 2", FormulaSyntaxError, 0),
        pytest.param("-1", FormulaSyntaxError, 0),
        pytest.param("()", FormulaSyntaxError, 1),
        pytest.param("(1 + 2", UnmatchedParenError, 0),
        pytest.param("(1 2)", UnmatchedParenError, 0),
        pytest.param("((1 + 2) * 3", UnmatchedParenError, 0),
        # trailing input after a complete expression
        pytest.param("1 2", FormulaSyntaxError, 2),
        pytest.param("2+3)junk", FormulaSyntaxError, 3),
    ],
)
def test_eval_errors(code: str, error_type: Type[FormulaError], error_char_idx: int) -> None:
    with pytest.raises(error_type) as exc_info:
        evaluate(code, variables={})
    assert exc_info.value.code == code
    assert exc_info.value.error_char_idx == error_char_idx


def test_undefined_variable_is_named() -> None:
    with pytest.raises(UndefinedVariableError) as exc_info:
        evaluate("a+1", variables={})
    assert exc_info.value.name == "a"


def test_deep_nesting_is_a_syntax_error() -> None:
    code = "(" * 5000 + "1" + ")" * 5000
    with pytest.raises(FormulaSyntaxError, match="nested too deeply"):
        evaluate(code, variables={})


def test_special_values_pass_through() -> None:
    assert evaluate("10 ^ 400", variables={}) == math.inf
    assert evaluate("10 ^ 308 * 10", variables={}) == math.inf
    assert math.isnan(evaluate("(0 - 8) ^ 0.5 + 1", variables={}))


def _parenthesize(operands: list[int], operators: list[str]) -> str:
    """Same expression with every operation wrapped in brackets, * and / folded before + and -"""
    terms = [str(operands[0])]
    additive_operators = []
    for op, operand in zip(operators, operands[1:]):
        if op in "*/":
            terms[-1] = f"({terms[-1]} {op} {operand})"
        else:
            additive_operators.append(op)
            terms.append(str(operand))
    result = terms[0]
    for op, term in zip(additive_operators, terms[1:]):
        result = f"({result} {op} {term})"
    return result


@pytest.mark.parametrize("seed", range(50))
def test_precedence_matches_parenthesized_rewrite(seed: int) -> None:
    rng = random.Random(seed)
    length = rng.randint(1, 8)
    operands = [rng.randint(1, 9) for _ in range(length + 1)]
    operators = [rng.choice("+-*/") for _ in range(length)]
    code = str(operands[0]) + "".join(f" {op} {operand}" for op, operand in zip(operators, operands[1:]))

    result = evaluate(code, variables={})
    assert result == evaluate(_parenthesize(operands, operators), variables={})
    assert math.isclose(result, eval(code), rel_tol=1e-12, abs_tol=1e-12)


@pytest.mark.parametrize(
    "code, variables, expected_ret_val",
    [
        pytest.param("x", {"x": 3}, 3.0),
        pytest.param("x / y", {"x": 1, "y": 4}, 0.25),
        pytest.param("x ^ y", {"x": 10, "y": 401}, math.inf),
        pytest.param("(0 - x) ^ y", {"x": 10, "y": 401}, -math.inf),
        pytest.param("flag + 1", {"flag": True}, 2.0),
    ],
)
def test_eval_with_int_variables(code: str, variables: dict[str, float], expected_ret_val: float) -> None:
    result = evaluate(code, variables)
    assert isinstance(result, float)
    assert result == expected_ret_val


@pytest.mark.parametrize("value", [10**400, math.inf, math.nan])
def test_non_finite_variable_is_a_format_error(value: float) -> None:
    with pytest.raises(NumberFormatError) as exc_info:
        evaluate("1 + x", {"x": value})
    assert exc_info.value.lexeme == "x"
    assert exc_info.value.error_char_idx == 4
