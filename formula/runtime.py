import enum
import math
from typing import Callable

from formula.errors import FormulaError
from formula.utils import PrintableEnum


class DivisionByZeroError(FormulaError):
    pass


class BinaryOperator(PrintableEnum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"


class Precedence(enum.IntEnum):
    GROUPING = 0
    ADDITIVE = 1
    MULTIPLICATIVE = 2
    POWER = 3


SYMBOL_OPERATORS: dict[str, BinaryOperator] = {op.value: op for op in BinaryOperator}

OPERATOR_PRECEDENCE: dict[BinaryOperator, Precedence] = {
    BinaryOperator.ADD: Precedence.ADDITIVE,
    BinaryOperator.SUB: Precedence.ADDITIVE,
    BinaryOperator.MUL: Precedence.MULTIPLICATIVE,
    BinaryOperator.DIV: Precedence.MULTIPLICATIVE,
    BinaryOperator.MOD: Precedence.MULTIPLICATIVE,
    BinaryOperator.POW: Precedence.POWER,
}


def _is_odd_integer(x: float) -> bool:
    return float(x).is_integer() and x % 2 == 1


def _fmod(a: float, b: float) -> float:
    try:
        return math.fmod(a, b)
    except ValueError:
        # fmod(inf, b)
        return math.nan


def _pow(a: float, b: float) -> float:
    """``a`` to the power of ``b`` with C ``pow`` results where Python would raise

    Overflow and zero to a negative power give an infinity, negative base to a fractional power gives NaN.
    """
    try:
        return math.pow(a, b)
    except OverflowError:
        return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
    except ValueError:
        if a == 0:
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan


BinaryOperationImpl = Callable[[float, float], float]

BINARY_OPERATION_IMPLS: dict[BinaryOperator, BinaryOperationImpl] = {
    BinaryOperator.ADD: lambda a, b: a + b,
    BinaryOperator.SUB: lambda a, b: a - b,
    BinaryOperator.MUL: lambda a, b: a * b,
    BinaryOperator.DIV: lambda a, b: a / b,
    BinaryOperator.MOD: _fmod,
    BinaryOperator.POW: _pow,
}

ZERO_DIVISOR_FORBIDDEN = frozenset([BinaryOperator.DIV, BinaryOperator.MOD])


def apply_operator(operator: BinaryOperator, left: float, right: float) -> float:
    if operator in ZERO_DIVISOR_FORBIDDEN and right == 0:
        raise DivisionByZeroError(f"Division by zero: {left:g} {operator.value} {right:g}")
    return BINARY_OPERATION_IMPLS[operator](left, right)
