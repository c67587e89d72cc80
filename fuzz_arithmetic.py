"""Differential fuzzing: random expression trees, written with as few brackets as precedence allows,
against a direct evaluation of the same tree"""
import math
import operator
import random
from typing import Callable, Union

from formula.errors import FormulaError
from formula.parser import evaluate
from formula.runtime import OPERATOR_PRECEDENCE, BinaryOperator, Precedence

VARIABLES = {"x": 2.0, "y": 0.5, "big": 1e200}

REFERENCE_IMPLS: dict[BinaryOperator, Callable[[float, float], float]] = {
    BinaryOperator.ADD: operator.add,
    BinaryOperator.SUB: operator.sub,
    BinaryOperator.MUL: operator.mul,
    BinaryOperator.DIV: operator.truediv,
    BinaryOperator.MOD: math.fmod,
    BinaryOperator.POW: math.pow,
}

# leaf lexeme, or (operator, left, right)
Node = Union[str, tuple[BinaryOperator, "Node", "Node"]]


def generate(depth: int) -> Node:
    if depth == 0 or random.random() < 0.3:
        return random.choice([str(random.randint(0, 9)), f"{random.randint(0, 99)}.{random.randint(0, 9)}", *VARIABLES])
    return (random.choice(list(BinaryOperator)), generate(depth - 1), generate(depth - 1))


def _spaces() -> str:
    return random.choice(["", " ", "  ", "\t"])


def render(node: Node, parent_precedence: int = Precedence.GROUPING, is_right: bool = False) -> str:
    if isinstance(node, str):
        return node
    op, left, right = node
    precedence = OPERATOR_PRECEDENCE[op]
    code = f"{render(left, precedence)}{_spaces()}{op.value}{_spaces()}{render(right, precedence, is_right=True)}"
    # operators group from the left, so an equal tier on the right needs brackets
    if precedence < parent_precedence or (is_right and precedence == parent_precedence) or random.random() < 0.1:
        return f"({code})"
    return code


def eval_reference(node: Node) -> float:
    if isinstance(node, str):
        return VARIABLES[node] if node in VARIABLES else float(node)
    op, left, right = node
    a, b = eval_reference(left), eval_reference(right)
    if op in (BinaryOperator.DIV, BinaryOperator.MOD) and b == 0:
        raise ZeroDivisionError(f"{a} {op.value} {b}")
    return REFERENCE_IMPLS[op](a, b)


def same_result(a: float, b: float) -> bool:
    if math.isnan(a) or math.isnan(b):
        return math.isnan(a) and math.isnan(b)
    if math.isinf(a) or math.isinf(b):
        return a == b
    return math.isclose(a, b, rel_tol=1e-9, abs_tol=1e-12)


if __name__ == "__main__":
    while True:
        tree = generate(depth=4)
        code = render(tree)

        try:
            res_ref: Union[float, str] = eval_reference(tree)
        except ZeroDivisionError as e:
            res_ref = str(e)
        except (OverflowError, ValueError):
            continue  # math.pow/fmod raise where C gives inf or nan

        try:
            res_my: Union[float, str] = evaluate(code, VARIABLES)
        except FormulaError as e:
            res_my = str(e)

        if isinstance(res_ref, float) and isinstance(res_my, float) and same_result(res_ref, res_my):
            continue
        if isinstance(res_ref, str) and isinstance(res_my, str):
            continue  # both divided by zero
        print(f"{code!r}\nref: {res_ref}\nmy: {res_my}\n\n")
