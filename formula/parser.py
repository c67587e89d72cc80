"""Precedence climbing evaluator

The value is computed while parsing: every operator is applied as soon as its right operand is complete, so no tree
is ever built. Operators of equal precedence group from the left. This holds for ``^`` as well, ``2^3^2`` is
``(2^3)^2 = 64``, unlike the usual mathematical convention.
"""
from typing import Mapping

from formula.errors import FormulaError
from formula.runtime import DivisionByZeroError, Precedence, apply_operator
from formula.tokenizer import Tokenizer, TokenType


class FormulaSyntaxError(FormulaError):
    pass


class UnmatchedParenError(FormulaError):
    pass


def evaluate(code: str, variables: Mapping[str, float]) -> float:
    try:
        tokenizer = Tokenizer(code, variables)
        result = _consume_expression(tokenizer, min_precedence=Precedence.GROUPING)
    except RecursionError:
        raise FormulaSyntaxError("Expression is nested too deeply", code=code) from None

    trailing = tokenizer.current
    if trailing.type is not TokenType.EXPR_END:
        raise FormulaSyntaxError(
            f"Unexpected {trailing.type} {trailing.lexeme!r} after complete expression",
            code=code,
            error_char_idx=trailing.pos,
        )
    return result


def _consume_expression(tokenizer: Tokenizer, min_precedence: int) -> float:
    left = _consume_operand(tokenizer)
    while tokenizer.current.type is TokenType.OPERATOR and tokenizer.current.precedence >= min_precedence:
        operator_token = tokenizer.current
        tokenizer.advance()
        # stops before any operator of the same tier, which then folds into ``left`` on the next iteration
        right = _consume_expression(tokenizer, min_precedence=operator_token.precedence + 1)
        try:
            left = apply_operator(operator_token.operator, left, right)  # type: ignore[arg-type]
        except DivisionByZeroError as e:
            e.code, e.error_char_idx = tokenizer.code, operator_token.pos
            raise
    return left


def _consume_operand(tokenizer: Tokenizer) -> float:
    first = tokenizer.current
    if first.type is TokenType.NUMBER:
        tokenizer.advance()
        return first.value
    elif first.type is TokenType.BRACKET_OPEN:
        tokenizer.advance()
        value = _consume_expression(tokenizer, min_precedence=Precedence.GROUPING)
        if tokenizer.current.type is not TokenType.BRACKET_CLOSE:
            raise UnmatchedParenError("Unclosed bracket", code=tokenizer.code, error_char_idx=first.pos)
        tokenizer.advance()
        return value
    elif first.type is TokenType.EXPR_END:
        raise FormulaSyntaxError("Unexpected end of expression", code=tokenizer.code, error_char_idx=first.pos)
    else:
        raise FormulaSyntaxError(
            f"Operand expected, found {first.type} {first.lexeme!r}",
            code=tokenizer.code,
            error_char_idx=first.pos,
        )
