import enum
import math
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from formula.errors import FormulaError
from formula.runtime import OPERATOR_PRECEDENCE, SYMBOL_OPERATORS, BinaryOperator, Precedence
from formula.utils import PrintableEnum


@dataclass
class UnexpectedCharacterError(FormulaError):
    char: str = ""


@dataclass
class UndefinedVariableError(FormulaError):
    name: str = ""


@dataclass
class NumberFormatError(FormulaError):
    lexeme: str = ""


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    OPERATOR = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    EXPR_END = enum.auto()


@dataclass
class Token:
    type: TokenType
    lexeme: str
    pos: int
    value: float = 0.0  # NUMBER only
    operator: Optional[BinaryOperator] = None  # OPERATOR only
    precedence: Precedence = Precedence.GROUPING

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


def _is_valid_in_number(s: str) -> bool:
    return s.isdigit() or s == "."


def _is_valid_identifier_start(s: str) -> bool:
    return s.isalpha() or s == "_"


def _is_valid_in_identifier(s: str) -> bool:
    return s.isalnum() or s == "_"


BRACKET_TOKENS = {
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}

_NUMBER_LITERAL_RE = re.compile(r"\d+(\.\d+)?", re.ASCII)


def parse_number(lexeme: str, code: str, pos: int) -> float:
    """Convert a scanned number lexeme, rejecting anything that is not ``digits[.digits]`` or does not fit a float"""
    if _NUMBER_LITERAL_RE.fullmatch(lexeme) is None:
        raise NumberFormatError(f"Malformed number: {lexeme!r}", code=code, error_char_idx=pos, lexeme=lexeme)
    value = float(lexeme)
    if not math.isfinite(value):
        raise NumberFormatError(f"Number out of range: {lexeme!r}", code=code, error_char_idx=pos, lexeme=lexeme)
    return value


def resolve_variable(name: str, variables: Mapping[str, float], code: str, pos: int) -> float:
    """Value of ``name`` as a finite float, whatever numeric type the caller stored"""
    if name not in variables:
        raise UndefinedVariableError(f"Unknown variable: {name}", code=code, error_char_idx=pos, name=name)
    try:
        value = float(variables[name])
    except OverflowError:
        value = math.inf
    if not math.isfinite(value):
        raise NumberFormatError(f"Variable {name} is not a finite number", code=code, error_char_idx=pos, lexeme=name)
    return value


class Tokenizer:
    """Reads ``code`` one token at a time, resolving identifiers against ``variables``

    The first token is scanned on construction. ``current`` is the only token kept, ``pos`` is the index of
    the first character not consumed yet. The parser calls ``advance`` whenever it is done with ``current``.
    """

    def __init__(self, code: str, variables: Mapping[str, float]) -> None:
        self.code = code
        self.variables = variables
        self.pos = 0
        self.current = self._scan()

    def advance(self) -> Token:
        self.current = self._scan()
        return self.current

    def _scan(self) -> Token:
        code = self.code
        i = self.pos
        while i < len(code) and code[i].isspace():
            i += 1

        if i >= len(code):
            self.pos = len(code)
            return Token(type=TokenType.EXPR_END, lexeme="", pos=self.pos)

        if code[i].isdigit():
            number_end_idx = i + 1
            while number_end_idx < len(code) and _is_valid_in_number(code[number_end_idx]):
                number_end_idx += 1
            lexeme = code[i:number_end_idx]
            value = parse_number(lexeme, code=code, pos=i)
            self.pos = number_end_idx
            return Token(type=TokenType.NUMBER, lexeme=lexeme, pos=i, value=value)
        elif _is_valid_identifier_start(code[i]):
            ident_end_idx = i + 1
            while ident_end_idx < len(code) and _is_valid_in_identifier(code[ident_end_idx]):
                ident_end_idx += 1
            name = code[i:ident_end_idx]
            value = resolve_variable(name, self.variables, code=code, pos=i)
            self.pos = ident_end_idx
            return Token(type=TokenType.NUMBER, lexeme=name, pos=i, value=value)
        elif code[i] in SYMBOL_OPERATORS:
            operator = SYMBOL_OPERATORS[code[i]]
            self.pos = i + 1
            return Token(
                type=TokenType.OPERATOR,
                lexeme=code[i],
                pos=i,
                operator=operator,
                precedence=OPERATOR_PRECEDENCE[operator],
            )
        elif code[i] in BRACKET_TOKENS:
            self.pos = i + 1
            return Token(type=BRACKET_TOKENS[code[i]], lexeme=code[i], pos=i)
        else:
            raise UnexpectedCharacterError(
                f"Unexpected character: {code[i]!r}", code=code, error_char_idx=i, char=code[i]
            )


def tokenize(code: str, variables: Mapping[str, float]) -> list[Token]:
    """All tokens of ``code`` up to and including EXPR_END; for inspection, evaluation never builds this list"""
    tokenizer = Tokenizer(code, variables)
    tokens = [tokenizer.current]
    while tokens[-1].type is not TokenType.EXPR_END:
        tokens.append(tokenizer.advance())
    return tokens
