"""Token types and token representation for Lox source code."""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class LoxTokenType(Enum):
    """Token types for Lox source code."""
    # Single-character tokens
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    COMMA = ","
    DOT = "."
    MINUS = "-"
    PLUS = "+"
    SEMICOLON = ";"
    SLASH = "/"
    STAR = "*"
    QUESTION = "?"
    COLON = ":"

    # One or two character tokens
    BANG = "!"
    BANG_EQUAL = "!="
    EQUAL = "="
    EQUAL_EQUAL = "=="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"

    # Reserved words
    AND = "and"
    CLASS = "class"
    ELSE = "else"
    FALSE = "false"
    FUN = "fun"
    FOR = "for"
    IF = "if"
    NIL = "nil"
    OR = "or"
    PRINT = "print"
    RETURN = "return"
    SUPER = "super"
    THIS = "this"
    TRUE = "true"
    VAR = "var"
    WHILE = "while"

    EOF = "EOF"


KEYWORDS = {
    token_type.value: token_type for token_type in (
        LoxTokenType.AND, LoxTokenType.CLASS, LoxTokenType.ELSE, LoxTokenType.FALSE,
        LoxTokenType.FUN, LoxTokenType.FOR, LoxTokenType.IF, LoxTokenType.NIL,
        LoxTokenType.OR, LoxTokenType.PRINT, LoxTokenType.RETURN, LoxTokenType.SUPER,
        LoxTokenType.THIS, LoxTokenType.TRUE, LoxTokenType.VAR, LoxTokenType.WHILE
    )
}


@dataclass(frozen=True)
class LoxToken:
    """Represents a single lexeme scanned from Lox source code."""
    type: LoxTokenType
    lexeme: str
    literal: Union[float, str, None] = None
    line: int = 1  # Line number (1-indexed)
    column: int = 1  # Column number (1-indexed)

    def __repr__(self) -> str:
        return f"LoxToken({self.type.name}, {self.lexeme!r}, line={self.line}, col={self.column})"
