"""Exception classes for Lox with source locations and diagnostic formatting."""

import difflib
from typing import List

from lox.lox_token import LoxToken, LoxTokenType


class LoxError(Exception):
    """Base exception for Lox errors with source location information."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        received: str | None = None,
        suggestion: str | None = None
    ):
        """
        Initialize error.

        Args:
            message: Core error description
            line: Line number (1-indexed)
            column: Column number (1-indexed)
            received: What was actually received
            suggestion: Suggestion for fixing the error
        """
        self.message = message
        self.line = line
        self.column = column
        self.received = received
        self.suggestion = suggestion

        super().__init__(self._format_detailed_message())

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.line is not None:
            if self.column is not None:
                parts.append(f"Location: line {self.line}, column {self.column}")

            else:
                parts.append(f"Location: line {self.line}")

        if self.received:
            parts.append(f"Received: {self.received}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        return "\n".join(parts)

    def _location(self) -> str:
        return f"[{self.line}:{self.column}]"

    def format_diagnostic(self) -> str:
        """Format the single-line diagnostic written to the error stream."""
        return f"{self._location()} Error: {self.message}"


class LoxScanError(LoxError):
    """Lexical errors: unexpected characters, unterminated strings and comments."""

    def __init__(self, line: int, column: int, message: str):
        super().__init__(message, line=line, column=column)


class LoxTokenError(LoxError):
    """Errors tied to a specific token."""

    def __init__(
        self,
        token: LoxToken,
        message: str,
        received: str | None = None,
        suggestion: str | None = None
    ):
        self.token = token
        super().__init__(
            message, line=token.line, column=token.column, received=received, suggestion=suggestion
        )


class LoxParseError(LoxTokenError):
    """Syntax errors: unexpected or missing tokens, invalid assignment targets."""

    def format_diagnostic(self) -> str:
        if self.token.type == LoxTokenType.EOF:
            return f"{self._location()} Error at end: {self.message}"

        return f"{self._location()} Error at '{self.token.lexeme}': {self.message}"


class LoxRuntimeError(LoxTokenError):
    """Unrecoverable evaluation faults."""

    def format_diagnostic(self) -> str:
        return f"{self._location()} Runtime Error: {self.message}"


class LoxOperandTypeError(LoxRuntimeError):
    """An operator was applied to operands of the wrong kind."""


class LoxUndefinedVariableError(LoxRuntimeError):
    """A variable was read or assigned without being declared."""


def suggest_similar_names(target: str, available: List[str], max_suggestions: int = 3) -> List[str]:
    """Suggest similar names using fuzzy matching."""
    if not target or not available:
        return []

    return difflib.get_close_matches(target, available, n=max_suggestions, cutoff=0.6)
