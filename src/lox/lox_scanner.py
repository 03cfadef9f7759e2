"""Scanner that converts Lox source code into tokens, collecting lexical errors."""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple, Union

from lox.lox_error import LoxScanError
from lox.lox_token import KEYWORDS, LoxToken, LoxTokenType


@dataclass
class LoxScanResult:
    """Tokens produced by a scan along with any lexical errors found."""
    tokens: List[LoxToken] = field(default_factory=list)
    errors: List[LoxScanError] = field(default_factory=list)

    @property
    def had_error(self) -> bool:
        """Check if any lexical errors were found."""
        return len(self.errors) > 0


class LoxScanner:
    """
    Scans Lox source code into tokens.

    Scanning never stops at the first problem: every lexical error in the source is
    collected, the offending characters are skipped, and the token sequence always ends
    with exactly one EOF token.
    """

    # Operators that may be followed by '=' to form a two-character operator
    _EQUAL_SUFFIXED = {
        '!': (LoxTokenType.BANG_EQUAL, LoxTokenType.BANG),
        '=': (LoxTokenType.EQUAL_EQUAL, LoxTokenType.EQUAL),
        '<': (LoxTokenType.LESS_EQUAL, LoxTokenType.LESS),
        '>': (LoxTokenType.GREATER_EQUAL, LoxTokenType.GREATER),
    }

    _SINGLE_CHAR = {
        '(': LoxTokenType.LEFT_PAREN,
        ')': LoxTokenType.RIGHT_PAREN,
        '{': LoxTokenType.LEFT_BRACE,
        '}': LoxTokenType.RIGHT_BRACE,
        ',': LoxTokenType.COMMA,
        '.': LoxTokenType.DOT,
        '-': LoxTokenType.MINUS,
        '+': LoxTokenType.PLUS,
        ';': LoxTokenType.SEMICOLON,
        '*': LoxTokenType.STAR,
        '?': LoxTokenType.QUESTION,
        ':': LoxTokenType.COLON,
    }

    def __init__(self) -> None:
        """Initialize the scanner."""
        self._logger = logging.getLogger("LoxScanner")
        self._source = ""
        self._tokens: List[LoxToken] = []
        self._errors: List[LoxScanError] = []
        self._start = 0
        self._current = 0
        self._line = 1
        self._line_start = 0
        self._start_line = 1
        self._start_column = 1

    def scan(self, source: str) -> LoxScanResult:
        """
        Scan Lox source code into tokens.

        Args:
            source: The source code to scan

        Returns:
            The token sequence (always terminated by EOF) and any lexical errors
        """
        self._source = source
        self._tokens = []
        self._errors = []
        self._start = 0
        self._current = 0
        self._line = 1
        self._line_start = 0

        while not self._is_at_end():
            # We are at the beginning of the next lexeme
            self._start = self._current
            self._start_line = self._line
            self._start_column = self._column()
            self._scan_token()

        self._tokens.append(LoxToken(LoxTokenType.EOF, "", None, self._line, self._column()))

        self._logger.debug("Scanned %d tokens with %d errors", len(self._tokens), len(self._errors))
        return LoxScanResult(self._tokens, self._errors)

    def _scan_token(self) -> None:
        c = self._advance()

        if c in self._SINGLE_CHAR:
            self._add_token(self._SINGLE_CHAR[c])
            return

        if c in self._EQUAL_SUFFIXED:
            two_char, one_char = self._EQUAL_SUFFIXED[c]
            self._add_token(two_char if self._match('=') else one_char)
            return

        if c == '/':
            if self._match('/'):
                # A comment goes until the end of the line
                while self._peek() != '\n' and not self._is_at_end():
                    self._advance()

                return

            if self._match('*'):
                self._block_comment()
                return

            self._add_token(LoxTokenType.SLASH)
            return

        if c in ' \r\t':
            return

        if c == '\n':
            self._new_line()
            return

        if c == '"':
            self._string()
            return

        if self._is_digit(c):
            self._number()
            return

        if self._is_alpha(c):
            self._identifier()
            return

        self._error(self._start_line, self._start_column, f"Unexpected character: {c}")

    def _identifier(self) -> None:
        while self._is_alpha_numeric(self._peek()):
            self._advance()

        text = self._source[self._start:self._current]
        self._add_token(KEYWORDS.get(text, LoxTokenType.IDENTIFIER))

    def _number(self) -> None:
        while self._is_digit(self._peek()):
            self._advance()

        # Look for a fractional part
        if self._peek() == '.' and self._is_digit(self._peek_next()):
            self._advance()

            while self._is_digit(self._peek()):
                self._advance()

        self._add_token(LoxTokenType.NUMBER, float(self._source[self._start:self._current]))

    def _string(self) -> None:
        while self._peek() != '"' and not self._is_at_end():
            if self._advance() == '\n':
                self._new_line()

        if self._is_at_end():
            self._error(self._line, self._column(), "Unterminated string.")
            return

        # The closing quote
        self._advance()

        # Trim the surrounding quotes
        self._add_token(LoxTokenType.STRING, self._source[self._start + 1:self._current - 1])

    def _block_comment(self) -> None:
        """
        Skip a block comment, honouring nested comments.

        Every still-open comment at the end of input is reported at the position of
        its opening delimiter.
        """
        open_comments: List[Tuple[int, int]] = [(self._start_line, self._start_column)]

        while open_comments and not self._is_at_end():
            opener_line = self._line
            opener_column = self._column()
            c = self._advance()

            if c == '\n':
                self._new_line()

            elif c == '/' and self._match('*'):
                open_comments.append((opener_line, opener_column))

            elif c == '*' and self._match('/'):
                open_comments.pop()

        for line, column in open_comments:
            self._error(line, column, "Unterminated block comment.")

    def _match(self, expected: str) -> bool:
        if self._is_at_end() or self._source[self._current] != expected:
            return False

        self._current += 1
        return True

    def _peek(self) -> str:
        if self._is_at_end():
            return '\0'

        return self._source[self._current]

    def _peek_next(self) -> str:
        if self._current + 1 >= len(self._source):
            return '\0'

        return self._source[self._current + 1]

    def _is_at_end(self) -> bool:
        return self._current >= len(self._source)

    def _advance(self) -> str:
        c = self._source[self._current]
        self._current += 1
        return c

    def _new_line(self) -> None:
        self._line += 1
        self._line_start = self._current

    def _column(self) -> int:
        return self._current - self._line_start + 1

    @staticmethod
    def _is_digit(c: str) -> bool:
        return '0' <= c <= '9'

    @staticmethod
    def _is_alpha(c: str) -> bool:
        return 'a' <= c <= 'z' or 'A' <= c <= 'Z' or c == '_'

    def _is_alpha_numeric(self, c: str) -> bool:
        return self._is_alpha(c) or self._is_digit(c)

    def _add_token(self, token_type: LoxTokenType, literal: Union[float, str, None] = None) -> None:
        text = self._source[self._start:self._current]
        self._tokens.append(LoxToken(token_type, text, literal, self._start_line, self._start_column))

    def _error(self, line: int, column: int, message: str) -> None:
        self._logger.debug("Lexical error at %d:%d: %s", line, column, message)
        self._errors.append(LoxScanError(line, column, message))
