"""Tests for the Lox scanner."""

import pytest

from lox import LoxScanner, LoxScanError, LoxToken, LoxTokenType


def token_types(source: str) -> list:
    """Scan source and return the token types."""
    return [token.type for token in LoxScanner().scan(source).tokens]


class TestScannerTokens:
    """Test token production for valid input."""

    def test_empty_source_yields_only_eof(self):
        """Test that empty input still produces exactly one EOF token."""
        result = LoxScanner().scan("")
        assert result.tokens == [LoxToken(LoxTokenType.EOF, "", None, 1, 1)]
        assert result.errors == []
        assert not result.had_error

    def test_single_character_tokens(self):
        """Test every single-character punctuation token."""
        assert token_types("(){},.-+;*?:/") == [
            LoxTokenType.LEFT_PAREN, LoxTokenType.RIGHT_PAREN,
            LoxTokenType.LEFT_BRACE, LoxTokenType.RIGHT_BRACE,
            LoxTokenType.COMMA, LoxTokenType.DOT, LoxTokenType.MINUS, LoxTokenType.PLUS,
            LoxTokenType.SEMICOLON, LoxTokenType.STAR, LoxTokenType.QUESTION, LoxTokenType.COLON,
            LoxTokenType.SLASH, LoxTokenType.EOF,
        ]

    def test_maximal_munch_for_two_character_operators(self):
        """Test that two-character operators win over their one-character prefixes."""
        assert token_types("!= == <= >= ! = < >") == [
            LoxTokenType.BANG_EQUAL, LoxTokenType.EQUAL_EQUAL,
            LoxTokenType.LESS_EQUAL, LoxTokenType.GREATER_EQUAL,
            LoxTokenType.BANG, LoxTokenType.EQUAL, LoxTokenType.LESS, LoxTokenType.GREATER,
            LoxTokenType.EOF,
        ]

    def test_adjacent_operators(self):
        """Test that '===' scans as '==' followed by '='."""
        assert token_types("===") == [LoxTokenType.EQUAL_EQUAL, LoxTokenType.EQUAL, LoxTokenType.EOF]

    def test_numbers(self):
        """Test integer and fractional number literals."""
        tokens = LoxScanner().scan("42 3.14 0.5").tokens
        assert [t.type for t in tokens[:3]] == [LoxTokenType.NUMBER] * 3
        assert [t.literal for t in tokens[:3]] == [42.0, 3.14, 0.5]
        assert [t.lexeme for t in tokens[:3]] == ["42", "3.14", "0.5"]
        assert all(isinstance(t.literal, float) for t in tokens[:3])

    def test_trailing_dot_is_not_part_of_number(self):
        """Test that a dot without following digits is a separate token."""
        tokens = LoxScanner().scan("123.").tokens
        assert [t.type for t in tokens] == [LoxTokenType.NUMBER, LoxTokenType.DOT, LoxTokenType.EOF]
        assert tokens[0].literal == 123.0

    def test_leading_dot_is_not_part_of_number(self):
        """Test that '.5' scans as a dot followed by a number."""
        assert token_types(".5") == [LoxTokenType.DOT, LoxTokenType.NUMBER, LoxTokenType.EOF]

    def test_strings(self):
        """Test string literals keep their contents without the quotes."""
        tokens = LoxScanner().scan('"hello" ""').tokens
        assert tokens[0].type == LoxTokenType.STRING
        assert tokens[0].literal == "hello"
        assert tokens[0].lexeme == '"hello"'
        assert tokens[1].literal == ""

    def test_multiline_string(self):
        """Test that strings may span lines and advance the line count."""
        tokens = LoxScanner().scan('"a\nb" x').tokens
        assert tokens[0].literal == "a\nb"
        assert tokens[0].line == 1
        assert tokens[1].lexeme == "x"
        assert tokens[1].line == 2

    def test_identifiers(self):
        """Test C-style identifiers."""
        tokens = LoxScanner().scan("foo _bar baz9 a_b_c").tokens
        assert [t.type for t in tokens[:4]] == [LoxTokenType.IDENTIFIER] * 4
        assert [t.lexeme for t in tokens[:4]] == ["foo", "_bar", "baz9", "a_b_c"]

    @pytest.mark.parametrize("word,token_type", [
        ("and", LoxTokenType.AND), ("class", LoxTokenType.CLASS), ("else", LoxTokenType.ELSE),
        ("false", LoxTokenType.FALSE), ("fun", LoxTokenType.FUN), ("for", LoxTokenType.FOR),
        ("if", LoxTokenType.IF), ("nil", LoxTokenType.NIL), ("or", LoxTokenType.OR),
        ("print", LoxTokenType.PRINT), ("return", LoxTokenType.RETURN), ("super", LoxTokenType.SUPER),
        ("this", LoxTokenType.THIS), ("true", LoxTokenType.TRUE), ("var", LoxTokenType.VAR),
        ("while", LoxTokenType.WHILE),
    ])
    def test_reserved_words(self, word, token_type):
        """Test that reserved words get their own token types."""
        assert token_types(word) == [token_type, LoxTokenType.EOF]

    def test_keyword_prefix_is_identifier(self):
        """Test that identifiers merely starting with a keyword stay identifiers."""
        assert token_types("variable orchid") == [
            LoxTokenType.IDENTIFIER, LoxTokenType.IDENTIFIER, LoxTokenType.EOF
        ]

    def test_line_and_column_positions(self):
        """Test that tokens record the position of their first character."""
        tokens = LoxScanner().scan("var a = 1;\n  print a;").tokens
        positions = [(t.lexeme, t.line, t.column) for t in tokens]
        assert positions == [
            ("var", 1, 1), ("a", 1, 5), ("=", 1, 7), ("1", 1, 9), (";", 1, 10),
            ("print", 2, 3), ("a", 2, 9), (";", 2, 10), ("", 2, 11),
        ]

    def test_exactly_one_eof(self):
        """Test that the EOF token appears once, at the end."""
        tokens = LoxScanner().scan("print 1; // done").tokens
        eof_tokens = [t for t in tokens if t.type == LoxTokenType.EOF]
        assert len(eof_tokens) == 1
        assert tokens[-1].type == LoxTokenType.EOF

    def test_scanner_is_reusable(self):
        """Test that a scanner instance starts fresh on every scan."""
        scanner = LoxScanner()
        scanner.scan("@ 1")
        result = scanner.scan("2")
        assert result.errors == []
        assert [t.type for t in result.tokens] == [LoxTokenType.NUMBER, LoxTokenType.EOF]


class TestScannerComments:
    """Test comment handling."""

    def test_line_comment_is_discarded(self):
        """Test that '//' comments run to the end of the line."""
        assert token_types("1 // comment + 2\n3") == [
            LoxTokenType.NUMBER, LoxTokenType.NUMBER, LoxTokenType.EOF
        ]

    def test_block_comment_is_discarded(self):
        """Test that block comments are skipped, including across lines."""
        tokens = LoxScanner().scan("1 /* two\nlines */ 2").tokens
        assert [t.type for t in tokens] == [LoxTokenType.NUMBER, LoxTokenType.NUMBER, LoxTokenType.EOF]
        assert tokens[1].line == 2

    def test_nested_block_comments(self):
        """Test that nested block comments must all be closed."""
        result = LoxScanner().scan("/* outer /* inner */ still comment */ 7")
        assert result.errors == []
        assert [t.literal for t in result.tokens] == [7.0, None]

    def test_unterminated_nested_block_comment_reports_outer_opening(self):
        """Test that one still-open comment yields one error at its opening line."""
        result = LoxScanner().scan("\n/* a /* b */")
        assert len(result.errors) == 1
        assert result.errors[0].message == "Unterminated block comment."
        assert result.errors[0].line == 2
        assert result.errors[0].column == 1

    def test_every_open_block_comment_is_reported(self):
        """Test that each unclosed opener is reported at its own line."""
        result = LoxScanner().scan("/* one\n/* two\n")
        assert [(e.line, e.message) for e in result.errors] == [
            (1, "Unterminated block comment."),
            (2, "Unterminated block comment."),
        ]


class TestScannerErrors:
    """Test lexical error collection."""

    def test_unexpected_character(self):
        """Test that unknown characters are reported and skipped."""
        result = LoxScanner().scan("1 @ 2")
        assert result.had_error
        assert len(result.errors) == 1
        error = result.errors[0]
        assert isinstance(error, LoxScanError)
        assert error.message == "Unexpected character: @"
        assert (error.line, error.column) == (1, 3)
        assert [t.type for t in result.tokens] == [LoxTokenType.NUMBER, LoxTokenType.NUMBER, LoxTokenType.EOF]

    def test_errors_accumulate(self):
        """Test that scanning continues after errors and collects all of them."""
        result = LoxScanner().scan("#\n$ ok")
        assert [(e.line, e.message) for e in result.errors] == [
            (1, "Unexpected character: #"),
            (2, "Unexpected character: $"),
        ]
        assert result.tokens[0].lexeme == "ok"

    def test_non_ascii_letters_are_unexpected(self):
        """Test that identifiers are limited to ASCII letters."""
        result = LoxScanner().scan("é")
        assert [e.message for e in result.errors] == ["Unexpected character: é"]

    def test_unterminated_string(self):
        """Test that an unterminated string is reported where scanning stopped and dropped."""
        result = LoxScanner().scan('print "abc\ndef')
        assert len(result.errors) == 1
        assert result.errors[0].message == "Unterminated string."
        assert result.errors[0].line == 2
        assert [t.type for t in result.tokens] == [LoxTokenType.PRINT, LoxTokenType.EOF]

    def test_diagnostic_format(self):
        """Test the one-line diagnostic for lexical errors."""
        result = LoxScanner().scan("  @")
        assert result.errors[0].format_diagnostic() == "[1:3] Error: Unexpected character: @"
