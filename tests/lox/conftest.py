"""Shared fixtures and utilities for Lox tests."""

import io
from typing import List

import pytest

from lox import Lox, LoxConfig, LoxParser, LoxParseResult, LoxRunResult, LoxScanner


class OutputLox(Lox):
    """Lox session that captures print output in memory."""

    def __init__(self, config: LoxConfig | None = None) -> None:
        self.stream = io.StringIO()
        super().__init__(config, output=self.stream)

    def take_output(self) -> List[str]:
        """Return the lines printed so far and clear the buffer."""
        lines = self.stream.getvalue().splitlines()
        self.stream.seek(0)
        self.stream.truncate(0)
        return lines


@pytest.fixture
def lox():
    """Create a fresh Lox session with captured output for each test."""
    return OutputLox()


@pytest.fixture
def lox_custom():
    """Factory for Lox sessions with custom configuration."""
    def _create_lox(max_nesting: int = 64, max_depth: int = 200) -> OutputLox:
        return OutputLox(LoxConfig(max_nesting=max_nesting, max_depth=max_depth))
    return _create_lox


class LoxTestHelpers:
    """Helper utilities for Lox testing."""

    @staticmethod
    def parse(source: str) -> LoxParseResult:
        """Scan and parse source, asserting the scan itself was clean."""
        scan_result = LoxScanner().scan(source)
        assert not scan_result.errors, f"Unexpected scan errors: {scan_result.errors}"
        return LoxParser(scan_result.tokens).parse()

    @staticmethod
    def assert_prints(lox: OutputLox, source: str, expected: List[str]) -> LoxRunResult:
        """Assert that running source succeeds and prints the expected lines."""
        result = lox.run(source)
        assert not result.had_error, f"Unexpected errors: {[e.format_diagnostic() for e in result.errors]}"
        assert result.runtime_error is None, f"Unexpected runtime error: {result.runtime_error}"
        output = lox.take_output()
        assert output == expected, f"Expected output {expected!r}, got {output!r}"
        return result

    @staticmethod
    def evaluate(lox: OutputLox, expression: str) -> str:
        """Print a single expression and return its display text."""
        result = lox.run(f"print {expression};")
        assert not result.errors, f"Unexpected errors: {[e.format_diagnostic() for e in result.errors]}"
        output = lox.take_output()
        assert len(output) == 1
        return output[0]


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return LoxTestHelpers
