"""Main Lox class tying the scanner, parser and interpreter together."""

import logging
from dataclasses import dataclass, field
from typing import List, TextIO

from lox.lox_config import LoxConfig
from lox.lox_environment import LoxEnvironment
from lox.lox_error import LoxError, LoxParseError, LoxRuntimeError, LoxScanError
from lox.lox_ast import LoxStmt
from lox.lox_interpreter import LoxInterpreter
from lox.lox_parser import LoxParser, LoxParseResult
from lox.lox_scanner import LoxScanner


@dataclass
class LoxRunResult:
    """
    Outcome of running one unit of source code.

    Scan and parse errors suppress evaluation, so a result never carries both
    front-end errors and a runtime error.
    """
    statements: List[LoxStmt] = field(default_factory=list)
    scan_errors: List[LoxScanError] = field(default_factory=list)
    parse_errors: List[LoxParseError] = field(default_factory=list)
    runtime_error: LoxRuntimeError | None = None

    @property
    def had_error(self) -> bool:
        """Check if scanning or parsing reported errors."""
        return bool(self.scan_errors or self.parse_errors)

    @property
    def had_runtime_error(self) -> bool:
        """Check if evaluation stopped on a runtime error."""
        return self.runtime_error is not None

    @property
    def errors(self) -> List[LoxError]:
        """All errors in the order they should be reported."""
        errors: List[LoxError] = [*self.scan_errors, *self.parse_errors]
        if self.runtime_error is not None:
            errors.append(self.runtime_error)

        return errors


class Lox:
    """
    Lox session: runs units of source code against one persistent global scope.

    Every call to run starts with fresh error state, so an error in one unit (for
    example one line typed at the interactive prompt) never affects the next.  Only
    global variable bindings carry over between runs.
    """

    def __init__(self, config: LoxConfig | None = None, output: TextIO | None = None):
        """
        Initialize a Lox session.

        Args:
            config: Limits to apply (defaults to LoxConfig())
            output: Stream that print statements write to (defaults to sys.stdout)
        """
        self.config = config if config is not None else LoxConfig()
        self._logger = logging.getLogger("Lox")
        self.globals = LoxEnvironment(name="global")
        self.interpreter = LoxInterpreter(output=output, max_depth=self.config.max_depth)

    def parse(self, source: str) -> tuple[List[LoxScanError], LoxParseResult]:
        """
        Scan and parse source code without executing it.

        Args:
            source: Source code

        Returns:
            The lexical errors and the parse result over the usable tokens
        """
        scan_result = LoxScanner().scan(source)
        parse_result = LoxParser(scan_result.tokens, max_nesting=self.config.max_nesting).parse()
        return scan_result.errors, parse_result

    def run(self, source: str) -> LoxRunResult:
        """
        Scan, parse and, if both succeed, execute source code.

        Args:
            source: Source code

        Returns:
            The parsed statements and every error reported
        """
        scan_errors, parse_result = self.parse(source)
        result = LoxRunResult(
            statements=parse_result.statements,
            scan_errors=scan_errors,
            parse_errors=parse_result.errors
        )

        if result.had_error:
            self._logger.debug(
                "Skipping evaluation: %d scan errors, %d parse errors", len(scan_errors), len(parse_result.errors)
            )
            return result

        try:
            self.interpreter.interpret(parse_result.statements, self.globals)

        except LoxRuntimeError as e:
            result.runtime_error = e

        return result
