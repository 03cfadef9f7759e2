"""Command-line entry point for the Lox interpreter.

Usage:
    python -m lox [options]            start an interactive prompt
    python -m lox [options] <script>   run a script file

Exit codes follow the sysexits conventions: 64 for usage errors, 65 for scan or
parse errors, 66 for an unreadable script, 70 for a runtime error.
"""

import argparse
import logging
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path
from typing import List, NoReturn, TextIO

from lox.lox import Lox, LoxRunResult
from lox.lox_ast_printer import LoxASTPrinter
from lox.lox_config import LoxConfig


EXIT_OK = 0
EXIT_USAGE = 64
EXIT_DATA_ERROR = 65
EXIT_NO_INPUT = 66
EXIT_SOFTWARE = 70


class LoxArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with the sysexits usage code."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def setup_logging(log_file: str | None, level: str) -> None:
    """
    Configure logging with a rotating file handler.

    Without a log file, records are discarded so diagnostics on stderr are never
    mixed with log output.

    Args:
        log_file: Path of the log file, or None to discard log records
        level: Logging level name
    """
    if log_file is None:
        # Stops the last-resort handler echoing warnings to stderr
        logging.basicConfig(handlers=[logging.NullHandler()])
        return

    # Keep up to 6 log files, max 1MB each
    handler = RotatingFileHandler(
        log_file,
        maxBytes=1024*1024,
        backupCount=5,
        encoding='utf-8'
    )

    logging.basicConfig(
        level=getattr(logging, level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler]
    )


def report(result: LoxRunResult, stream: TextIO) -> None:
    """Write one diagnostic line per error."""
    for error in result.errors:
        print(error.format_diagnostic(), file=stream)


def run_file(lox: Lox, path: str, print_ast: bool = False) -> int:
    """
    Run a script file once.

    Args:
        lox: Session to run the script in
        path: Path of the script
        print_ast: Print the parsed statements instead of executing them

    Returns:
        Process exit code
    """
    try:
        source = Path(path).read_text(encoding='utf-8')

    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {path}: {e}", file=sys.stderr)
        return EXIT_NO_INPUT

    if print_ast:
        scan_errors, parse_result = lox.parse(source)
        result = LoxRunResult(
            statements=parse_result.statements, scan_errors=scan_errors, parse_errors=parse_result.errors
        )
        report(result, sys.stderr)
        if result.had_error:
            return EXIT_DATA_ERROR

        printed = LoxASTPrinter().print_program(parse_result.statements)
        if printed:
            print(printed)

        return EXIT_OK

    result = lox.run(source)
    report(result, sys.stderr)

    if result.had_error:
        return EXIT_DATA_ERROR

    if result.had_runtime_error:
        return EXIT_SOFTWARE

    return EXIT_OK


def run_prompt(lox: Lox) -> int:
    """
    Read and run one line at a time until end of input.

    Errors are reported and the prompt carries on; each line starts with clean
    error state but sees the globals defined by earlier lines.

    Returns:
        Process exit code
    """
    while True:
        try:
            line = input(lox.config.prompt)

        except EOFError:
            print()
            return EXIT_OK

        except KeyboardInterrupt:
            print()
            return EXIT_OK

        result = lox.run(line)
        report(result, sys.stderr)


def main(argv: List[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = LoxArgumentParser(prog="lox", description="Lox language interpreter")
    parser.add_argument('script', nargs='*', help='script file to run (omit for an interactive prompt)')
    parser.add_argument('--config', '-c', help='YAML configuration file')
    parser.add_argument('--print-ast', action='store_true', help='print the parsed AST instead of executing')
    parser.add_argument('--log-file', help='write log records to this file')
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='logging level (default: WARNING)'
    )
    args = parser.parse_args(argv)

    if len(args.script) > 1:
        print("Usage: lox [script]", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(args.log_file, args.log_level)

    try:
        config = LoxConfig.load_from_file(args.config) if args.config else LoxConfig()

    except (OSError, ValueError, TypeError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    lox = Lox(config)

    if args.script:
        return run_file(lox, args.script[0], print_ast=args.print_ast)

    return run_prompt(lox)


if __name__ == '__main__':
    sys.exit(main())
