"""Lox scripting language: scanner, parser and tree-walking interpreter."""

# Main API
from lox.lox import Lox, LoxRunResult
from lox.lox_config import LoxConfig

# Exceptions
from lox.lox_error import (
    LoxError, LoxScanError, LoxTokenError, LoxParseError, LoxRuntimeError,
    LoxOperandTypeError, LoxUndefinedVariableError
)

# Value types
from lox.lox_value import LoxValue, LoxNumber, LoxString, LoxBoolean, LoxNil, LOX_NIL

# Lower-level components (for advanced usage)
from lox.lox_token import LoxToken, LoxTokenType
from lox.lox_scanner import LoxScanner, LoxScanResult
from lox.lox_parser import LoxParser, LoxParseResult
from lox.lox_environment import LoxEnvironment
from lox.lox_interpreter import LoxInterpreter
from lox.lox_ast_printer import LoxASTPrinter


__version__ = "0.3.0"

__all__ = [
    # Main API
    "Lox", "LoxRunResult", "LoxConfig",

    # Exceptions
    "LoxError", "LoxScanError", "LoxTokenError", "LoxParseError", "LoxRuntimeError",
    "LoxOperandTypeError", "LoxUndefinedVariableError",

    # Value types
    "LoxValue", "LoxNumber", "LoxString", "LoxBoolean", "LoxNil", "LOX_NIL",

    # Lower-level components
    "LoxToken", "LoxTokenType", "LoxScanner", "LoxScanResult", "LoxParser", "LoxParseResult",
    "LoxEnvironment", "LoxInterpreter", "LoxASTPrinter"
]
