"""Recursive-descent parser for Lox with per-statement error recovery."""

import logging
from dataclasses import dataclass, field
from typing import List

from lox.lox_ast import (
    LoxExpr, LoxStmt, LoxLiteralExpr, LoxGroupingExpr, LoxUnaryExpr, LoxBinaryExpr,
    LoxTernaryExpr, LoxVariableExpr, LoxAssignExpr, LoxExpressionStmt, LoxPrintStmt,
    LoxVarStmt, LoxBlockStmt
)
from lox.lox_error import LoxParseError
from lox.lox_token import LoxToken, LoxTokenType
from lox.lox_value import LOX_NIL, LoxBoolean, LoxNumber, LoxString


@dataclass
class LoxParseResult:
    """Statements parsed from a token sequence along with any syntax errors."""
    statements: List[LoxStmt] = field(default_factory=list)
    errors: List[LoxParseError] = field(default_factory=list)

    @property
    def had_error(self) -> bool:
        """Check if any syntax errors were found."""
        return len(self.errors) > 0


class LoxParser:
    """
    Parses tokens into a list of statements.

    Grammar, loosest binding first:

        program     := declaration* EOF
        declaration := "var" IDENTIFIER ("=" expression)? ";" | statement
        statement   := "print" expression ";" | "{" declaration* "}" | expression ";"
        expression  := assignment
        assignment  := IDENTIFIER "=" assignment | equality
        equality    := ternary (("!=" | "==") comparison)*
        ternary     := comparison ("?" expression ":" expression)?
        comparison  := term ((">" | ">=" | "<" | "<=") term)*
        term        := factor (("-" | "+") factor)*
        factor      := unary (("/" | "*") unary)*
        unary       := ("!" | "-") unary | primary
        primary     := NUMBER | STRING | "true" | "false" | "nil" | IDENTIFIER | "(" expression ")"

    A syntax error raised anywhere inside a declaration unwinds only to that
    declaration, which is dropped; the parser then skips to a plausible statement
    boundary and carries on, so one pass reports every malformed statement.

    Blocks and parenthesised or right-nested sub-expressions count towards
    max_nesting; left-associative operator chains are parsed in loops and never do.
    """

    # Tokens that start a new statement and end error synchronization
    _STATEMENT_STARTS = {
        LoxTokenType.CLASS, LoxTokenType.FUN, LoxTokenType.VAR, LoxTokenType.FOR,
        LoxTokenType.IF, LoxTokenType.WHILE, LoxTokenType.PRINT, LoxTokenType.RETURN
    }

    def __init__(self, tokens: List[LoxToken], max_nesting: int = 64):
        """
        Initialize parser with tokens.

        Args:
            tokens: Tokens to parse, terminated by an EOF token
            max_nesting: Maximum combined depth of nested blocks and sub-expressions
        """
        if not tokens or tokens[-1].type != LoxTokenType.EOF:
            raise ValueError("Token sequence must end with an EOF token")

        self._logger = logging.getLogger("LoxParser")
        self.tokens = tokens
        self.max_nesting = max_nesting
        self.current = 0
        self.errors: List[LoxParseError] = []
        self._nesting = 0

    def parse(self) -> LoxParseResult:
        """
        Parse all declarations up to the end of input.

        Returns:
            The well-formed statements in source order and every syntax error found
        """
        statements: List[LoxStmt] = []
        while not self._is_at_end():
            try:
                statement = self._declaration()

            except RecursionError:
                # The Python stack ran out before max_nesting was reached
                self._error(self._peek(), "Expression nesting too deep.")
                self._synchronize()
                continue

            if statement is not None:
                statements.append(statement)

        self._logger.debug("Parsed %d statements with %d errors", len(statements), len(self.errors))
        return LoxParseResult(statements, self.errors)

    # ---------- Statements ----------

    def _declaration(self) -> LoxStmt | None:
        try:
            if self._match(LoxTokenType.VAR):
                return self._var_declaration()

            return self._statement()

        except LoxParseError:
            self._synchronize()
            return None

    def _var_declaration(self) -> LoxStmt:
        name = self._consume(LoxTokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self._match(LoxTokenType.EQUAL):
            initializer = self._expression()

        self._consume(LoxTokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return LoxVarStmt(name, initializer)

    def _statement(self) -> LoxStmt:
        if self._match(LoxTokenType.PRINT):
            return self._print_statement()

        if self._match(LoxTokenType.LEFT_BRACE):
            self._enter_nesting("Block nesting too deep.")
            try:
                return LoxBlockStmt(tuple(self._block()))

            finally:
                self._nesting -= 1

        return self._expression_statement()

    def _print_statement(self) -> LoxStmt:
        value = self._expression()
        self._consume(LoxTokenType.SEMICOLON, "Expect ';' after value.")
        return LoxPrintStmt(value)

    def _expression_statement(self) -> LoxStmt:
        expr = self._expression()
        self._consume(LoxTokenType.SEMICOLON, "Expect ';' after expression.")
        return LoxExpressionStmt(expr)

    def _block(self) -> List[LoxStmt]:
        statements: List[LoxStmt] = []

        while not self._check(LoxTokenType.RIGHT_BRACE) and not self._is_at_end():
            statement = self._declaration()
            if statement is not None:
                statements.append(statement)

        self._consume(LoxTokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    # ---------- Expressions ----------

    def _expression(self) -> LoxExpr:
        return self._assignment()

    def _assignment(self) -> LoxExpr:
        self._enter_nesting("Expression nesting too deep.")
        try:
            expr = self._equality()

            if self._match(LoxTokenType.EQUAL):
                equals = self._previous()
                value = self._assignment()

                if isinstance(expr, LoxVariableExpr):
                    return LoxAssignExpr(expr.name, value)

                # Report but keep parsing; the statement is still well formed
                self._error(equals, "Invalid assignment target.")

            return expr

        finally:
            self._nesting -= 1

    def _equality(self) -> LoxExpr:
        expr = self._ternary()

        while self._match(LoxTokenType.BANG_EQUAL, LoxTokenType.EQUAL_EQUAL):
            operator = self._previous()
            right = self._comparison()
            expr = LoxBinaryExpr(expr, operator, right)

        return expr

    def _ternary(self) -> LoxExpr:
        expr = self._comparison()

        if self._match(LoxTokenType.QUESTION):
            then_branch = self._expression()
            self._consume(LoxTokenType.COLON, "Expect ':' after then branch of conditional expression.")
            else_branch = self._expression()
            return LoxTernaryExpr(expr, then_branch, else_branch)

        return expr

    def _comparison(self) -> LoxExpr:
        operators = (
            LoxTokenType.GREATER, LoxTokenType.GREATER_EQUAL, LoxTokenType.LESS, LoxTokenType.LESS_EQUAL
        )
        if self._match(*operators):
            operator = self._previous()
            self._term()
            raise self._error(operator, "Missing left operand.")

        expr = self._term()

        while self._match(*operators):
            operator = self._previous()
            right = self._term()
            expr = LoxBinaryExpr(expr, operator, right)

        return expr

    def _term(self) -> LoxExpr:
        # A leading '-' is unary negation, so only '+' can lack a left operand
        if self._match(LoxTokenType.PLUS):
            operator = self._previous()
            self._factor()
            raise self._error(operator, "Missing left operand.")

        expr = self._factor()

        while self._match(LoxTokenType.MINUS, LoxTokenType.PLUS):
            operator = self._previous()
            right = self._factor()
            expr = LoxBinaryExpr(expr, operator, right)

        return expr

    def _factor(self) -> LoxExpr:
        if self._match(LoxTokenType.SLASH, LoxTokenType.STAR):
            operator = self._previous()
            self._unary()
            raise self._error(operator, "Missing left operand.")

        expr = self._unary()

        while self._match(LoxTokenType.SLASH, LoxTokenType.STAR):
            operator = self._previous()
            right = self._unary()
            expr = LoxBinaryExpr(expr, operator, right)

        return expr

    def _unary(self) -> LoxExpr:
        if self._match(LoxTokenType.BANG, LoxTokenType.MINUS):
            operator = self._previous()
            right = self._unary()
            return LoxUnaryExpr(operator, right)

        return self._primary()

    def _primary(self) -> LoxExpr:
        if self._match(LoxTokenType.FALSE):
            return LoxLiteralExpr(LoxBoolean(False))

        if self._match(LoxTokenType.TRUE):
            return LoxLiteralExpr(LoxBoolean(True))

        if self._match(LoxTokenType.NIL):
            return LoxLiteralExpr(LOX_NIL)

        if self._match(LoxTokenType.NUMBER):
            literal = self._previous().literal
            assert isinstance(literal, float), "Number tokens must carry a float literal"
            return LoxLiteralExpr(LoxNumber(literal))

        if self._match(LoxTokenType.STRING):
            literal = self._previous().literal
            assert isinstance(literal, str), "String tokens must carry a str literal"
            return LoxLiteralExpr(LoxString(literal))

        if self._match(LoxTokenType.IDENTIFIER):
            return LoxVariableExpr(self._previous())

        if self._match(LoxTokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(LoxTokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return LoxGroupingExpr(expr)

        raise self._error(self._peek(), "Expect expression.")

    # ---------- Helpers ----------

    def _enter_nesting(self, message: str) -> None:
        self._nesting += 1
        if self._nesting > self.max_nesting:
            # Callers only decrement once entry has succeeded
            self._nesting -= 1
            raise self._error(self._peek(), message)

    def _match(self, *types: LoxTokenType) -> bool:
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True

        return False

    def _consume(self, token_type: LoxTokenType, message: str) -> LoxToken:
        if self._check(token_type):
            return self._advance()

        raise self._error(self._peek(), message)

    def _check(self, token_type: LoxTokenType) -> bool:
        if self._is_at_end():
            return False

        return self._peek().type == token_type

    def _advance(self) -> LoxToken:
        if not self._is_at_end():
            self.current += 1

        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type == LoxTokenType.EOF

    def _peek(self) -> LoxToken:
        return self.tokens[self.current]

    def _previous(self) -> LoxToken:
        return self.tokens[self.current - 1]

    def _error(self, token: LoxToken, message: str) -> LoxParseError:
        error = LoxParseError(token, message)
        self.errors.append(error)
        self._logger.debug("Syntax error at %d:%d: %s", token.line, token.column, message)
        return error

    def _synchronize(self) -> None:
        """Discard tokens until a statement boundary is plausible."""
        self._advance()

        while not self._is_at_end():
            if self._previous().type == LoxTokenType.SEMICOLON:
                return

            if self._peek().type in self._STATEMENT_STARTS:
                return

            self._advance()
