"""Tree-walking interpreter for Lox programs."""

import logging
import math
import sys
from typing import List, TextIO

from lox.lox_ast import (
    LoxExpr, LoxStmt, LoxExprVisitor, LoxStmtVisitor, LoxLiteralExpr, LoxGroupingExpr,
    LoxUnaryExpr, LoxBinaryExpr, LoxTernaryExpr, LoxVariableExpr, LoxAssignExpr,
    LoxExpressionStmt, LoxPrintStmt, LoxVarStmt, LoxBlockStmt
)
from lox.lox_environment import LoxEnvironment
from lox.lox_error import LoxOperandTypeError, LoxRuntimeError
from lox.lox_token import LoxToken, LoxTokenType
from lox.lox_value import LOX_NIL, LoxBoolean, LoxNil, LoxNumber, LoxString, LoxValue


class LoxInterpreter(LoxExprVisitor[LoxValue], LoxStmtVisitor[None]):
    """
    Executes Lox statements against a chain of environments.

    Evaluation stops at the first runtime error, which propagates to the caller as a
    LoxRuntimeError.  Output already written by earlier statements is not undone.
    """

    def __init__(self, output: TextIO | None = None, max_depth: int = 200):
        """
        Initialize interpreter.

        Args:
            output: Stream that print statements write to (defaults to sys.stdout)
            max_depth: Maximum nesting of operators and assignments during evaluation
        """
        self._logger = logging.getLogger("LoxInterpreter")
        self.output = output
        self.max_depth = max_depth
        self._environment = LoxEnvironment(name="global")
        self._depth = 0
        self._depth_token: LoxToken | None = None

    def interpret(self, statements: List[LoxStmt], environment: LoxEnvironment) -> None:
        """
        Execute statements in order.

        Args:
            statements: Statements to execute
            environment: Root environment the statements run against

        Raises:
            LoxRuntimeError: On the first runtime fault; later statements do not run
        """
        previous = self._environment
        self._environment = environment
        self._depth = 0
        self._depth_token = None
        try:
            for statement in statements:
                self._execute(statement)

        except RecursionError as e:
            # The Python stack ran out before max_depth was reached
            if self._depth_token is None:
                raise

            error = LoxRuntimeError(self._depth_token, "Expression too deeply nested.")
            self._logger.warning("Runtime error at %d:%d: %s", error.line, error.column, error.message)
            raise error from e

        except LoxRuntimeError as e:
            self._logger.warning("Runtime error at %d:%d: %s", e.token.line, e.token.column, e.message)
            raise

        finally:
            self._environment = previous

    # ---------- Statements ----------

    def visit_expression_stmt(self, stmt: LoxExpressionStmt) -> None:
        self._evaluate(stmt.expression)

    def visit_print_stmt(self, stmt: LoxPrintStmt) -> None:
        value = self._evaluate(stmt.expression)
        output = self.output if self.output is not None else sys.stdout
        output.write(self.stringify(value) + "\n")

    def visit_var_stmt(self, stmt: LoxVarStmt) -> None:
        value: LoxValue = LOX_NIL
        if stmt.initializer is not None:
            value = self._evaluate(stmt.initializer)

        self._environment.define(stmt.name.lexeme, value)

    def visit_block_stmt(self, stmt: LoxBlockStmt) -> None:
        self.execute_block(list(stmt.statements), LoxEnvironment(self._environment))

    def execute_block(self, statements: List[LoxStmt], environment: LoxEnvironment) -> None:
        """
        Execute statements in a given environment, restoring the current one afterwards.

        Args:
            statements: Statements to execute
            environment: Environment for the duration of the block
        """
        previous = self._environment
        try:
            self._environment = environment
            for statement in statements:
                self._execute(statement)

        finally:
            self._environment = previous

    # ---------- Expressions ----------

    def visit_literal_expr(self, expr: LoxLiteralExpr) -> LoxValue:
        return expr.value

    def visit_grouping_expr(self, expr: LoxGroupingExpr) -> LoxValue:
        return self._evaluate(expr.expression)

    def visit_unary_expr(self, expr: LoxUnaryExpr) -> LoxValue:
        self._enter_depth(expr.operator)
        try:
            right = self._evaluate(expr.right)

        finally:
            self._depth -= 1

        if expr.operator.type == LoxTokenType.BANG:
            return LoxBoolean(not self.is_truthy(right))

        assert expr.operator.type == LoxTokenType.MINUS, f"Unexpected unary operator: {expr.operator.lexeme}"
        operand = self._check_number_operand(expr.operator, right)
        return LoxNumber(-operand)

    def visit_binary_expr(self, expr: LoxBinaryExpr) -> LoxValue:
        # Fold a left-associative chain such as 1 + 2 + 3 in a loop, so its length
        # never grows the Python stack; only right operands recurse
        chain = [expr]
        while isinstance(chain[-1].left, LoxBinaryExpr):
            chain.append(chain[-1].left)

        self._enter_depth(expr.operator)
        try:
            value = self._evaluate(chain[-1].left)
            for node in reversed(chain):
                right = self._evaluate(node.right)
                value = self._apply_binary(node.operator, value, right)

            return value

        finally:
            self._depth -= 1

    def visit_ternary_expr(self, expr: LoxTernaryExpr) -> LoxValue:
        # Only the selected branch is evaluated
        if self.is_truthy(self._evaluate(expr.condition)):
            return self._evaluate(expr.then_branch)

        return self._evaluate(expr.else_branch)

    def visit_variable_expr(self, expr: LoxVariableExpr) -> LoxValue:
        return self._environment.get(expr.name)

    def visit_assign_expr(self, expr: LoxAssignExpr) -> LoxValue:
        self._enter_depth(expr.name)
        try:
            value = self._evaluate(expr.value)

        finally:
            self._depth -= 1

        self._environment.assign(expr.name, value)
        return value

    # ---------- Helpers ----------

    def _enter_depth(self, token: LoxToken) -> None:
        self._depth += 1
        self._depth_token = token
        if self._depth > self.max_depth:
            # Callers only decrement once entry has succeeded
            self._depth -= 1
            raise LoxRuntimeError(token, f"Expression too deeply nested (max depth: {self.max_depth}).")

    def _apply_binary(self, operator: LoxToken, left: LoxValue, right: LoxValue) -> LoxValue:
        op = operator.type

        if op == LoxTokenType.EQUAL_EQUAL:
            return LoxBoolean(self.is_equal(left, right))

        if op == LoxTokenType.BANG_EQUAL:
            return LoxBoolean(not self.is_equal(left, right))

        if op == LoxTokenType.PLUS:
            return self._add(operator, left, right)

        a, b = self._check_number_operands(operator, left, right)

        if op == LoxTokenType.GREATER:
            return LoxBoolean(a > b)

        if op == LoxTokenType.GREATER_EQUAL:
            return LoxBoolean(a >= b)

        if op == LoxTokenType.LESS:
            return LoxBoolean(a < b)

        if op == LoxTokenType.LESS_EQUAL:
            return LoxBoolean(a <= b)

        if op == LoxTokenType.MINUS:
            return LoxNumber(a - b)

        if op == LoxTokenType.STAR:
            return LoxNumber(a * b)

        assert op == LoxTokenType.SLASH, f"Unexpected binary operator: {operator.lexeme}"
        return LoxNumber(self._divide(a, b))

    def _add(self, operator: LoxToken, left: LoxValue, right: LoxValue) -> LoxValue:
        if isinstance(left, LoxNumber) and isinstance(right, LoxNumber):
            return LoxNumber(left.value + right.value)

        if isinstance(left, LoxString) and isinstance(right, LoxString):
            return LoxString(left.value + right.value)

        if isinstance(left, LoxString) and isinstance(right, LoxNumber):
            return LoxString(left.value + right.describe())

        if isinstance(left, LoxNumber) and isinstance(right, LoxString):
            return LoxString(left.describe() + right.value)

        raise LoxOperandTypeError(
            operator,
            "Operands must be two numbers or two strings.",
            received=f"{left.type_name()} and {right.type_name()}"
        )

    @staticmethod
    def _divide(a: float, b: float) -> float:
        """Divide with IEEE-754 results for a zero divisor."""
        if b != 0.0:
            return a / b

        if a == 0.0 or math.isnan(a):
            return math.nan

        return math.copysign(math.inf, a) * math.copysign(1.0, b)

    def _check_number_operand(self, operator: LoxToken, operand: LoxValue) -> float:
        if isinstance(operand, LoxNumber):
            return operand.value

        raise LoxOperandTypeError(
            operator, "Operand must be a number.", received=operand.type_name()
        )

    def _check_number_operands(self, operator: LoxToken, left: LoxValue, right: LoxValue) -> tuple[float, float]:
        if isinstance(left, LoxNumber) and isinstance(right, LoxNumber):
            return left.value, right.value

        raise LoxOperandTypeError(
            operator,
            "Operands must be numbers.",
            received=f"{left.type_name()} and {right.type_name()}"
        )

    @staticmethod
    def is_truthy(value: LoxValue) -> bool:
        """Only nil and false are falsy."""
        if isinstance(value, LoxNil):
            return False

        if isinstance(value, LoxBoolean):
            return value.value

        return True

    @staticmethod
    def is_equal(left: LoxValue, right: LoxValue) -> bool:
        """Value equality; values of different kinds are never equal."""
        return left == right

    @staticmethod
    def stringify(value: LoxValue) -> str:
        """Convert a value to its display text."""
        return value.describe()

    def _evaluate(self, expr: LoxExpr) -> LoxValue:
        return expr.accept(self)

    def _execute(self, stmt: LoxStmt) -> None:
        stmt.accept(self)
