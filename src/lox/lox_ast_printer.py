"""
Visitor that renders Lox AST structures as prefix text for debugging.
"""
from typing import List

from lox.lox_ast import (
    LoxExpr, LoxStmt, LoxExprVisitor, LoxStmtVisitor, LoxLiteralExpr, LoxGroupingExpr,
    LoxUnaryExpr, LoxBinaryExpr, LoxTernaryExpr, LoxVariableExpr, LoxAssignExpr,
    LoxExpressionStmt, LoxPrintStmt, LoxVarStmt, LoxBlockStmt
)
from lox.lox_value import LoxString


class LoxASTPrinter(LoxExprVisitor[str], LoxStmtVisitor[str]):
    """Renders expressions and statements in parenthesized prefix form, e.g. (+ 1 (group 2))."""

    def print(self, node: LoxExpr | LoxStmt) -> str:
        """
        Render a single expression or statement.

        Args:
            node: The node to render

        Returns:
            Prefix-form text for the node
        """
        return node.accept(self)

    def print_program(self, statements: List[LoxStmt]) -> str:
        """Render a program, one statement per line."""
        return "\n".join(self.print(statement) for statement in statements)

    def visit_literal_expr(self, expr: LoxLiteralExpr) -> str:
        if isinstance(expr.value, LoxString):
            return f'"{expr.value.value}"'

        return expr.value.describe()

    def visit_grouping_expr(self, expr: LoxGroupingExpr) -> str:
        return self._parenthesize("group", expr.expression)

    def visit_unary_expr(self, expr: LoxUnaryExpr) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.right)

    def visit_binary_expr(self, expr: LoxBinaryExpr) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_ternary_expr(self, expr: LoxTernaryExpr) -> str:
        return self._parenthesize("?:", expr.condition, expr.then_branch, expr.else_branch)

    def visit_variable_expr(self, expr: LoxVariableExpr) -> str:
        return expr.name.lexeme

    def visit_assign_expr(self, expr: LoxAssignExpr) -> str:
        return f"(= {expr.name.lexeme} {expr.value.accept(self)})"

    def visit_expression_stmt(self, stmt: LoxExpressionStmt) -> str:
        return self._parenthesize(";", stmt.expression)

    def visit_print_stmt(self, stmt: LoxPrintStmt) -> str:
        return self._parenthesize("print", stmt.expression)

    def visit_var_stmt(self, stmt: LoxVarStmt) -> str:
        if stmt.initializer is None:
            return f"(var {stmt.name.lexeme})"

        return f"(var {stmt.name.lexeme} {stmt.initializer.accept(self)})"

    def visit_block_stmt(self, stmt: LoxBlockStmt) -> str:
        parts = ["block"] + [statement.accept(self) for statement in stmt.statements]
        return f"({' '.join(parts)})"

    def _parenthesize(self, name: str, *exprs: LoxExpr) -> str:
        parts = [name] + [expr.accept(self) for expr in exprs]
        return f"({' '.join(parts)})"
