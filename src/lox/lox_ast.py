"""
Lox AST node hierarchy.

Expressions and statements are closed sets of immutable node types.  Each node
exposes ``accept`` for double dispatch: a consumer implements one of the visitor
interfaces below, and the abstract methods force it to handle every node type.
Nodes own their children exclusively, so a program is always a tree.

Tokens are kept on the nodes that need a source location for error reporting
(operators and variable names).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Tuple, TypeVar

from lox.lox_token import LoxToken
from lox.lox_value import LoxValue


R = TypeVar("R")


class LoxExprVisitor(ABC, Generic[R]):
    """Visitor interface for expression nodes."""

    @abstractmethod
    def visit_literal_expr(self, expr: 'LoxLiteralExpr') -> R:
        """Visit a literal expression."""

    @abstractmethod
    def visit_grouping_expr(self, expr: 'LoxGroupingExpr') -> R:
        """Visit a parenthesized expression."""

    @abstractmethod
    def visit_unary_expr(self, expr: 'LoxUnaryExpr') -> R:
        """Visit a prefix operator expression."""

    @abstractmethod
    def visit_binary_expr(self, expr: 'LoxBinaryExpr') -> R:
        """Visit an infix operator expression."""

    @abstractmethod
    def visit_ternary_expr(self, expr: 'LoxTernaryExpr') -> R:
        """Visit a conditional expression."""

    @abstractmethod
    def visit_variable_expr(self, expr: 'LoxVariableExpr') -> R:
        """Visit a variable reference."""

    @abstractmethod
    def visit_assign_expr(self, expr: 'LoxAssignExpr') -> R:
        """Visit an assignment."""


class LoxStmtVisitor(ABC, Generic[R]):
    """Visitor interface for statement nodes."""

    @abstractmethod
    def visit_expression_stmt(self, stmt: 'LoxExpressionStmt') -> R:
        """Visit an expression statement."""

    @abstractmethod
    def visit_print_stmt(self, stmt: 'LoxPrintStmt') -> R:
        """Visit a print statement."""

    @abstractmethod
    def visit_var_stmt(self, stmt: 'LoxVarStmt') -> R:
        """Visit a variable declaration."""

    @abstractmethod
    def visit_block_stmt(self, stmt: 'LoxBlockStmt') -> R:
        """Visit a block."""


class LoxExpr(ABC):
    """Abstract base class for all expression nodes."""

    @abstractmethod
    def accept(self, visitor: LoxExprVisitor[R]) -> R:
        """Dispatch to the visitor method for this node type."""


class LoxStmt(ABC):
    """Abstract base class for all statement nodes."""

    @abstractmethod
    def accept(self, visitor: LoxStmtVisitor[R]) -> R:
        """Dispatch to the visitor method for this node type."""


@dataclass(frozen=True)
class LoxLiteralExpr(LoxExpr):
    """A literal value embedded in the source."""
    value: LoxValue

    def accept(self, visitor: LoxExprVisitor[R]) -> R:
        return visitor.visit_literal_expr(self)


@dataclass(frozen=True)
class LoxGroupingExpr(LoxExpr):
    """A parenthesized expression."""
    expression: LoxExpr

    def accept(self, visitor: LoxExprVisitor[R]) -> R:
        return visitor.visit_grouping_expr(self)


@dataclass(frozen=True)
class LoxUnaryExpr(LoxExpr):
    """A prefix operator applied to one operand."""
    operator: LoxToken
    right: LoxExpr

    def accept(self, visitor: LoxExprVisitor[R]) -> R:
        return visitor.visit_unary_expr(self)


@dataclass(frozen=True)
class LoxBinaryExpr(LoxExpr):
    """An infix operator applied to two operands."""
    left: LoxExpr
    operator: LoxToken
    right: LoxExpr

    def accept(self, visitor: LoxExprVisitor[R]) -> R:
        return visitor.visit_binary_expr(self)


@dataclass(frozen=True)
class LoxTernaryExpr(LoxExpr):
    """A conditional expression: condition ? then_branch : else_branch."""
    condition: LoxExpr
    then_branch: LoxExpr
    else_branch: LoxExpr

    def accept(self, visitor: LoxExprVisitor[R]) -> R:
        return visitor.visit_ternary_expr(self)


@dataclass(frozen=True)
class LoxVariableExpr(LoxExpr):
    """A reference to a variable."""
    name: LoxToken

    def accept(self, visitor: LoxExprVisitor[R]) -> R:
        return visitor.visit_variable_expr(self)


@dataclass(frozen=True)
class LoxAssignExpr(LoxExpr):
    """Assignment of a new value to an existing variable."""
    name: LoxToken
    value: LoxExpr

    def accept(self, visitor: LoxExprVisitor[R]) -> R:
        return visitor.visit_assign_expr(self)


@dataclass(frozen=True)
class LoxExpressionStmt(LoxStmt):
    """An expression evaluated for its side effects."""
    expression: LoxExpr

    def accept(self, visitor: LoxStmtVisitor[R]) -> R:
        return visitor.visit_expression_stmt(self)


@dataclass(frozen=True)
class LoxPrintStmt(LoxStmt):
    """Print the display text of an expression."""
    expression: LoxExpr

    def accept(self, visitor: LoxStmtVisitor[R]) -> R:
        return visitor.visit_print_stmt(self)


@dataclass(frozen=True)
class LoxVarStmt(LoxStmt):
    """Declare a variable in the current scope."""
    name: LoxToken
    initializer: LoxExpr | None = None

    def accept(self, visitor: LoxStmtVisitor[R]) -> R:
        return visitor.visit_var_stmt(self)


@dataclass(frozen=True)
class LoxBlockStmt(LoxStmt):
    """A braced sequence of statements with its own scope."""
    statements: Tuple[LoxStmt, ...] = ()

    def accept(self, visitor: LoxStmtVisitor[R]) -> R:
        return visitor.visit_block_stmt(self)
