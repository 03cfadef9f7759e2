"""Lox AST generator - writes AST node classes from a compact grammar description."""

import argparse
import sys
from pathlib import Path
from typing import List, Tuple


EXPR_TYPES = [
    "Literal  : value LoxValue",
    "Grouping : expression LoxExpr",
    "Unary    : operator LoxToken, right LoxExpr",
    "Binary   : left LoxExpr, operator LoxToken, right LoxExpr",
    "Ternary  : condition LoxExpr, then_branch LoxExpr, else_branch LoxExpr",
    "Variable : name LoxToken",
    "Assign   : name LoxToken, value LoxExpr",
]

STMT_TYPES = [
    "Expression : expression LoxExpr",
    "Print      : expression LoxExpr",
    "Var        : name LoxToken, initializer LoxExpr | None",
    "Block      : statements Tuple[LoxStmt, ...]",
]

HEADER = '''"""Lox AST node classes. Generated by tools/lox_generate_ast/generate_ast.py - do not edit."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Tuple, TypeVar

from lox.lox_token import LoxToken
from lox.lox_value import LoxValue


R = TypeVar("R")
'''


def parse_type(description: str) -> Tuple[str, List[Tuple[str, str]]]:
    """
    Split one node description into its class name and fields.

    Args:
        description: Text of the form "Name : field Type, field Type"

    Returns:
        The node name and a list of (field name, type) pairs

    Raises:
        ValueError: If the description is malformed
    """
    if ':' not in description:
        raise ValueError(f"Missing ':' in node description: {description!r}")

    name, field_text = description.split(':', 1)
    name = name.strip()
    if not name.isidentifier():
        raise ValueError(f"Invalid node name: {name!r}")

    fields = []
    for field in field_text.split(','):
        parts = field.strip().split(' ', 1)
        if len(parts) != 2 or not parts[0].isidentifier():
            raise ValueError(f"Invalid field {field.strip()!r} in node {name}")

        fields.append((parts[0], parts[1].strip()))

    return name, fields


def define_ast(base_name: str, types: List[str]) -> str:
    """
    Generate the visitor interface, base class and node classes for one node family.

    Args:
        base_name: Family name, e.g. "Expr" or "Stmt"
        types: Node descriptions

    Returns:
        Python source code for the family
    """
    base_class = f"Lox{base_name}"
    visitor_class = f"Lox{base_name}Visitor"
    suffix = base_name.lower()
    nodes = [parse_type(description) for description in types]

    lines = [
        "",
        "",
        f"class {visitor_class}(ABC, Generic[R]):",
        f'    """Visitor interface for {suffix} nodes."""',
    ]
    for name, _fields in nodes:
        lines += [
            "",
            "    @abstractmethod",
            f"    def visit_{name.lower()}_{suffix}(self, {suffix}: 'Lox{name}{base_name}') -> R:",
            f'        """Visit a {name} node."""',
        ]

    lines += [
        "",
        "",
        f"class {base_class}(ABC):",
        f'    """Abstract base class for all {suffix} nodes."""',
        "",
        "    @abstractmethod",
        f"    def accept(self, visitor: {visitor_class}[R]) -> R:",
        '        """Dispatch to the visitor method for this node type."""',
    ]

    for name, fields in nodes:
        lines += [
            "",
            "",
            "@dataclass(frozen=True)",
            f"class Lox{name}{base_name}({base_class}):",
        ]
        lines += [f"    {field_name}: {field_type}" for field_name, field_type in fields]
        lines += [
            "",
            f"    def accept(self, visitor: {visitor_class}[R]) -> R:",
            f"        return visitor.visit_{name.lower()}_{suffix}(self)",
        ]

    return "\n".join(lines) + "\n"


def generate_module() -> str:
    """Generate the complete AST module source."""
    return HEADER + define_ast("Expr", EXPR_TYPES) + define_ast("Stmt", STMT_TYPES)


def main(argv: List[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Generate Lox AST node classes")
    parser.add_argument('output_dir', nargs='*', help='Directory to write lox_ast_generated.py into')
    args = parser.parse_args(argv)

    if len(args.output_dir) != 1:
        print("Usage: generate_ast.py <output directory>", file=sys.stderr)
        return 64

    output_path = Path(args.output_dir[0]) / "lox_ast_generated.py"
    try:
        output_path.write_text(generate_module(), encoding='utf-8')

    except OSError as e:
        print(f"Error: cannot write {output_path}: {e}", file=sys.stderr)
        return 64

    print(f"Generated {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
