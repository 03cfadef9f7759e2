"""Lox AST generator tool."""
