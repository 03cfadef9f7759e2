"""Environment management for Lox variable scoping."""

from typing import Dict, List

from lox.lox_error import LoxUndefinedVariableError, suggest_similar_names
from lox.lox_token import LoxToken
from lox.lox_value import LoxValue


class LoxEnvironment:
    """
    Mutable scope frame for variable bindings with lexical scoping.

    Each environment holds a reference to its enclosing environment (None for the
    global scope).  Declarations always go into this frame; lookups and assignments
    walk outward through the enclosing chain.
    """

    def __init__(self, enclosing: 'LoxEnvironment | None' = None, name: str = "block"):
        """
        Initialize an environment.

        Args:
            enclosing: Enclosing scope, or None for the global scope
            name: Descriptive name used in debugging output
        """
        self.values: Dict[str, LoxValue] = {}
        self.enclosing = enclosing
        self.name = name

    def define(self, name: str, value: LoxValue) -> None:
        """
        Define a variable in this scope, replacing any existing binding here.

        Args:
            name: Variable name
            value: Variable value
        """
        self.values[name] = value

    def get(self, name: LoxToken) -> LoxValue:
        """
        Look up a variable in this environment or enclosing environments.

        Args:
            name: Identifier token naming the variable

        Returns:
            Variable value

        Raises:
            LoxUndefinedVariableError: If no enclosing scope defines the variable
        """
        environment: LoxEnvironment | None = self
        while environment is not None:
            if name.lexeme in environment.values:
                return environment.values[name.lexeme]

            environment = environment.enclosing

        raise self._undefined(name)

    def assign(self, name: LoxToken, value: LoxValue) -> None:
        """
        Update a variable in the nearest scope that already defines it.

        Assignment never declares a new variable.

        Args:
            name: Identifier token naming the variable
            value: New value

        Raises:
            LoxUndefinedVariableError: If no enclosing scope defines the variable
        """
        environment: LoxEnvironment | None = self
        while environment is not None:
            if name.lexeme in environment.values:
                environment.values[name.lexeme] = value
                return

            environment = environment.enclosing

        raise self._undefined(name)

    def is_defined(self, name: str) -> bool:
        """Check if a variable is defined in this environment or enclosing environments."""
        if name in self.values:
            return True

        if self.enclosing is not None:
            return self.enclosing.is_defined(name)

        return False

    def get_available_bindings(self) -> List[str]:
        """Get all available binding names in this environment chain."""
        available = list(self.values.keys())

        if self.enclosing is not None:
            available.extend(self.enclosing.get_available_bindings())

        return available

    def _undefined(self, name: LoxToken) -> LoxUndefinedVariableError:
        suggestion = None
        similar = suggest_similar_names(name.lexeme, sorted(set(self.get_available_bindings())))
        if similar:
            suggestion = "Did you mean " + " or ".join(f"'{s}'" for s in similar) + "?"

        return LoxUndefinedVariableError(name, f"Undefined variable '{name.lexeme}'.", suggestion=suggestion)

    def __repr__(self) -> str:
        """String representation for debugging."""
        local_bindings = list(self.values.keys())
        enclosing_info = f" (enclosing: {self.enclosing.name})" if self.enclosing else ""
        return f"LoxEnvironment({self.name}: {local_bindings}{enclosing_info})"
