"""Lox Value hierarchy - immutable runtime value types for the language."""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any


class LoxValue(ABC):
    """
    Abstract base class for all Lox runtime values.

    All Lox values are immutable and carry no identity beyond their content.
    Values of different kinds never compare equal.
    """

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to Python value."""

    @abstractmethod
    def type_name(self) -> str:
        """Return Lox type name for error messages."""

    @abstractmethod
    def describe(self) -> str:
        """Return the display text used by print."""


@dataclass(frozen=True)
class LoxNil(LoxValue):
    """Represents the absence of a value (nil)."""

    def to_python(self) -> None:
        return None

    def type_name(self) -> str:
        return "nil"

    def describe(self) -> str:
        return "nil"


# Module-level singleton - there is only one nil value.
LOX_NIL = LoxNil()


@dataclass(frozen=True)
class LoxBoolean(LoxValue):
    """Represents boolean values."""
    value: bool

    def to_python(self) -> bool:
        return self.value

    def type_name(self) -> str:
        return "boolean"

    def describe(self) -> str:
        return "true" if self.value else "false"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, LoxBoolean):
            return False

        return self.value == other.value


@dataclass(frozen=True)
class LoxNumber(LoxValue):
    """Represents double-precision numeric values."""
    value: float

    def to_python(self) -> float:
        return self.value

    def type_name(self) -> str:
        return "number"

    def describe(self) -> str:
        if math.isnan(self.value):
            return "NaN"

        if math.isinf(self.value):
            return "Infinity" if self.value > 0 else "-Infinity"

        # Negative zero displays as 0
        if self.value == 0:
            return "0"

        # Shortest round-trip digits, laid out in plain notation for decimal
        # exponents from -6 up to 21 and in scientific notation beyond that
        sign = "-" if self.value < 0 else ""
        _, digit_tuple, exponent = Decimal(repr(abs(float(self.value)))).normalize().as_tuple()
        digits = "".join(str(d) for d in digit_tuple)
        assert isinstance(exponent, int), "Finite numbers must have an integer exponent"
        point = exponent + len(digits)

        if len(digits) <= point <= 21:
            return sign + digits + "0" * (point - len(digits))

        if 0 < point <= 21:
            return sign + digits[:point] + "." + digits[point:]

        if -6 < point <= 0:
            return sign + "0." + "0" * -point + digits

        mantissa = digits[0] if len(digits) == 1 else digits[0] + "." + digits[1:]
        power = point - 1
        return f"{sign}{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, LoxNumber):
            return False

        return self.value == other.value


@dataclass(frozen=True)
class LoxString(LoxValue):
    """Represents string values."""
    value: str

    def to_python(self) -> str:
        return self.value

    def type_name(self) -> str:
        return "string"

    def describe(self) -> str:
        return self.value

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, LoxString):
            return False

        return self.value == other.value
