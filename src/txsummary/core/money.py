#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper around decimal.Decimal.
Prevents floating-point drift and provides type-safe currency operations.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import format_dollars, format_fixed, parse_decimal_amount


@dataclass(frozen=True)
class Money:
    """
    Immutable exact money value.

    Supports both positive (credits/balances in the black) and negative
    (balances in the red) amounts. Transaction magnitudes are always
    non-negative; the sign of a transaction lives in its kind.

    Examples:
        >>> credit = Money.from_string("60.5")
        >>> debit = Money.from_string("10.3")
        >>> str(credit - debit)
        '$50.20'

        >>> Money.from_string("85.75") / 3 == Money(Decimal("85.75") / 3)
        True

        >>> Money.zero().is_zero()
        True
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise TypeError(f"Money requires a Decimal amount, got {type(self.amount).__name__}")
        if not self.amount.is_finite():
            raise ValueError(f"Money amount must be finite, got {self.amount}")

    @classmethod
    def zero(cls) -> "Money":
        """Exact zero."""
        return cls(amount=Decimal(0))

    @classmethod
    def from_string(cls, text: str) -> "Money":
        """
        Parse an unsigned decimal literal like "60.5".

        Raises:
            ValueError: If text is not a plain decimal literal
        """
        return cls(amount=parse_decimal_amount(text))

    @classmethod
    def from_decimal(cls, value: Decimal | int) -> "Money":
        """Wrap an existing Decimal (or int) without rounding."""
        return cls(amount=Decimal(value))

    def to_decimal(self) -> Decimal:
        """Get the underlying Decimal."""
        return self.amount

    def to_fixed(self, places: int = 2) -> str:
        """Get value rounded for display, e.g. "54.99"."""
        return format_fixed(self.amount, places)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(amount=abs(self.amount))

    def is_zero(self) -> bool:
        """Check for exact zero."""
        return self.amount == 0

    def sign(self) -> int:
        """Return -1, 0 or 1."""
        if self.amount > 0:
            return 1
        if self.amount < 0:
            return -1
        return 0

    def __neg__(self) -> "Money":
        """Negate."""
        return Money(amount=-self.amount)

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(amount=self.amount + other.amount)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(amount=self.amount - other.amount)

    def __truediv__(self, count: int) -> "Money":
        """
        Divide Money by a positive integer count.

        Raises:
            ZeroDivisionError: If count is zero
        """
        if count == 0:
            raise ZeroDivisionError("cannot divide Money by zero")
        return Money(amount=self.amount / Decimal(count))

    def __eq__(self, other: object) -> bool:
        """Check equality by value, so 60.5 == 60.50."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount == other.amount

    def __hash__(self) -> int:
        return hash(self.amount)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.amount <= other.amount

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.amount > other.amount

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.amount >= other.amount

    def __str__(self) -> str:
        """Format as dollar string."""
        return format_dollars(self.amount)

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(amount={self.amount!r})"
