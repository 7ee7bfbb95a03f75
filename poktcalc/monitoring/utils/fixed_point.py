"""
Fixed-point decimal arithmetic compatible with the Pocket ledger's Dec type.

Values are held as Python ints scaled by 10^18. Multiplication and division
truncate toward zero at 18 decimal places, so results are reproducible
regardless of platform float behaviour. Plain ints are used for integer
quantities (relay counts, uPOKT amounts, block counts).
"""

import re
from decimal import Decimal, ROUND_DOWN, localcontext
from functools import total_ordering
from typing import Union

PRECISION = 18
SCALE = 10 ** PRECISION

# Working precision for fractional powers before truncating back to 18 places
_POW_CONTEXT_PRECISION = 80

_DEC_PATTERN = re.compile(r"^(-)?(\d*)(?:\.(\d+))?$")


def _quo_truncate(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    if denominator == 0:
        raise ZeroDivisionError("division by zero")
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def parse_int(value: str) -> int:
    """Parse a base-10 integer string exactly as the ledger encodes it."""
    if not isinstance(value, str):
        raise ValueError(f"expected string, got {type(value).__name__}")
    text = value.strip()
    if not re.fullmatch(r"-?\d+", text):
        raise ValueError(f"invalid integer string: {value!r}")
    return int(text)


@total_ordering
class Dec:
    """Signed decimal with 18 fractional digits."""

    __slots__ = ("_scaled",)

    def __init__(self, scaled: int = 0):
        self._scaled = int(scaled)

    @classmethod
    def zero(cls) -> "Dec":
        return cls(0)

    @classmethod
    def one(cls) -> "Dec":
        return cls(SCALE)

    @classmethod
    def from_int(cls, value: int) -> "Dec":
        return cls(int(value) * SCALE)

    @classmethod
    def from_str(cls, value: str) -> "Dec":
        """
        Parse a decimal string such as "0.85" or "2".

        Raises:
            ValueError: If the string is empty, malformed or carries more
                than 18 fractional digits.
        """
        if not isinstance(value, str):
            raise ValueError(f"expected string, got {type(value).__name__}")
        match = _DEC_PATTERN.match(value.strip())
        if not match or not (match.group(2) or match.group(3)):
            raise ValueError(f"invalid decimal string: {value!r}")
        sign, whole, frac = match.group(1), match.group(2) or "0", match.group(3) or ""
        if len(frac) > PRECISION:
            raise ValueError(f"too much precision in {value!r}, max {PRECISION} digits")
        scaled = int(whole) * SCALE + int(frac.ljust(PRECISION, "0") or "0")
        return cls(-scaled if sign else scaled)

    @classmethod
    def from_decimal(cls, value: Decimal) -> "Dec":
        """Convert a Decimal, truncating past 18 places."""
        with localcontext() as ctx:
            ctx.prec = _POW_CONTEXT_PRECISION
            scaled = (value * SCALE).to_integral_value(rounding=ROUND_DOWN)
        return cls(int(scaled))

    @property
    def scaled(self) -> int:
        return self._scaled

    def is_zero(self) -> bool:
        return self._scaled == 0

    def is_negative(self) -> bool:
        return self._scaled < 0

    def truncate_int(self) -> int:
        """Drop the fractional part, rounding toward zero."""
        return _quo_truncate(self._scaled, SCALE)

    def to_decimal(self) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = _POW_CONTEXT_PRECISION
            return Decimal(self._scaled) / Decimal(SCALE)

    # arithmetic

    def add(self, other: "Dec") -> "Dec":
        return Dec(self._scaled + _coerce(other)._scaled)

    def sub(self, other: "Dec") -> "Dec":
        return Dec(self._scaled - _coerce(other)._scaled)

    def mul(self, other: "Dec") -> "Dec":
        return Dec(_quo_truncate(self._scaled * _coerce(other)._scaled, SCALE))

    def mul_int(self, other: int) -> "Dec":
        return Dec(self._scaled * int(other))

    def quo(self, other: "Dec") -> "Dec":
        divisor = _coerce(other)._scaled
        if divisor == 0:
            raise ZeroDivisionError("Dec division by zero")
        return Dec(_quo_truncate(self._scaled * SCALE, divisor))

    def quo_int(self, other: int) -> "Dec":
        return Dec(_quo_truncate(self._scaled, int(other)))

    def frac_pow(self, exponent: "Dec", denominator: int) -> "Dec":
        """
        Raise to a fractional power expressed as a numerator over a fixed
        denominator.

        The numerator is ``exponent * denominator`` truncated to an integer,
        so with a denominator of 100 an exponent of 0.7 computes
        ``self ** (70 / 100)``.
        """
        if denominator <= 0:
            raise ValueError("frac_pow denominator must be positive")
        numerator = exponent.mul_int(denominator).truncate_int()
        if numerator == 0:
            return Dec.one()
        if self.is_zero():
            return Dec.zero()
        if self.is_negative():
            raise ValueError("frac_pow of a negative base is undefined")
        with localcontext() as ctx:
            ctx.prec = _POW_CONTEXT_PRECISION
            base = Decimal(self._scaled) / Decimal(SCALE)
            result = base ** (Decimal(numerator) / Decimal(denominator))
            return Dec.from_decimal(result)

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return _coerce(other).add(self)

    def __sub__(self, other):
        return self.sub(other)

    def __rsub__(self, other):
        return _coerce(other).sub(self)

    def __mul__(self, other):
        if isinstance(other, int) and not isinstance(other, bool):
            return self.mul_int(other)
        return self.mul(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        if isinstance(other, int) and not isinstance(other, bool):
            return self.quo_int(other)
        return self.quo(other)

    def __neg__(self):
        return Dec(-self._scaled)

    # comparison

    def __eq__(self, other):
        if isinstance(other, (Dec, int)) and not isinstance(other, bool):
            return self._scaled == _coerce(other)._scaled
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, (Dec, int)) and not isinstance(other, bool):
            return self._scaled < _coerce(other)._scaled
        return NotImplemented

    def __hash__(self):
        return hash(self._scaled)

    def __bool__(self):
        return self._scaled != 0

    def __str__(self):
        sign = "-" if self._scaled < 0 else ""
        whole, frac = divmod(abs(self._scaled), SCALE)
        return f"{sign}{whole}.{frac:0{PRECISION}d}"

    def __repr__(self):
        return f"Dec('{self}')"


def _coerce(value: Union[Dec, int]) -> Dec:
    if isinstance(value, Dec):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Dec.from_int(value)
    raise TypeError(f"unsupported operand for Dec: {type(value).__name__}")
