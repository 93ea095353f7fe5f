"""
Shared numeric helpers for the time-value-of-money formulas.

All formulas evaluate with numpy float64 scalars under ``ieee_floats()`` so
that division by zero, overflow, fractional powers of negative numbers and
logs of non-positive numbers produce inf/NaN instead of raising.
"""

from enum import Enum
from typing import Iterable, Tuple

import numpy as np

# Tolerance of relative difference
RTOL = 1e-10
# Tolerance of absolute difference
ATOL = 1e-5


class WhenType(str, Enum):
    """When payments are due within a period."""

    END = "end"
    BEGIN = "begin"

    @classmethod
    def _missing_(cls, value):
        # numpy_financial also accepts 0/1 and any casing of the names
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return {0: cls.END, 1: cls.BEGIN}.get(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


_WHEN_WEIGHTS = {
    WhenType.END: 0.0,
    WhenType.BEGIN: 1.0,
}


def when_weight(when: WhenType) -> float:
    """
    Numeric weight of a payment timing in the annuity formulas.

    END maps to 0.0 and BEGIN to 1.0; the value multiplies the rate term
    ``(1 + rate * when)``.
    """
    return _WHEN_WEIGHTS[WhenType(when)]


def ieee_floats():
    """Context manager that silences numpy floating point warnings."""
    return np.errstate(all="ignore")


def as_float64(*values: float) -> Tuple[np.float64, ...]:
    """Convert scalars to numpy float64 so arithmetic follows IEEE rules."""
    return tuple(np.float64(v) for v in values)


def as_cash_flows(values: Iterable[float]) -> Tuple[float, ...]:
    """Freeze a cash-flow sequence as a tuple of floats."""
    return tuple(float(v) for v in values)


def float_close(
    lhs: float, rhs: float, rtol: float = RTOL, atol: float = ATOL
) -> bool:
    """
    Compare two floats with a relative OR an absolute tolerance.

    When ``rhs`` is zero the relative difference is inf/NaN, so only the
    absolute criterion can succeed.
    """
    lhs, rhs = as_float64(lhs, rhs)
    with ieee_floats():
        diff = np.abs(lhs - rhs)
        relative = diff / np.abs(rhs)
    return bool(relative <= rtol or diff <= atol)
