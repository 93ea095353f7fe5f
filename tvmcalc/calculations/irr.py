"""
IRR and NPV Calculations

Implements IRR using the Newton-Raphson method on the cash-flow polynomial,
matching numpy_financial's NPV, IRR and MIRR functions.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from tvmcalc.calculations.utils import (
    as_cash_flows,
    as_float64,
    float_close,
    ieee_floats,
)

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
# Starting point for x = 1 + rate
INITIAL_ROOT_GUESS = -0.9


@dataclass(frozen=True)
class NetPresentValue:
    """
    NPV (Net Present Value) of cash flows.

    The first value is taken to occur now, so it is not discounted:

        NPV = sum(values[t] / (1 + rate)**t)

    Args:
        values: Cash flows per period (negative = outflow, positive = inflow)
        rate: Discount rate per period
    """

    values: Tuple[float, ...]
    rate: float

    def __post_init__(self):
        object.__setattr__(self, "values", as_cash_flows(self.values))

    def get(self) -> float:
        (rate,) = as_float64(self.rate)
        npv = np.float64(0.0)
        with ieee_floats():
            for period, cf in enumerate(self.values):
                npv += cf * (1 + rate) ** -np.float64(period)
        return float(npv)


def _polynomial(values: Sequence[float], x: float) -> float:
    """
    Evaluate the cash flows as polynomial coefficients in x = 1 + rate.

    values[0] is the coefficient of the highest power, so a root x gives
    NPV(x - 1) == 0.
    """
    with ieee_floats():
        return np.polyval(values, x)


def _polynomial_derivative(values: Sequence[float], x: float) -> float:
    """Evaluate the derivative of ``_polynomial`` at x."""
    with ieee_floats():
        return np.polyval(np.polyder(values), x)


def _find_root(values: Sequence[float]) -> Optional[float]:
    """
    Newton-Raphson search for the first root of the cash-flow polynomial.

    A flat derivative moves x one unit to the right instead of dividing by
    it. Returns None if MAX_ITERATIONS steps pass without convergence.
    """
    x = np.float64(INITIAL_ROOT_GUESS)

    for _ in range(MAX_ITERATIONS):
        fx = _polynomial(values, x)
        dx = _polynomial_derivative(values, x)

        if float_close(dx, 0.0):
            x += 1.0
            continue

        with ieee_floats():
            x_next = x - fx / dx

        if float_close(x, x_next):
            return float(x_next)

        x = x_next

    return None


@dataclass(frozen=True)
class InternalRateOfReturn:
    """
    IRR (Internal Rate of Return) of periodic cash flows.

    The rate that gives a net present value of 0.0. Only the first root
    reached from the fixed starting point is reported, even when the cash
    flows change sign more than once and admit several rates.

    Returns None unless there are at least two values of mixed sign, or if
    the search does not converge.
    """

    values: Tuple[float, ...]

    def __post_init__(self):
        object.__setattr__(self, "values", as_cash_flows(self.values))

    def get(self) -> Optional[float]:
        if len(self.values) <= 1:
            return None

        # All zeros count as non-positive
        all_non_positive = all(v <= 0 for v in self.values)
        all_positive = all(v > 0 for v in self.values)
        if all_non_positive or all_positive:
            return None

        root = _find_root(self.values)
        if root is None:
            logger.debug(
                f"IRR did not converge after {MAX_ITERATIONS} iterations: {self.values}"
            )
            return None
        return root - 1


@dataclass(frozen=True)
class ModifiedInternalRateOfReturn:
    """
    MIRR (Modified Internal Rate of Return).

    Negative cash flows are discounted at the finance rate and positive
    cash flows at the reinvestment rate.

    Args:
        values: Cash flows per period
        finance_rate: Interest rate paid on negative cash flows
        reinvest_rate: Interest rate earned on positive cash flows

    Returns None unless there is at least one value <= 0 and one value > 0.
    """

    values: Tuple[float, ...]
    finance_rate: float
    reinvest_rate: float

    def __post_init__(self):
        object.__setattr__(self, "values", as_cash_flows(self.values))

    def get(self) -> Optional[float]:
        any_non_positive = any(v <= 0 for v in self.values)
        any_positive = any(v > 0 for v in self.values)
        if not (any_non_positive and any_positive):
            logger.debug(
                "No real MIRR exists since all cash flows are of the same sign"
            )
            return None

        negative_flows = [v if v < 0 else 0.0 for v in self.values]
        positive_flows = [v if v > 0 else 0.0 for v in self.values]

        numer = abs(NetPresentValue(positive_flows, self.reinvest_rate).get())
        denom = abs(NetPresentValue(negative_flows, self.finance_rate).get())

        n, reinvest_rate, numer, denom = as_float64(
            len(self.values), self.reinvest_rate, numer, denom
        )
        with ieee_floats():
            mirr = (numer / denom) ** (1 / (n - 1)) * (1 + reinvest_rate) - 1
        return float(mirr)
