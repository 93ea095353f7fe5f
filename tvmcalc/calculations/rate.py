"""
Interest Rate Calculation

Solves the annuity identity for the rate per period with Newton's method,
matching numpy_financial's RATE function:

    g(r) = fv + pv*(1+r)**nper + pmt*(1+r*when)/r*((1+r)**nper - 1) = 0
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from tvmcalc.calculations.utils import WhenType, as_float64, ieee_floats, when_weight

logger = logging.getLogger(__name__)

DEFAULT_GUESS = 0.1
DEFAULT_TOLERANCE = 1e-6
DEFAULT_MAX_ITERATIONS = 100


def _g_div_gp(
    r: np.float64,
    nper: np.float64,
    pmt: np.float64,
    pv: np.float64,
    fv: np.float64,
    when: float,
) -> np.float64:
    """Newton step g(r) / g'(r) for the annuity identity."""
    with ieee_floats():
        t1 = (r + 1) ** nper
        t2 = (r + 1) ** (nper - 1)
        g = fv + t1 * pv + pmt * (t1 - 1) * (r * when + 1) / r
        gp = (
            nper * t2 * pv
            - pmt * (t1 - 1) * (r * when + 1) / (r ** 2)
            + nper * pmt * t2 * (r * when + 1) / r
            + pmt * (t1 - 1) * when / r
        )
        return g / gp


@dataclass(frozen=True)
class Rate:
    """
    Interest rate per period.

    Args:
        nper: Number of compounding periods
        pmt: Payment in each period
        pv: Present value
        fv: Future value
        when: When payments are due
        guess: Starting guess for the rate
        tol: Required tolerance between successive iterates
        maxiter: Maximum number of iterations

    Returns None if ``maxiter`` iterations pass without convergence. A zero
    derivative is not guarded; the resulting NaN fails the tolerance test.
    """

    nper: int
    pmt: float
    pv: float
    fv: float
    when: WhenType = WhenType.END
    guess: float = DEFAULT_GUESS
    tol: float = DEFAULT_TOLERANCE
    maxiter: int = DEFAULT_MAX_ITERATIONS

    def get(self) -> Optional[float]:
        nper, pmt, pv, fv = as_float64(self.nper, self.pmt, self.pv, self.fv)
        when = when_weight(self.when)

        rn = np.float64(self.guess)
        iteration = 0
        close = False

        while iteration < self.maxiter and not close:
            with ieee_floats():
                rnp1 = rn - _g_div_gp(rn, nper, pmt, pv, fv, when)
                diff = np.abs(rnp1 - rn)
            close = bool(diff < self.tol)
            iteration += 1
            rn = rnp1

        if close:
            logger.debug(f"Rate converged to {rn} after {iteration} iterations")
            return float(rn)

        logger.debug(f"Rate did not converge after {self.maxiter} iterations, last {rn}")
        return None
