"""
Annuity Calculations

Closed-form solutions of the annuity identity, matching numpy_financial's
FV, PV, PMT and NPER functions:

    fv + pv*(1+rate)**nper + pmt*(1+rate*when)/rate*((1+rate)**nper - 1) = 0

or, when rate is 0:

    fv + pv + pmt*nper = 0
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from tvmcalc.calculations.utils import WhenType, as_float64, ieee_floats, when_weight


@dataclass(frozen=True)
class FutureValue:
    """
    Value at the end of ``nper`` periods.

    Args:
        rate: Interest rate compounded once per period
        nper: Number of compounding periods
        pmt: Payment in each period
        pv: Present value
        when: When payments are due
    """

    rate: float
    nper: int
    pmt: float
    pv: float
    when: WhenType = WhenType.END

    def get(self) -> float:
        rate, nper, pmt, pv = as_float64(self.rate, self.nper, self.pmt, self.pv)
        when = when_weight(self.when)

        with ieee_floats():
            if rate != 0:
                growth = (1 + rate) ** nper
                pmt_future = pmt * (1 + rate * when) / rate * (growth - 1)
                return float(-pv * growth - pmt_future)
            return float(-pv - pmt * nper)


@dataclass(frozen=True)
class PresentValue:
    """
    Value today of a series of future payments.

    Args:
        rate: Interest rate compounded once per period
        nper: Number of compounding periods
        pmt: Payment in each period
        fv: Future value
        when: When payments are due
    """

    rate: float
    nper: int
    pmt: float
    fv: float = 0.0
    when: WhenType = WhenType.END

    def get(self) -> float:
        rate, nper, pmt, fv = as_float64(self.rate, self.nper, self.pmt, self.fv)
        when = when_weight(self.when)

        with ieee_floats():
            if rate != 0:
                growth = (1 + rate) ** nper
                factor = (1 + rate * when) * (growth - 1) / rate
                return float(-(fv + pmt * factor) / growth)
            return float(-fv - pmt * nper)


@dataclass(frozen=True)
class Payment:
    """
    Payment against loan principal plus interest.

    Args:
        rate: Interest rate compounded once per period
        nper: Number of compounding periods
        pv: Present value (loan principal)
        fv: Future value (balance left after the last payment)
        when: When payments are due

    A zero ``nper`` with a zero rate is not guarded and yields inf/NaN.
    """

    rate: float
    nper: int
    pv: float
    fv: float = 0.0
    when: WhenType = WhenType.END

    def get(self) -> float:
        rate, nper, pv, fv = as_float64(self.rate, self.nper, self.pv, self.fv)
        when = when_weight(self.when)

        with ieee_floats():
            if rate != 0:
                growth = (1 + rate) ** nper
                factor = (1 + rate * when) / rate * (growth - 1)
                return float(-(fv + pv * growth) / factor)
            return float(-(pv + fv) / nper)


@dataclass(frozen=True)
class NumberOfPeriods:
    """
    Number of periodic payments, not necessarily integral.

    Returns None when ``rate <= -1`` since the logarithms are undefined
    there. A NaN from a non-positive log argument is returned as-is.
    """

    rate: float
    pmt: float
    pv: float
    fv: float = 0.0
    when: WhenType = WhenType.END

    def get(self) -> Optional[float]:
        rate, pmt, pv, fv = as_float64(self.rate, self.pmt, self.pv, self.fv)
        when = when_weight(self.when)

        # Value never changes
        if rate == 0 and pmt == 0:
            return float("inf")

        with ieee_floats():
            if rate == 0:
                return float(-(fv + pv) / pmt)

            if rate <= -1:
                return None

            z = pmt * (1 + rate * when) / rate
            return float(np.log((-fv + z) / (pv + z)) / np.log(1 + rate))
