"""
Loan Amortization Calculations

Splits a periodic payment into its interest and principal portions,
matching numpy_financial's IPMT and PPMT functions:

    pmt = ppmt + ipmt
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from tvmcalc.calculations.annuity import FutureValue, Payment
from tvmcalc.calculations.utils import WhenType, as_float64, ieee_floats


@dataclass(frozen=True)
class InterestPayment:
    """
    Interest portion of payment number ``per``.

    Args:
        rate: Interest rate compounded once per period
        per: Payment number, starting at 1
        nper: Number of compounding periods
        pv: Present value (loan principal)
        fv: Future value
        when: When payments are due

    Returns None for ``per < 1``.
    """

    rate: float
    per: int
    nper: int
    pv: float
    fv: float = 0.0
    when: WhenType = WhenType.END

    def get(self) -> Optional[float]:
        if self.per < 1:
            return None

        when = WhenType(self.when)
        total_pmt = Payment(self.rate, self.nper, self.pv, self.fv, when).get()

        # Balance remaining after the previous payment
        remaining = FutureValue(self.rate, self.per - 1, total_pmt, self.pv, when).get()
        remaining, rate = as_float64(remaining, self.rate)

        if when is WhenType.BEGIN:
            # Nothing accrues before the first payment
            if self.per == 1:
                return 0.0
            with ieee_floats():
                return float(remaining / (1 + rate) * rate)
        with ieee_floats():
            return float(remaining * rate)


@dataclass(frozen=True)
class PrincipalPayment:
    """
    Principal portion of payment number ``per``.

    Returns None for ``per < 1``.
    """

    rate: float
    per: int
    nper: int
    pv: float
    fv: float = 0.0
    when: WhenType = WhenType.END

    def get(self) -> Optional[float]:
        interest = InterestPayment(
            self.rate, self.per, self.nper, self.pv, self.fv, self.when
        ).get()
        if interest is None:
            return None

        total_pmt = Payment(self.rate, self.nper, self.pv, self.fv, self.when).get()
        return total_pmt - interest


def amortization_schedule(
    rate: float,
    nper: int,
    pv: float,
    fv: float = 0.0,
    when: WhenType = WhenType.END,
) -> List[Dict]:
    """
    Generate the payment split for every period of a loan.

    Args:
        rate: Interest rate per period
        nper: Number of payments
        pv: Loan principal
        fv: Balance left after the last payment
        when: When payments are due

    Returns:
        List of rows with period, payment, interest and principal
    """
    payment = Payment(rate, nper, pv, fv, when).get()
    schedule = []

    for period in range(1, nper + 1):
        interest = InterestPayment(rate, period, nper, pv, fv, when).get()
        principal = PrincipalPayment(rate, period, nper, pv, fv, when).get()
        schedule.append(
            {
                "period": period,
                "payment": payment,
                "interest": interest,
                "principal": principal,
            }
        )

    return schedule


def calculate_total_interest(schedule: List[Dict]) -> float:
    """Calculate total interest paid over loan term."""
    return sum(row["interest"] for row in schedule)


def calculate_total_principal(schedule: List[Dict]) -> float:
    """Calculate total principal repaid over loan term."""
    return sum(row["principal"] for row in schedule)
