"""
Financial Calculation Engine

Time-value-of-money formulas. All calculations are designed to match
numpy_financial's behavior.
"""

from tvmcalc.calculations.utils import ATOL, RTOL, WhenType, float_close, when_weight
from tvmcalc.calculations.annuity import (
    FutureValue,
    NumberOfPeriods,
    Payment,
    PresentValue,
)
from tvmcalc.calculations.amortization import (
    InterestPayment,
    PrincipalPayment,
    amortization_schedule,
)
from tvmcalc.calculations.irr import (
    InternalRateOfReturn,
    ModifiedInternalRateOfReturn,
    NetPresentValue,
)
from tvmcalc.calculations.rate import Rate

__all__ = [
    "ATOL",
    "RTOL",
    "WhenType",
    "float_close",
    "when_weight",
    "FutureValue",
    "PresentValue",
    "Payment",
    "NumberOfPeriods",
    "InterestPayment",
    "PrincipalPayment",
    "amortization_schedule",
    "NetPresentValue",
    "InternalRateOfReturn",
    "ModifiedInternalRateOfReturn",
    "Rate",
]
