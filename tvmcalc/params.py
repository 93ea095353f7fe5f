"""
Formula parameters.

Validates named inputs for each formula before any calculation runs and
builds the matching calculation object. Used as request bodies by the API
and by ``build_formula`` for plain mappings.
"""

import logging
from abc import abstractmethod
from typing import Any, Dict, List, Mapping, Type

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    ValidationError,
    field_validator,
)

from tvmcalc.calculations import (
    FutureValue,
    InterestPayment,
    InternalRateOfReturn,
    ModifiedInternalRateOfReturn,
    NetPresentValue,
    NumberOfPeriods,
    Payment,
    PresentValue,
    PrincipalPayment,
    Rate,
    WhenType,
)
from tvmcalc.config import get_settings

logger = logging.getLogger(__name__)


class ParameterError(ValueError):
    """Raised when formula parameters are missing or have the wrong type."""


class FormulaParams(BaseModel):
    """Base class for formula parameter sets."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("when", mode="before", check_fields=False)
    @classmethod
    def parse_when(cls, value: Any) -> WhenType:
        """Accept 'end'/'begin' in any case, or 0/1."""
        return WhenType(value)

    @abstractmethod
    def build(self):
        """Build the calculation described by these parameters."""


class FutureValueParams(FormulaParams):
    rate: StrictFloat
    nper: StrictInt
    pmt: StrictFloat
    pv: StrictFloat
    when: WhenType = WhenType.END

    def build(self) -> FutureValue:
        return FutureValue(self.rate, self.nper, self.pmt, self.pv, self.when)


class PresentValueParams(FormulaParams):
    rate: StrictFloat
    nper: StrictInt
    pmt: StrictFloat
    fv: StrictFloat = 0.0
    when: WhenType = WhenType.END

    def build(self) -> PresentValue:
        return PresentValue(self.rate, self.nper, self.pmt, self.fv, self.when)


class PaymentParams(FormulaParams):
    rate: StrictFloat
    nper: StrictInt
    pv: StrictFloat
    fv: StrictFloat = 0.0
    when: WhenType = WhenType.END

    def build(self) -> Payment:
        return Payment(self.rate, self.nper, self.pv, self.fv, self.when)


class NumberOfPeriodsParams(FormulaParams):
    rate: StrictFloat
    pmt: StrictFloat
    pv: StrictFloat
    fv: StrictFloat = 0.0
    when: WhenType = WhenType.END

    def build(self) -> NumberOfPeriods:
        return NumberOfPeriods(self.rate, self.pmt, self.pv, self.fv, self.when)


class InterestPaymentParams(FormulaParams):
    rate: StrictFloat
    per: StrictInt
    nper: StrictInt
    pv: StrictFloat
    fv: StrictFloat = 0.0
    when: WhenType = WhenType.END

    def build(self) -> InterestPayment:
        return InterestPayment(
            self.rate, self.per, self.nper, self.pv, self.fv, self.when
        )


class PrincipalPaymentParams(InterestPaymentParams):
    def build(self) -> PrincipalPayment:
        return PrincipalPayment(
            self.rate, self.per, self.nper, self.pv, self.fv, self.when
        )


class RateParams(FormulaParams):
    nper: StrictInt
    pmt: StrictFloat
    pv: StrictFloat
    fv: StrictFloat
    when: WhenType = WhenType.END
    guess: StrictFloat = Field(default_factory=lambda: get_settings().rate_guess)
    tol: StrictFloat = Field(default_factory=lambda: get_settings().rate_tol)
    maxiter: StrictInt = Field(default_factory=lambda: get_settings().rate_maxiter)

    def build(self) -> Rate:
        return Rate(
            self.nper,
            self.pmt,
            self.pv,
            self.fv,
            self.when,
            self.guess,
            self.tol,
            self.maxiter,
        )


class NetPresentValueParams(FormulaParams):
    rate: StrictFloat
    values: List[StrictFloat]

    def build(self) -> NetPresentValue:
        return NetPresentValue(self.values, self.rate)


class InternalRateOfReturnParams(FormulaParams):
    values: List[StrictFloat]

    def build(self) -> InternalRateOfReturn:
        return InternalRateOfReturn(self.values)


class ModifiedInternalRateOfReturnParams(FormulaParams):
    values: List[StrictFloat]
    finance_rate: StrictFloat
    reinvest_rate: StrictFloat

    def build(self) -> ModifiedInternalRateOfReturn:
        return ModifiedInternalRateOfReturn(
            self.values, self.finance_rate, self.reinvest_rate
        )


FORMULA_PARAMS: Dict[str, Type[FormulaParams]] = {
    "fv": FutureValueParams,
    "pv": PresentValueParams,
    "pmt": PaymentParams,
    "nper": NumberOfPeriodsParams,
    "ipmt": InterestPaymentParams,
    "ppmt": PrincipalPaymentParams,
    "rate": RateParams,
    "npv": NetPresentValueParams,
    "irr": InternalRateOfReturnParams,
    "mirr": ModifiedInternalRateOfReturnParams,
}


def _describe_errors(name: str, error: ValidationError) -> str:
    problems = []
    for err in error.errors():
        field = ".".join(str(part) for part in err["loc"]) or "<input>"
        problems.append(f"{field}: {err['msg']}")
    return f"Invalid parameters for '{name}': " + "; ".join(problems)


def parse_params(name: str, params: Mapping[str, Any]) -> FormulaParams:
    """
    Validate a mapping of named parameters for formula ``name``.

    Raises:
        ParameterError: Unknown formula, or a field is missing, unknown or
            of the wrong type
    """
    model = FORMULA_PARAMS.get(name)
    if model is None:
        raise ParameterError(
            f"Unknown formula '{name}'; expected one of {sorted(FORMULA_PARAMS)}"
        )

    try:
        return model.model_validate(params)
    except ValidationError as e:
        message = _describe_errors(name, e)
        logger.warning(message)
        raise ParameterError(message) from e


def build_formula(name: str, params: Mapping[str, Any]):
    """Validate ``params`` and build the calculation object for ``name``."""
    return parse_params(name, params).build()


def evaluate(name: str, params: Mapping[str, Any]):
    """Validate ``params`` and evaluate formula ``name``."""
    return build_formula(name, params).get()
