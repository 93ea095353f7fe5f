"""
Financial calculation API endpoints.

These endpoints accept formula parameters and return calculated results.
"""

import math
from typing import Annotated, Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, PlainSerializer, StrictFloat, StrictInt

from tvmcalc.calculations import WhenType
from tvmcalc.calculations.amortization import (
    amortization_schedule,
    calculate_total_interest,
    calculate_total_principal,
)
from tvmcalc.params import (
    FormulaParams,
    FutureValueParams,
    InterestPaymentParams,
    InternalRateOfReturnParams,
    ModifiedInternalRateOfReturnParams,
    NetPresentValueParams,
    NumberOfPeriodsParams,
    ParameterError,
    PaymentParams,
    PresentValueParams,
    PrincipalPaymentParams,
    RateParams,
    evaluate,
)

router = APIRouter()


def _serialize_float(value: float):
    # JSON has no inf/nan; keep them apart from null (no solution)
    if math.isfinite(value):
        return value
    return str(value)


ResultFloat = Annotated[float, PlainSerializer(_serialize_float)]


class CalculationResult(BaseModel):
    """Result of a single formula evaluation."""

    formula: str
    result: Optional[ResultFloat] = None
    solved: bool


def _result(formula: str, result: Optional[float]) -> CalculationResult:
    return CalculationResult(
        formula=formula,
        result=result,
        solved=result is not None,
    )


@router.post("/fv", response_model=CalculationResult)
async def calculate_fv(inputs: FutureValueParams):
    """Calculate the future value."""
    return _result("fv", inputs.build().get())


@router.post("/pv", response_model=CalculationResult)
async def calculate_pv(inputs: PresentValueParams):
    """Calculate the present value."""
    return _result("pv", inputs.build().get())


@router.post("/pmt", response_model=CalculationResult)
async def calculate_pmt(inputs: PaymentParams):
    """Calculate the periodic payment."""
    return _result("pmt", inputs.build().get())


@router.post("/nper", response_model=CalculationResult)
async def calculate_nper(inputs: NumberOfPeriodsParams):
    """Calculate the number of periods."""
    return _result("nper", inputs.build().get())


@router.post("/ipmt", response_model=CalculationResult)
async def calculate_ipmt(inputs: InterestPaymentParams):
    """Calculate the interest portion of a payment."""
    return _result("ipmt", inputs.build().get())


@router.post("/ppmt", response_model=CalculationResult)
async def calculate_ppmt(inputs: PrincipalPaymentParams):
    """Calculate the principal portion of a payment."""
    return _result("ppmt", inputs.build().get())


@router.post("/rate", response_model=CalculationResult)
async def calculate_rate(inputs: RateParams):
    """Solve for the interest rate per period."""
    return _result("rate", inputs.build().get())


@router.post("/npv", response_model=CalculationResult)
async def calculate_npv(inputs: NetPresentValueParams):
    """Calculate the net present value of cash flows."""
    return _result("npv", inputs.build().get())


@router.post("/irr", response_model=CalculationResult)
async def calculate_irr(inputs: InternalRateOfReturnParams):
    """Calculate the internal rate of return of cash flows."""
    return _result("irr", inputs.build().get())


@router.post("/mirr", response_model=CalculationResult)
async def calculate_mirr(inputs: ModifiedInternalRateOfReturnParams):
    """Calculate the modified internal rate of return of cash flows."""
    return _result("mirr", inputs.build().get())


class AmortizationInput(FormulaParams):
    """Input for amortization calculation."""

    rate: StrictFloat
    nper: StrictInt
    pv: StrictFloat
    fv: StrictFloat = 0.0
    when: WhenType = WhenType.END

    def build(self) -> List[dict]:
        return amortization_schedule(
            rate=self.rate,
            nper=self.nper,
            pv=self.pv,
            fv=self.fv,
            when=self.when,
        )


class AmortizationRow(BaseModel):
    period: int
    payment: ResultFloat
    interest: ResultFloat
    principal: ResultFloat


class AmortizationResponse(BaseModel):
    schedule: List[AmortizationRow]
    total_interest: ResultFloat
    total_principal: ResultFloat


@router.post("/amortization", response_model=AmortizationResponse)
async def calculate_amortization(inputs: AmortizationInput):
    """Split every payment of a loan into interest and principal."""
    schedule = inputs.build()

    return AmortizationResponse(
        schedule=schedule,
        total_interest=calculate_total_interest(schedule),
        total_principal=calculate_total_principal(schedule),
    )


@router.post("/evaluate/{formula}", response_model=CalculationResult)
async def evaluate_formula(formula: str, params: Dict[str, Any]):
    """Evaluate any formula from a plain mapping of named parameters."""
    try:
        result = evaluate(formula, params)
    except ParameterError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _result(formula, result)
