"""
Tests for formula parameter validation.
"""

import math

import pytest
from pydantic import ValidationError

from tvmcalc.calculations import (
    FutureValue,
    InternalRateOfReturn,
    NumberOfPeriods,
    Rate,
    WhenType,
)
from tvmcalc.config import get_settings
from tvmcalc.params import (
    FORMULA_PARAMS,
    FormulaParams,
    ParameterError,
    RateParams,
    build_formula,
    evaluate,
)

FV_PARAMS = {"rate": 0.075, "nper": 20, "pmt": -2000.0, "pv": 0.0, "when": "end"}


class TestBuildFormula:
    """Test building calculations from plain mappings."""

    def test_build_future_value(self):
        fv = build_formula("fv", FV_PARAMS)
        assert fv == FutureValue(0.075, 20, -2000.0, 0.0, WhenType.END)

    def test_every_formula_is_registered(self):
        assert sorted(FORMULA_PARAMS) == sorted(
            ["fv", "pv", "pmt", "nper", "ipmt", "ppmt", "rate", "npv", "irr", "mirr"]
        )

    @pytest.mark.parametrize(
        "when,expected",
        [("begin", WhenType.BEGIN), ("END", WhenType.END), (1, WhenType.BEGIN)],
    )
    def test_when_aliases(self, when, expected):
        fv = build_formula("fv", {**FV_PARAMS, "when": when})
        assert fv.when is expected

    def test_defaults(self):
        nper = build_formula("nper", {"rate": 0.075, "pmt": -2000.0, "pv": 0.0})
        assert nper == NumberOfPeriods(0.075, -2000.0, 0.0, 0.0, WhenType.END)

    def test_rate_defaults_from_settings(self):
        settings = get_settings()
        rate = RateParams(nper=10, pmt=0.0, pv=-3500.0, fv=10000.0).build()
        assert isinstance(rate, Rate)
        assert rate.guess == settings.rate_guess
        assert rate.tol == settings.rate_tol
        assert rate.maxiter == settings.rate_maxiter

    def test_cash_flows(self):
        irr = build_formula("irr", {"values": [-100.0, 110.0]})
        assert irr == InternalRateOfReturn((-100.0, 110.0))


class TestEvaluate:
    """Test evaluating formulas from plain mappings."""

    def test_evaluate_fv(self):
        assert math.isclose(evaluate("fv", FV_PARAMS), 86609.362673042924)

    def test_infinite_result_is_kept(self):
        res = evaluate("nper", {"rate": 0.0, "pmt": 0.0, "pv": 0.0, "fv": 100000.0})
        assert res == float("inf")

    def test_no_solution_is_none(self):
        res = evaluate("ipmt", {"rate": 0.01, "per": 0, "nper": 12, "pv": 100.0})
        assert res is None


class TestFormulaParams:
    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            FormulaParams()


class TestParameterErrors:
    """Test that invalid parameters fail before any calculation runs."""

    def test_missing_field(self):
        params = dict(FV_PARAMS)
        del params["nper"]
        with pytest.raises(ParameterError) as exc_info:
            build_formula("fv", params)
        assert "nper" in str(exc_info.value)
        assert "'fv'" in str(exc_info.value)

    def test_misspelled_field(self):
        params = dict(FV_PARAMS)
        params["Rate"] = params.pop("rate")
        with pytest.raises(ParameterError) as exc_info:
            build_formula("fv", params)
        assert "Rate" in str(exc_info.value)
        assert "rate" in str(exc_info.value)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("nper", 20.5),
            ("nper", "20"),
            ("pmt", "-2000"),
            ("rate", None),
            ("when", "sometimes"),
            ("when", 2),
        ],
    )
    def test_wrong_type(self, field, value):
        with pytest.raises(ParameterError) as exc_info:
            build_formula("fv", {**FV_PARAMS, field: value})
        assert field in str(exc_info.value)

    def test_wrong_cash_flow_type(self):
        with pytest.raises(ParameterError):
            build_formula("npv", {"rate": 0.1, "values": [-100.0, "50"]})

    def test_unknown_formula(self):
        with pytest.raises(ParameterError) as exc_info:
            build_formula("xirr", {})
        assert "xirr" in str(exc_info.value)

    def test_error_is_value_error_with_cause(self):
        with pytest.raises(ValueError) as exc_info:
            build_formula("pmt", {})
        assert isinstance(exc_info.value, ParameterError)
        assert isinstance(exc_info.value.__cause__, ValidationError)
