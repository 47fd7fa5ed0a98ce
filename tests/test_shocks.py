"""Tests for the shock applicator."""

import math

import pytest

from models.financials import FinancialInputs
from models.scenarios import ScenarioId, ScenarioOverrides
from models.shocks import apply_shock


class TestApplyShock:
    def setup_method(self):
        self.inputs = FinancialInputs(
            revenue=100e6, ebitda=18e6, debt=45e6, cash=12e6, equity=55e6,
            working_capital=8e6,
        )

    def test_interest_rate_default(self):
        s = apply_shock(self.inputs, "interest_rate_200bps")
        assert s.rate == pytest.approx(0.07)
        assert s.interest_expense == pytest.approx(3_150_000.0)
        assert s.volatility == pytest.approx(0.20)
        assert s.inputs.revenue == self.inputs.revenue
        assert s.inputs.ebitda == self.inputs.ebitda

    def test_stressed_equity_two_year_hit(self):
        s = apply_shock(self.inputs, "interest_rate_200bps")
        # 55M - (3.15M - 2.25M) * 2
        assert s.stressed_equity == pytest.approx(53_200_000.0)
        assert s.inputs.equity == pytest.approx(53_200_000.0)

    def test_stressed_equity_floored_in_snapshot(self):
        fi = FinancialInputs(debt=1000.0, equity=10.0, ebitda=5.0)
        s = apply_shock(fi, "interest_rate_200bps",
                        ScenarioOverrides(interest_rate_bps=10_000))
        assert s.stressed_equity < 0
        assert s.inputs.equity == 0.0

    def test_credit_spread_uses_its_own_override(self):
        s = apply_shock(self.inputs, ScenarioId.CREDIT_SPREAD_WIDENING,
                        ScenarioOverrides(interest_rate_bps=999, credit_spread_bps=300))
        assert s.rate == pytest.approx(0.08)

    def test_credit_spread_default(self):
        s = apply_shock(self.inputs, "credit_spread_widening")
        assert s.rate == pytest.approx(0.065)

    def test_revenue_down_default(self):
        s = apply_shock(self.inputs, "revenue_down_20")
        assert s.inputs.revenue == pytest.approx(80e6)
        assert s.inputs.ebitda == pytest.approx(14.4e6)
        assert s.rate == pytest.approx(0.05)
        assert s.stressed_equity == pytest.approx(55e6)

    def test_revenue_down_100_zeroes_revenue_and_ebitda(self):
        s = apply_shock(self.inputs, "revenue_down_20",
                        ScenarioOverrides(revenue_down_pct=100))
        assert s.inputs.revenue == 0.0
        assert s.inputs.ebitda == 0.0

    def test_revenue_down_keeps_unknown_unknown(self):
        s = apply_shock(FinancialInputs(debt=10.0), "revenue_down_20")
        assert s.inputs.revenue is None
        assert s.inputs.ebitda is None

    def test_revenue_down_does_not_rederive_burn(self):
        """Burn stays at the baseline burn; only the liquidity lever moves it."""
        s = apply_shock(self.inputs, "revenue_down_20")
        assert s.monthly_burn == pytest.approx(self.inputs.baseline_monthly_burn())

    def test_liquidity_freeze_doubles_burn(self):
        base = self.inputs.baseline_monthly_burn()
        s = apply_shock(self.inputs, "liquidity_freeze",
                        ScenarioOverrides(liquidity_burn_multiplier=2))
        assert s.monthly_burn == pytest.approx(2 * base)
        assert s.inputs.revenue == self.inputs.revenue
        assert s.inputs.ebitda == self.inputs.ebitda
        assert s.interest_expense == pytest.approx(2_250_000.0)

    def test_liquidity_freeze_unknown_burn(self):
        s = apply_shock(FinancialInputs(cash=5.0), "liquidity_freeze")
        assert s.monthly_burn is None

    def test_volatility_spike(self):
        s = apply_shock(self.inputs, "volatility_spike",
                        ScenarioOverrides(volatility_multiplier=3))
        assert s.volatility == pytest.approx(0.60)
        assert s.rate == pytest.approx(0.05)
        assert s.inputs.debt == self.inputs.debt

    def test_nan_override_uses_default(self):
        s = apply_shock(self.inputs, "interest_rate_200bps",
                        ScenarioOverrides(interest_rate_bps=math.nan))
        assert s.rate == pytest.approx(0.07)

    def test_input_rate_respected(self):
        fi = FinancialInputs(debt=100.0, interest_rate=0.10)
        s = apply_shock(fi, "interest_rate_200bps")
        assert s.rate == pytest.approx(0.12)

    def test_pure(self):
        a = apply_shock(self.inputs, "liquidity_freeze")
        b = apply_shock(self.inputs, "liquidity_freeze")
        assert a == b
