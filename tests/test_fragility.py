"""Tests for the fragility score checklist."""

from models.financials import RatioSet
from models.fragility import fragility_penalties, fragility_score


def _ratios(dscr=None, capital_ratio=None, runway=None, var_95=None):
    return RatioSet(
        interest_expense=0.0,
        dscr=dscr,
        capital_ratio=capital_ratio,
        liquidity_runway_months=runway,
        var_95=var_95,
    )


class TestFragilityScore:
    def test_healthy_company_scores_base(self):
        r = _ratios(dscr=8.0, capital_ratio=0.55, runway=24.0, var_95=10.0)
        assert fragility_score(r, equity=100.0) == 50

    def test_all_unknown_scores_base(self):
        assert fragility_score(_ratios(), equity=0.0) == 50

    def test_dscr_warning_only(self):
        assert fragility_score(_ratios(dscr=1.2), equity=0.0) == 65

    def test_dscr_breach_is_cumulative(self):
        assert fragility_score(_ratios(dscr=0.8), equity=0.0) == 80

    def test_dscr_boundaries(self):
        assert fragility_score(_ratios(dscr=1.25), equity=0.0) == 50
        assert fragility_score(_ratios(dscr=1.0), equity=0.0) == 65

    def test_capital_ratio_rule(self):
        assert fragility_score(_ratios(capital_ratio=0.19), equity=0.0) == 60
        assert fragility_score(_ratios(capital_ratio=0.20), equity=0.0) == 50

    def test_runway_rule(self):
        assert fragility_score(_ratios(runway=5.9), equity=0.0) == 60
        assert fragility_score(_ratios(runway=6.0), equity=0.0) == 50

    def test_var_rule_needs_positive_equity(self):
        assert fragility_score(_ratios(var_95=40.0), equity=100.0) == 55
        assert fragility_score(_ratios(var_95=30.0), equity=100.0) == 50
        assert fragility_score(_ratios(var_95=40.0), equity=0.0) == 50

    def test_every_rule_fires_clamped_to_100(self):
        r = _ratios(dscr=0.5, capital_ratio=0.1, runway=2.0, var_95=50.0)
        assert [name for name, _ in fragility_penalties(r, 100.0)] == [
            "dscr_below_warning",
            "dscr_below_breach",
            "capital_ratio_low",
            "runway_short",
            "var_exceeds_equity_share",
        ]
        assert fragility_score(r, equity=100.0) == 100

    def test_score_is_integer(self):
        assert isinstance(fragility_score(_ratios(dscr=1.1), equity=0.0), int)
