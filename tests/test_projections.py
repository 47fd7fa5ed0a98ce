"""Tests for the 24-month capital and cash projections."""

import pytest

from config.params import ProjectionParams
from models.projections import capital_decay, capital_deterioration, liquidity_burn


class TestCapitalDeterioration:
    def test_glides_to_stressed_ratio(self):
        path = capital_deterioration(0.55, 53.2 / 98.2)
        assert len(path) == 25
        assert [p.month for p in path] == list(range(25))
        assert path[0].value == pytest.approx(0.55)
        assert path[24].value == pytest.approx(53.2 / 98.2)

    def test_non_increasing_when_stressed_lower(self):
        values = [p.value for p in capital_deterioration(0.6, 0.3)]
        assert all(a >= b for a, b in zip(values, values[1:]))

    def test_unknown_baseline_all_zero(self):
        path = capital_deterioration(None, 0.4)
        assert len(path) == 25
        assert all(p.value == 0.0 for p in path)

    def test_default_decay_without_stressed(self):
        assert capital_decay(0.5, None) == pytest.approx(0.10)
        assert capital_decay(0.0, 0.2) == pytest.approx(0.10)
        path = capital_deterioration(0.5, None)
        assert path[24].value == pytest.approx(0.45)

    def test_clipped_to_unit_interval(self):
        path = capital_deterioration(0.5, -1.0)
        assert all(0.0 <= p.value <= 1.0 for p in path)
        assert path[24].value == 0.0

    def test_custom_horizon(self):
        assert len(capital_deterioration(0.5, 0.4, ProjectionParams(months=12))) == 13


class TestLiquidityBurn:
    def test_cash_floored_at_zero(self):
        burn = 82e6 / 12 * 1.5
        path = liquidity_burn(12e6, burn)
        assert len(path) == 25
        assert path[0].value == pytest.approx(12e6)
        assert path[1].value == pytest.approx(12e6 - burn)
        assert all(p.value == 0.0 for p in path[2:])

    def test_default_burn_is_a_twelfth_of_cash(self):
        path = liquidity_burn(1200.0, None)
        assert path[6].value == pytest.approx(600.0)
        assert path[12].value == pytest.approx(0.0)
        assert path[24].value == 0.0

    def test_negative_burn_grows_cash(self):
        path = liquidity_burn(100.0, -10.0)
        assert path[24].value == pytest.approx(340.0)

    def test_non_negative_and_non_increasing(self):
        values = [p.value for p in liquidity_burn(5e6, 4e5)]
        assert all(v >= 0.0 for v in values)
        assert all(a >= b for a, b in zip(values, values[1:]))
