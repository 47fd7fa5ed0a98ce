"""Tests for parameter defaults and environment overrides."""

import dataclasses

import pytest

from config.params import (
    DEFAULT_INTEREST_RATE,
    FRAGILITY,
    OVERRIDE_DEFAULTS,
    SIM_CONFIG,
    load_params,
)

ENV_VARS = (
    "STRESS_N_SIMULATIONS",
    "STRESS_SEED",
    "STRESS_BASE_VOLATILITY",
    "STRESS_DEFAULT_RATE",
    "STRESS_ANTITHETIC",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_simulation_defaults(self):
        assert SIM_CONFIG.n_simulations == 1000
        assert SIM_CONFIG.horizon_days == 252
        assert SIM_CONFIG.seed is None

    def test_override_defaults(self):
        assert OVERRIDE_DEFAULTS.interest_rate_bps == 200.0
        assert OVERRIDE_DEFAULTS.revenue_down_pct == 20.0
        assert OVERRIDE_DEFAULTS.credit_spread_bps == 150.0

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            FRAGILITY.base_score = 0.0


class TestLoadParams:
    def test_no_env(self):
        params = load_params()
        assert params["sim_config"] == SIM_CONFIG
        assert params["volatility"].baseline_annual_vol == 0.20
        assert params["default_interest_rate"] == DEFAULT_INTEREST_RATE

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("STRESS_N_SIMULATIONS", "5000")
        monkeypatch.setenv("STRESS_SEED", "42")
        monkeypatch.setenv("STRESS_BASE_VOLATILITY", "0.35")
        monkeypatch.setenv("STRESS_DEFAULT_RATE", "0.07")
        monkeypatch.setenv("STRESS_ANTITHETIC", "true")
        params = load_params()
        assert params["sim_config"].n_simulations == 5000
        assert params["sim_config"].seed == 42
        assert params["volatility"].baseline_annual_vol == 0.35
        assert params["default_interest_rate"] == 0.07
        assert params["sim_config"].antithetic is True

    @pytest.mark.parametrize("name,value", [
        ("STRESS_N_SIMULATIONS", "-5"),
        ("STRESS_N_SIMULATIONS", "many"),
        ("STRESS_BASE_VOLATILITY", "nan"),
        ("STRESS_BASE_VOLATILITY", "0"),
        ("STRESS_DEFAULT_RATE", "-0.01"),
        ("STRESS_SEED", "   "),
    ])
    def test_bad_values_fall_back(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        params = load_params()
        assert params["sim_config"] == SIM_CONFIG
        assert params["volatility"].baseline_annual_vol == 0.20
        assert params["default_interest_rate"] == DEFAULT_INTEREST_RATE
