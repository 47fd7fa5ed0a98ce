"""
Parameters for the financial stress-testing engine.
Defaults cover the shock catalog magnitudes, VaR simulation and scoring rules.
Environment overrides are read by load_params().
"""

import math
import os
from dataclasses import dataclass

DEFAULT_INTEREST_RATE = 0.05
VAR_CONFIDENCE = 0.95


@dataclass(frozen=True)
class OverrideDefaults:
    """Default shock magnitudes, one per scenario."""
    interest_rate_bps: float = 200.0
    # interest_rate_200bps: parallel rate shift
    revenue_down_pct: float = 20.0
    # revenue_down_20: top-line decline, clamped to [0, 100]
    credit_spread_bps: float = 150.0
    # credit_spread_widening: refinancing spread add-on
    liquidity_burn_multiplier: float = 1.5
    # liquidity_freeze: must be > 0
    volatility_multiplier: float = 1.5
    # volatility_spike: must be > 0


@dataclass(frozen=True)
class VolatilityParams:
    """Equity volatility assumptions for the VaR engine."""
    baseline_annual_vol: float = 0.20
    # 20% annualized, applied to book equity
    drift: float = 0.0
    # Zero drift: VaR measures dispersion, not expected return


@dataclass(frozen=True)
class SimulationConfig:
    """Monte Carlo configuration for the VaR engine."""
    n_simulations: int = 1000
    horizon_days: int = 252
    dt: float = 1.0 / 252.0  # Daily steps in trading-year fractions
    seed: int | None = None
    # None draws fresh OS entropy on every run
    antithetic: bool = False
    # Pair each draw with its negation; paths are then not independent


@dataclass(frozen=True)
class ProjectionParams:
    """Monthly projection horizon for capital and cash trajectories."""
    months: int = 24
    default_decay: float = 0.10
    # Used when the baseline capital ratio gives no decay signal


@dataclass(frozen=True)
class FragilityParams:
    """Additive checklist behind the 0-100 fragility score."""
    base_score: float = 50.0
    dscr_warning: float = 1.25
    dscr_warning_penalty: float = 15.0
    dscr_breach: float = 1.0
    dscr_breach_penalty: float = 15.0
    capital_ratio_floor: float = 0.20
    capital_ratio_penalty: float = 10.0
    runway_floor_months: float = 6.0
    runway_penalty: float = 10.0
    var_equity_ceiling: float = 0.30
    var_penalty: float = 5.0
    min_score: float = 0.0
    max_score: float = 100.0


def _env_int(name: str, default: int | None) -> int | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    if not math.isfinite(parsed):
        return default
    return parsed


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_params() -> dict:
    """
    Load engine parameters, applying environment overrides.

    Recognized variables:
        STRESS_N_SIMULATIONS: Monte Carlo path count (positive int)
        STRESS_SEED: RNG seed; unset keeps the non-deterministic default
        STRESS_ANTITHETIC: 1/true/yes enables antithetic sampling
        STRESS_BASE_VOLATILITY: baseline annualized equity volatility (> 0)
        STRESS_DEFAULT_RATE: interest rate used when inputs carry none (>= 0)

    Malformed or out-of-range values fall back to the defaults.
    """
    n_sims = _env_int("STRESS_N_SIMULATIONS", SIM_CONFIG.n_simulations)
    if n_sims is None or n_sims <= 0:
        n_sims = SIM_CONFIG.n_simulations

    base_vol = _env_float("STRESS_BASE_VOLATILITY", VOLATILITY.baseline_annual_vol)
    if base_vol <= 0.0:
        base_vol = VOLATILITY.baseline_annual_vol

    default_rate = _env_float("STRESS_DEFAULT_RATE", DEFAULT_INTEREST_RATE)
    if default_rate < 0.0:
        default_rate = DEFAULT_INTEREST_RATE

    return {
        "sim_config": SimulationConfig(
            n_simulations=n_sims,
            horizon_days=SIM_CONFIG.horizon_days,
            dt=SIM_CONFIG.dt,
            seed=_env_int("STRESS_SEED", SIM_CONFIG.seed),
            antithetic=_env_flag("STRESS_ANTITHETIC", SIM_CONFIG.antithetic),
        ),
        "volatility": VolatilityParams(
            baseline_annual_vol=base_vol,
            drift=VOLATILITY.drift,
        ),
        "overrides": OVERRIDE_DEFAULTS,
        "projection": PROJECTION,
        "fragility": FRAGILITY,
        "default_interest_rate": default_rate,
    }


# Convenient default instances (used throughout codebase)
OVERRIDE_DEFAULTS = OverrideDefaults()
VOLATILITY = VolatilityParams()
SIM_CONFIG = SimulationConfig()
PROJECTION = ProjectionParams()
FRAGILITY = FragilityParams()
