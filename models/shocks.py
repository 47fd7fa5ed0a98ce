"""
Shock applicator: transforms a baseline snapshot under one catalog scenario.

Each scenario touches a single lever:
- interest_rate_200bps / credit_spread_widening: effective rate += bps / 10_000
- revenue_down_20: revenue and EBITDA scaled by (1 - pct / 100)
- liquidity_freeze: monthly burn scaled by the burn multiplier
- volatility_spike: VaR volatility scaled by the volatility multiplier

STRESSED EQUITY NOTE: equity is reduced by two years of the incremental
interest cost, equity - 2 * (stressed_ie - baseline_ie). This is a rough
heuristic, not a cash-flow model. The raw value may go negative.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from config.params import DEFAULT_INTEREST_RATE, VOLATILITY
from models.financials import FinancialInputs, nz
from models.scenarios import ScenarioId, ScenarioOverrides, get_scenario

EQUITY_HIT_YEARS = 2.0


@dataclass(frozen=True)
class ShockedInputs:
    """Stressed snapshot plus the derived levers used downstream."""

    scenario_id: ScenarioId
    inputs: FinancialInputs
    # Stressed snapshot; equity already floored at zero
    rate: float
    interest_expense: float
    monthly_burn: float | None
    volatility: float
    stressed_equity: float
    # Raw approximation, may be negative


def _scale(value: float | None, factor: float) -> float | None:
    if value is None:
        return None
    return nz(value) * factor


def apply_shock(
    inputs: FinancialInputs,
    scenario_id: ScenarioId | str,
    overrides: ScenarioOverrides | None = None,
    base_volatility: float = VOLATILITY.baseline_annual_vol,
    default_rate: float = DEFAULT_INTEREST_RATE,
) -> ShockedInputs:
    """Apply the selected scenario to baseline inputs."""
    scenario = get_scenario(scenario_id)
    o = (overrides or ScenarioOverrides()).resolve()

    base_rate = inputs.effective_rate(default_rate)
    debt = nz(inputs.debt)
    base_burn = inputs.baseline_monthly_burn()
    baseline_ie = debt * base_rate

    rate = base_rate
    revenue = inputs.revenue
    ebitda = inputs.ebitda
    burn_multiplier = 1.0
    volatility = base_volatility

    sid = scenario.id
    if sid is ScenarioId.INTEREST_RATE_200BPS:
        rate = base_rate + o.interest_rate_bps / 10_000.0
    elif sid is ScenarioId.CREDIT_SPREAD_WIDENING:
        rate = base_rate + o.credit_spread_bps / 10_000.0
    elif sid is ScenarioId.REVENUE_DOWN_20:
        factor = 1.0 - o.revenue_down_pct / 100.0
        revenue = _scale(revenue, factor)
        ebitda = _scale(ebitda, factor)
    elif sid is ScenarioId.LIQUIDITY_FREEZE:
        burn_multiplier = o.liquidity_burn_multiplier
    elif sid is ScenarioId.VOLATILITY_SPIKE:
        volatility = base_volatility * o.volatility_multiplier

    stressed_ie = debt * rate
    stressed_equity = nz(inputs.equity) - (stressed_ie - baseline_ie) * EQUITY_HIT_YEARS
    stressed_burn = base_burn * burn_multiplier if base_burn is not None else None

    stressed = replace(
        inputs,
        revenue=revenue,
        ebitda=ebitda,
        equity=max(0.0, stressed_equity),
        interest_rate=rate,
        monthly_burn=stressed_burn,
    )

    return ShockedInputs(
        scenario_id=sid,
        inputs=stressed,
        rate=rate,
        interest_expense=stressed_ie,
        monthly_burn=stressed_burn,
        volatility=volatility,
        stressed_equity=stressed_equity,
    )
