"""
Shock scenario catalog and per-run magnitude overrides.

The catalog is a fixed tuple built once at import time. Each scenario reads
exactly one override field; the rest are ignored for that run.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from config.params import OVERRIDE_DEFAULTS, OverrideDefaults


class ScenarioId(str, Enum):
    INTEREST_RATE_200BPS = "interest_rate_200bps"
    REVENUE_DOWN_20 = "revenue_down_20"
    LIQUIDITY_FREEZE = "liquidity_freeze"
    CREDIT_SPREAD_WIDENING = "credit_spread_widening"
    VOLATILITY_SPIKE = "volatility_spike"


@dataclass(frozen=True)
class Scenario:
    """Catalog entry exposed to UI clients."""

    id: ScenarioId
    name: str
    description: str

    def to_dict(self) -> dict:
        return {"id": self.id.value, "name": self.name, "description": self.description}


SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        ScenarioId.INTEREST_RATE_200BPS,
        "Interest rate +200bps",
        "Rates up 2%; higher interest expense.",
    ),
    Scenario(
        ScenarioId.REVENUE_DOWN_20,
        "Revenue -20%",
        "Top line shock; EBITDA and cash flow impact.",
    ),
    Scenario(
        ScenarioId.LIQUIDITY_FREEZE,
        "Liquidity freeze",
        "No new funding; burn from cash only.",
    ),
    Scenario(
        ScenarioId.CREDIT_SPREAD_WIDENING,
        "Credit spread widening",
        "Refi cost +150bps; debt servicing pressure.",
    ),
    Scenario(
        ScenarioId.VOLATILITY_SPIKE,
        "Market volatility spike",
        "VaR and capital at risk increase.",
    ),
)

_BY_ID = {s.id: s for s in SCENARIOS}


def get_scenario(scenario_id: ScenarioId | str) -> Scenario:
    """Look up a catalog entry; raises ValueError for unknown ids."""
    try:
        key = ScenarioId(scenario_id)
    except ValueError:
        raise ValueError(f"Unknown scenario id: {scenario_id!r}") from None
    return _BY_ID[key]


def scenario_ids() -> list[str]:
    return [s.id.value for s in SCENARIOS]


@dataclass(frozen=True)
class ScenarioOverrides:
    """
    Optional user-supplied shock magnitudes.

    None means "use the default". Use resolve() to get the effective values;
    non-finite or out-of-domain inputs fall back to the default for that field.
    """

    interest_rate_bps: float | None = None
    revenue_down_pct: float | None = None
    credit_spread_bps: float | None = None
    liquidity_burn_multiplier: float | None = None
    volatility_multiplier: float | None = None

    @classmethod
    def from_dict(cls, raw: dict | None) -> "ScenarioOverrides":
        """Build from a loose mapping; unrecognized keys are dropped."""
        if not raw:
            return cls()
        known = {k: raw[k] for k in cls.__dataclass_fields__ if k in raw}
        return cls(**known)

    def resolve(self, defaults: OverrideDefaults = OVERRIDE_DEFAULTS) -> "ResolvedOverrides":
        return ResolvedOverrides(
            interest_rate_bps=_finite_or(self.interest_rate_bps, defaults.interest_rate_bps),
            revenue_down_pct=min(
                100.0,
                max(0.0, _finite_or(self.revenue_down_pct, defaults.revenue_down_pct)),
            ),
            credit_spread_bps=_finite_or(self.credit_spread_bps, defaults.credit_spread_bps),
            liquidity_burn_multiplier=_positive_or(
                self.liquidity_burn_multiplier, defaults.liquidity_burn_multiplier
            ),
            volatility_multiplier=_positive_or(
                self.volatility_multiplier, defaults.volatility_multiplier
            ),
        )


@dataclass(frozen=True)
class ResolvedOverrides:
    """Effective shock magnitudes after defaulting and clamping."""

    interest_rate_bps: float
    revenue_down_pct: float
    credit_spread_bps: float
    liquidity_burn_multiplier: float
    volatility_multiplier: float


def _finite_or(value, default: float) -> float:
    if value is None or isinstance(value, bool):
        return float(default)
    try:
        v = float(value)
    except (TypeError, ValueError):
        return float(default)
    return v if math.isfinite(v) else float(default)


def _positive_or(value, default: float) -> float:
    v = _finite_or(value, default)
    return v if v > 0.0 else float(default)
