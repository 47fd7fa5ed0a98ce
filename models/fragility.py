"""
Fragility score: additive rule checklist over the stressed ratios.

Penalties are summed without intermediate caps; only the final score is
clamped to [0, 100] and rounded. The weights are a provisional heuristic,
not a calibrated model.
"""

from __future__ import annotations

import logging
import math

from config.params import FRAGILITY, FragilityParams
from models.financials import RatioSet

LOGGER = logging.getLogger(__name__)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def fragility_penalties(
    stressed: RatioSet,
    equity: float,
    params: FragilityParams = FRAGILITY,
) -> list[tuple[str, float]]:
    """List of (rule, penalty) pairs that fired, in checklist order."""
    fired = []
    if stressed.dscr is not None and stressed.dscr < params.dscr_warning:
        fired.append(("dscr_below_warning", params.dscr_warning_penalty))
    if stressed.dscr is not None and stressed.dscr < params.dscr_breach:
        fired.append(("dscr_below_breach", params.dscr_breach_penalty))
    if (stressed.capital_ratio is not None
            and stressed.capital_ratio < params.capital_ratio_floor):
        fired.append(("capital_ratio_low", params.capital_ratio_penalty))
    if (stressed.liquidity_runway_months is not None
            and stressed.liquidity_runway_months < params.runway_floor_months):
        fired.append(("runway_short", params.runway_penalty))
    if (stressed.var_95 is not None and equity > 0.0
            and stressed.var_95 / equity > params.var_equity_ceiling):
        fired.append(("var_exceeds_equity_share", params.var_penalty))
    return fired


def fragility_score(
    stressed: RatioSet,
    equity: float,
    params: FragilityParams = FRAGILITY,
) -> int:
    """
    0-100 fragility score.

    equity is the baseline equity (unknown -> 0); the VaR rule only applies
    when it is positive.
    """
    fired = fragility_penalties(stressed, equity, params)
    score = params.base_score + sum(p for _, p in fired)
    score = min(params.max_score, max(params.min_score, score))
    LOGGER.debug("fragility rules fired: %s -> %.1f", [name for name, _ in fired], score)
    return _round_half_up(score)
