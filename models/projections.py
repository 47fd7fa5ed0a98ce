"""
Monthly trajectories for capital-ratio deterioration and cash burn.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from config.params import PROJECTION, ProjectionParams


@dataclass(frozen=True)
class ProjectionPoint:
    month: int
    value: float


def capital_decay(
    baseline_capital_ratio: float | None,
    stressed_capital_ratio: float | None,
    params: ProjectionParams = PROJECTION,
) -> float:
    """Total fractional decay of the capital ratio over the horizon."""
    if (
        stressed_capital_ratio is not None
        and baseline_capital_ratio is not None
        and baseline_capital_ratio > 0.0
    ):
        return 1.0 - stressed_capital_ratio / baseline_capital_ratio
    return params.default_decay


def capital_deterioration(
    baseline_capital_ratio: float | None,
    stressed_capital_ratio: float | None,
    params: ProjectionParams = PROJECTION,
) -> list[ProjectionPoint]:
    """
    Linear glide from the baseline ratio toward the stressed ratio.

    ratio(m) = clip(baseline * (1 - decay * m / months), 0, 1)
    All points are 0 when the baseline ratio is unknown.
    """
    months = np.arange(params.months + 1)
    if baseline_capital_ratio is None:
        ratios = np.zeros(months.size)
    else:
        decay = capital_decay(baseline_capital_ratio, stressed_capital_ratio, params)
        ratios = baseline_capital_ratio * (1.0 - decay * months / params.months)
        ratios = np.clip(ratios, 0.0, 1.0)
    return [ProjectionPoint(int(m), float(r)) for m, r in zip(months, ratios)]


def liquidity_burn(
    cash: float,
    stressed_monthly_burn: float | None,
    params: ProjectionParams = PROJECTION,
) -> list[ProjectionPoint]:
    """
    Cash balance at each month under a constant burn.

    Burn defaults to cash / 12 when the stressed burn is unknown. The running
    balance may go negative; reported values are floored at zero.
    """
    burn = stressed_monthly_burn if stressed_monthly_burn is not None else cash / 12.0
    points = []
    running = cash
    for m in range(params.months + 1):
        points.append(ProjectionPoint(m, max(0.0, running)))
        running -= burn
    return points
