"""
Financial snapshot types and the ratio calculator shared by the baseline
and stressed states.

Every monetary field is optional. Unknown values count as zero in arithmetic,
and any ratio whose denominator is non-positive comes back as None rather than
a sentinel.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields

from config.params import DEFAULT_INTEREST_RATE

CORE_METRICS = ("revenue", "ebitda", "debt", "cash", "equity")


def nz(x: float | None) -> float:
    """Unknown (None/NaN/inf) -> 0.0, otherwise float(x)."""
    if x is None:
        return 0.0
    x = float(x)
    return x if math.isfinite(x) else 0.0


def optional_float(value) -> float | None:
    """Coerce to a finite float, or None when missing/non-finite/non-numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    return v if math.isfinite(v) else None


def safe_div(num: float, den: float) -> float | None:
    """num / den when den > 0, else None."""
    if den > 0.0:
        return num / den
    return None


@dataclass(frozen=True)
class FinancialInputs:
    """Balance-sheet / income-statement snapshot in a single currency unit."""

    revenue: float | None = None
    ebitda: float | None = None
    debt: float | None = None
    cash: float | None = None
    equity: float | None = None
    working_capital: float | None = None
    interest_rate: float | None = None
    # Decimal fraction; DEFAULT_INTEREST_RATE when None
    monthly_burn: float | None = None
    # Derived from revenue and EBITDA when None

    @classmethod
    def from_dict(cls, raw: dict) -> "FinancialInputs":
        """Build from a loose mapping, dropping non-finite or non-numeric values."""
        kwargs = {}
        for f in fields(cls):
            if f.name in raw:
                kwargs[f.name] = optional_float(raw[f.name])
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def has_any_metric(self) -> bool:
        return any(getattr(self, name) is not None for name in CORE_METRICS)

    def effective_rate(self, default: float = DEFAULT_INTEREST_RATE) -> float:
        rate = optional_float(self.interest_rate)
        return default if rate is None else rate

    def baseline_monthly_burn(self) -> float | None:
        """
        Explicit monthly burn, else (revenue - EBITDA) / 12 for positive revenue.
        """
        burn = optional_float(self.monthly_burn)
        if burn is not None:
            return burn
        revenue = nz(self.revenue)
        if revenue > 0.0:
            return (revenue - nz(self.ebitda)) / 12.0
        return None


@dataclass(frozen=True)
class RatioSet:
    """Ratios for one state (baseline or stressed)."""

    interest_expense: float
    dscr: float | None
    capital_ratio: float | None
    liquidity_runway_months: float | None
    var_95: float | None

    def to_dict(self) -> dict:
        return {
            "interestExpense": self.interest_expense,
            "dscr": self.dscr,
            "capitalRatio": self.capital_ratio,
            "liquidityRunwayMonths": self.liquidity_runway_months,
            "var95": self.var_95,
        }


def compute_ratios(
    inputs: FinancialInputs,
    rate: float,
    monthly_burn: float | None,
    var_95: float | None = None,
) -> RatioSet:
    """
    Compute coverage, solvency and liquidity ratios.

    interest_expense = debt * rate
    dscr             = ebitda / interest_expense          (None if expense <= 0)
    capital_ratio    = equity / (debt + equity)           (None if sum <= 0)
    runway_months    = cash / monthly_burn                (None if burn unknown or <= 0)

    var_95 is computed by the Monte Carlo engine and passed through.
    """
    debt = nz(inputs.debt)
    equity = nz(inputs.equity)

    interest_expense = debt * rate
    dscr = safe_div(nz(inputs.ebitda), interest_expense)
    capital_ratio = safe_div(equity, debt + equity)

    runway = None
    if monthly_burn is not None:
        runway = safe_div(nz(inputs.cash), monthly_burn)

    return RatioSet(
        interest_expense=interest_expense,
        dscr=dscr,
        capital_ratio=capital_ratio,
        liquidity_runway_months=runway,
        var_95=var_95,
    )
