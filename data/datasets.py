"""
Financial dataset sources: the built-in demo company and JSON files.

A dataset file holds one object with any of revenue, ebitda, debt, cash,
equity, working_capital, interest_rate and monthly_burn, plus an optional
name. Missing or non-numeric metrics load as unknown.
"""

import json
from pathlib import Path

from models.financials import FinancialInputs

SAMPLE_DATASET = {
    "name": "Sample company (demo)",
    "revenue": 100_000_000.0,
    "ebitda": 18_000_000.0,
    "debt": 45_000_000.0,
    "cash": 12_000_000.0,
    "equity": 55_000_000.0,
    "working_capital": 8_000_000.0,
}


def sample_inputs() -> FinancialInputs:
    return FinancialInputs.from_dict(SAMPLE_DATASET)


def load_dataset(path: str | Path) -> tuple[str, FinancialInputs]:
    """Read a dataset file; returns (name, inputs). Raises ValueError if unreadable."""
    path = Path(path)
    try:
        with open(path) as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Could not read dataset {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Dataset {path} must contain a JSON object")
    name = str(raw.get("name") or path.stem)
    return name, FinancialInputs.from_dict(raw)
