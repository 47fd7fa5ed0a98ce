"""
Caller boundary for the stress engine.

Validates loose request payloads before they reach the engine, maps
validation failures to 400-class errors and persists completed runs when a
store is supplied. Transport (HTTP routing, auth) lives outside this module.

Request payload:
    {
        "scenarioId": "interest_rate_200bps",
        "inputs": {"revenue": 1e8, "ebitda": 1.8e7, ...},   # or "datasetId"
        "overrides": {"interestRateBps": 300}                # optional
    }
"""

from __future__ import annotations

import logging
import math

import numpy as np

from config.params import SIM_CONFIG, SimulationConfig
from models.financials import FinancialInputs
from models.scenarios import SCENARIOS, ScenarioId, ScenarioOverrides
from models.stress_tests import run_stress

LOGGER = logging.getLogger(__name__)

_INPUT_ALIASES = {
    "interestRate": "interest_rate",
    "monthlyBurn": "monthly_burn",
    "workingCapital": "working_capital",
}
_OVERRIDE_ALIASES = {
    "interestRateBps": "interest_rate_bps",
    "revenueDownPct": "revenue_down_pct",
    "creditSpreadBps": "credit_spread_bps",
    "liquidityBurnMultiplier": "liquidity_burn_multiplier",
    "volatilityMultiplier": "volatility_multiplier",
}


class StressRequestError(ValueError):
    """Request rejected before reaching the engine."""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.status = status


def scenario_catalog_payload() -> list[dict]:
    """Read-only scenario list for UI population."""
    return [s.to_dict() for s in SCENARIOS]


def _normalize_keys(raw: dict, aliases: dict) -> dict:
    return {aliases.get(k, k): v for k, v in raw.items()}


def parse_scenario_id(raw) -> ScenarioId:
    if not raw:
        raise StressRequestError("scenarioId required")
    try:
        return ScenarioId(raw)
    except ValueError:
        raise StressRequestError("Invalid scenarioId") from None


def _coerce_metric(name: str, value) -> float | None:
    """Numbers and numeric strings pass; NaN/inf become unknown."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise StressRequestError(f"{name} must be a number")
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = float(value.replace(",", ""))
        except ValueError:
            raise StressRequestError(f"{name} must be a number") from None
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise StressRequestError(f"{name} must be a number") from None
    return v if math.isfinite(v) else None


def parse_financial_inputs(raw: dict | None) -> FinancialInputs:
    """Validate a metrics mapping; at least one core metric is required."""
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise StressRequestError("inputs must be an object")
    raw = _normalize_keys(raw, _INPUT_ALIASES)
    cleaned = {}
    for name in FinancialInputs.__dataclass_fields__:
        if name in raw:
            cleaned[name] = _coerce_metric(name, raw[name])
    inputs = FinancialInputs(**cleaned)
    if not inputs.has_any_metric():
        raise StressRequestError("supply at least one metric")
    return inputs


def parse_overrides(raw: dict | None) -> ScenarioOverrides:
    """Unrecognized keys are dropped; bad values fall back to defaults later."""
    if not raw:
        return ScenarioOverrides()
    if not isinstance(raw, dict):
        raise StressRequestError("overrides must be an object")
    return ScenarioOverrides.from_dict(_normalize_keys(raw, _OVERRIDE_ALIASES))


def run_stress_request(
    payload: dict,
    store=None,
    user_id: str | None = None,
    rng: np.random.Generator | None = None,
    config: SimulationConfig = SIM_CONFIG,
) -> dict:
    """
    Validate, run and optionally persist one stress run.

    With a store, "datasetId" resolves the inputs from a saved dataset (it takes
    precedence over "inputs") and the result is recorded as a stress run for
    user_id. A datasetId without a store is rejected.
    """
    if not isinstance(payload, dict):
        raise StressRequestError("request body must be an object")

    scenario_id = parse_scenario_id(payload.get("scenarioId", payload.get("scenario_id")))
    dataset_id = payload.get("datasetId", payload.get("dataset_id"))

    if dataset_id is not None and store is None:
        raise StressRequestError("datasetId requires a dataset store")
    if dataset_id is not None:
        dataset = store.get_dataset(dataset_id, user_id)
        if dataset is None:
            raise StressRequestError("Dataset not found", status=404)
        inputs = parse_financial_inputs(dataset)
    else:
        inputs = parse_financial_inputs(payload.get("inputs"))

    overrides = parse_overrides(payload.get("overrides"))
    result = run_stress(inputs, scenario_id, overrides, rng=rng, config=config)
    body = result.to_dict()

    if store is not None:
        store.insert_stress_run(
            user_id=user_id,
            dataset_id=dataset_id,
            scenario_name=result.scenario_name,
            scenario_params={"scenarioId": scenario_id.value, **(payload.get("overrides") or {})},
            results=body,
            fragility_score=result.fragility_score,
        )
    return body


def handle_stress_request(payload, store=None, user_id: str | None = None,
                          rng: np.random.Generator | None = None,
                          config: SimulationConfig = SIM_CONFIG) -> tuple[int, dict]:
    """(status, body) for a transport layer to serialize."""
    try:
        return 200, run_stress_request(payload, store, user_id, rng=rng, config=config)
    except StressRequestError as exc:
        return exc.status, {"error": str(exc)}
    except Exception as exc:
        LOGGER.exception("stress run failed")
        return 500, {"error": str(exc), "type": type(exc).__name__}
