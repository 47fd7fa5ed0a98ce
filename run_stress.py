"""
CLI entry point for the financial stress-testing engine.

Usage:
    python run_stress.py --sample --scenario interest_rate_200bps
    python run_stress.py --dataset company.json --all-scenarios --seed 7
    python run_stress.py --debt 4.5e7 --ebitda 1.8e7 --scenario revenue_down_20 --revenue-down-pct 35
    python run_stress.py --list-scenarios
"""

import argparse
import json
import sys
import time
from dataclasses import asdict
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent / ".env")

from api.stress import StressRequestError, parse_financial_inputs, scenario_catalog_payload
from config.params import SimulationConfig, load_params
from data.datasets import SAMPLE_DATASET, load_dataset
from data.run_store import RunStore
from models.price_simulation import make_rng
from models.scenarios import ScenarioOverrides, scenario_ids
from models.stress_tests import StressResult, StressTestEngine

METRIC_FLAGS = (
    "revenue", "ebitda", "debt", "cash", "equity", "working_capital",
    "interest_rate", "monthly_burn",
)


def _fmt(value, spec: str = ",.2f", suffix: str = "") -> str:
    if value is None:
        return "n/a"
    return f"{value:{spec}}{suffix}"


def resolve_inputs(args) -> tuple[str, dict]:
    """
    Merge dataset sources: --sample, then --dataset, then per-metric flags.

    Returns (name, raw metrics mapping).
    """
    name = "Command-line inputs"
    raw: dict = {}
    if args.sample:
        name = SAMPLE_DATASET["name"]
        raw.update({k: v for k, v in SAMPLE_DATASET.items() if k != "name"})
    if args.dataset:
        name, inputs = load_dataset(args.dataset)
        raw.update({k: v for k, v in inputs.to_dict().items() if v is not None})
    for flag in METRIC_FLAGS:
        value = getattr(args, flag)
        if value is not None:
            raw[flag] = value
    return name, raw


def print_result(result: StressResult) -> None:
    """Formatted text output for one run."""
    b, s = result.baseline, result.stressed
    print(f"SCENARIO: {result.scenario_name} ({result.scenario_id.value})")
    print("-" * 60)
    print(f"  {'Metric':<22} {'Baseline':>16} {'Stressed':>16}")
    print(f"  {'Interest expense':<22} {_fmt(b.interest_expense):>16} "
          f"{_fmt(s.interest_expense):>16}")
    print(f"  {'DSCR':<22} {_fmt(b.dscr, '.2f', 'x'):>16} {_fmt(s.dscr, '.2f', 'x'):>16}")
    print(f"  {'Capital ratio':<22} {_fmt(b.capital_ratio, '.2%'):>16} "
          f"{_fmt(s.capital_ratio, '.2%'):>16}")
    print(f"  {'Runway (months)':<22} {_fmt(b.liquidity_runway_months, '.1f'):>16} "
          f"{_fmt(s.liquidity_runway_months, '.1f'):>16}")
    print(f"  {'VaR 95%':<22} {_fmt(b.var_95):>16} {_fmt(s.var_95):>16}")
    print()

    cap = result.capital_deterioration
    cash = result.liquidity_burn
    print("PROJECTIONS (24 months)")
    print("-" * 60)
    for m in (0, 6, 12, 18, 24):
        print(f"  Month {m:>2}: capital ratio={cap[m].value:.2%}  cash={cash[m].value:,.0f}")
    print()
    print(f"  FRAGILITY SCORE: {result.fragility_score}/100")
    print()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Financial Stress-Testing Engine")
    parser.add_argument("--scenario", choices=scenario_ids(),
                        help="Scenario to run")
    parser.add_argument("--all-scenarios", action="store_true",
                        help="Run every catalog scenario")
    parser.add_argument("--list-scenarios", action="store_true",
                        help="Print the scenario catalog and exit")
    parser.add_argument("--sample", action="store_true",
                        help="Use the built-in sample company")
    parser.add_argument("--dataset", type=str, default=None,
                        help="Path to a JSON dataset file")
    for flag in METRIC_FLAGS:
        parser.add_argument(f"--{flag.replace('_', '-')}", dest=flag, type=float,
                            default=None)
    parser.add_argument("--interest-rate-bps", type=float, default=None,
                        help="Rate shock in bps (default: 200)")
    parser.add_argument("--revenue-down-pct", type=float, default=None,
                        help="Revenue decline in percent (default: 20)")
    parser.add_argument("--credit-spread-bps", type=float, default=None,
                        help="Credit spread add-on in bps (default: 150)")
    parser.add_argument("--liquidity-burn-multiplier", type=float, default=None,
                        help="Monthly burn multiplier (default: 1.5)")
    parser.add_argument("--volatility-multiplier", type=float, default=None,
                        help="Volatility multiplier (default: 1.5)")
    parser.add_argument("--simulations", type=int, default=None,
                        help="Number of Monte Carlo paths (default: 1000)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed (default: non-deterministic)")
    parser.add_argument("--antithetic", action="store_true",
                        help="Use antithetic variates in the VaR simulation")
    parser.add_argument("--json", action="store_true",
                        help="Output raw JSON instead of formatted text")
    parser.add_argument("--save-run", type=str, default=None,
                        help="Append results to a JSON run store at this path")
    parser.add_argument("--user-id", type=str, default="local",
                        help="Owner recorded with saved runs (default: local)")
    args = parser.parse_args(argv)

    if args.list_scenarios:
        print(json.dumps(scenario_catalog_payload(), indent=2))
        return 0

    if not args.scenario and not args.all_scenarios:
        parser.error("one of --scenario or --all-scenarios is required")

    params = load_params()
    base_config = params["sim_config"]
    config = SimulationConfig(
        n_simulations=args.simulations or base_config.n_simulations,
        horizon_days=base_config.horizon_days,
        dt=base_config.dt,
        seed=args.seed if args.seed is not None else base_config.seed,
        antithetic=args.antithetic or base_config.antithetic,
    )

    try:
        name, raw = resolve_inputs(args)
        inputs = parse_financial_inputs(raw)
    except (StressRequestError, ValueError) as exc:
        print(f"  [WARN] {exc}", file=sys.stderr)
        return 2

    overrides = ScenarioOverrides(
        interest_rate_bps=args.interest_rate_bps,
        revenue_down_pct=args.revenue_down_pct,
        credit_spread_bps=args.credit_spread_bps,
        liquidity_burn_multiplier=args.liquidity_burn_multiplier,
        volatility_multiplier=args.volatility_multiplier,
    )

    engine = StressTestEngine(
        inputs,
        config=config,
        volatility=params["volatility"],
        default_rate=params["default_interest_rate"],
    )
    rng = make_rng(config.seed)

    start = time.time()
    if args.all_scenarios:
        results = engine.run_all(overrides, rng=rng)
    else:
        results = [engine.run_scenario(args.scenario, overrides, rng=rng)]
    elapsed = time.time() - start

    if args.save_run:
        store = RunStore(args.save_run)
        dataset = store.insert_dataset(args.user_id, {"name": name, **inputs.to_dict()})
        for result in results:
            store.insert_stress_run(
                user_id=args.user_id,
                dataset_id=dataset["id"],
                scenario_name=result.scenario_name,
                scenario_params={
                    "scenarioId": result.scenario_id.value,
                    **{k: v for k, v in asdict(overrides).items() if v is not None},
                },
                results=result.to_dict(),
                fragility_score=result.fragility_score,
            )
        if not args.json:
            print(f"  [DATA] Saved {len(results)} run(s) to {args.save_run}")

    if args.json:
        payload = [r.to_dict() for r in results]
        print(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))
        return 0

    print(f"COMPANY: {name}")
    print(f"  Paths: {config.n_simulations:,}  Seed: "
          f"{'random' if config.seed is None else config.seed}")
    print()
    for result in results:
        print_result(result)
    print(f"Completed in {elapsed:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
