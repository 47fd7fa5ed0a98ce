"""
Executive risk brief payload.

Collects key metrics, a stress summary and an optional disclosure summary
into the structure handed to the document-rendering service. Disclosure
judgments come from an external analysis service and are passed in as-is.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone

FRAGILITY_RISK_THRESHOLD = 50
FRAGILITY_DERISK_THRESHOLD = 60
DSCR_RISK_THRESHOLD = 1.5
DISCLOSURE_RISK_THRESHOLD = 60

STANDING_RECOMMENDATIONS = (
    "Monitor liquidity runway and maintain contingency funding plans.",
    "Review debt maturities and refinancing options under rate stress.",
    "Track disclosure and regulatory developments; update risk factor disclosures as needed.",
)
NO_RISKS_PLACEHOLDER = "Run stress tests and 10-K analysis to quantify key risks."
KEY_METRICS = ("revenue", "ebitda", "debt", "cash", "equity")


def format_currency(n: float | None) -> str:
    """$1.23B / $4.56M / $7.8K / $12; em dash for unknown."""
    if n is None or (isinstance(n, float) and math.isnan(n)):
        return "—"
    if abs(n) >= 1e9:
        return f"${n / 1e9:.2f}B"
    if abs(n) >= 1e6:
        return f"${n / 1e6:.2f}M"
    if abs(n) >= 1e3:
        return f"${n / 1e3:.1f}K"
    return f"${n:.0f}"


def _stress_summary(run: dict | None) -> dict | None:
    if run is None:
        return None
    results = run.get("results") or {}
    baseline = results.get("baseline") or {}
    stressed = results.get("stressed") or {}
    return {
        "scenarioName": run.get("scenario_name"),
        "fragilityScore": run.get("fragility_score"),
        "baselineDscr": baseline.get("dscr"),
        "stressedDscr": stressed.get("dscr"),
        "baselineRunwayMonths": baseline.get("liquidityRunwayMonths"),
        "stressedRunwayMonths": stressed.get("liquidityRunwayMonths"),
    }


def key_risks(stress_run: dict | None, disclosure: dict | None) -> list[str]:
    risks = []
    if stress_run is not None:
        score = stress_run.get("fragility_score")
        if score is not None and score >= FRAGILITY_RISK_THRESHOLD:
            risks.append(
                f'Stress scenario "{stress_run.get("scenario_name")}" yields '
                f"fragility score {score}/100."
            )
        stressed = (stress_run.get("results") or {}).get("stressed") or {}
        dscr = stressed.get("dscr")
        if dscr is not None and dscr < DSCR_RISK_THRESHOLD:
            risks.append(
                f"Debt service coverage (DSCR) under stress is {dscr:.2f}x; "
                "refinancing and covenant risk elevated."
            )
    if disclosure is not None:
        score = disclosure.get("disclosure_risk_score") or 0
        if score >= DISCLOSURE_RISK_THRESHOLD:
            risks.append(
                f"10-K disclosure risk score is {score}/100; regulatory and "
                "litigation language warrants review."
            )
    if not risks:
        risks.append(NO_RISKS_PLACEHOLDER)
    return risks


def recommendations(stress_run: dict | None, disclosure: dict | None) -> list[str]:
    recs = list(STANDING_RECOMMENDATIONS)
    score = stress_run.get("fragility_score") if stress_run else None
    if score is not None and score >= FRAGILITY_DERISK_THRESHOLD:
        recs.insert(0, "Consider de-risking balance sheet (e.g. term out debt, increase cash) "
                       "given stress test results.")
    disclosure_score = disclosure.get("disclosure_risk_score") if disclosure else None
    if disclosure_score is not None and disclosure_score >= DISCLOSURE_RISK_THRESHOLD:
        recs.insert(0, "Strengthen risk factor and legal/regulatory disclosures; consider "
                       "legal review of sensitive language.")
    return recs


def build_report_payload(
    company_name: str,
    metrics: dict,
    stress_run: dict | None = None,
    disclosure: dict | None = None,
    generated_at: datetime | None = None,
) -> dict:
    """
    Assemble the brief.

    stress_run uses the persisted run shape (scenario_name, fragility_score,
    results); disclosure carries file_name, disclosure_risk_score and a
    results dict with an executiveSummary string.
    """
    generated_at = generated_at or datetime.now(timezone.utc)
    disclosure_summary = None
    if disclosure is not None:
        disclosure_summary = {
            "fileName": disclosure.get("file_name"),
            "disclosureRiskScore": disclosure.get("disclosure_risk_score"),
            "executiveSummary": (disclosure.get("results") or {}).get("executiveSummary") or "",
        }
    return {
        "generatedAt": generated_at.isoformat(),
        "companyName": company_name,
        "keyMetrics": {k: metrics.get(k) for k in KEY_METRICS},
        "keyRisks": key_risks(stress_run, disclosure),
        "stressSummary": _stress_summary(stress_run),
        "disclosureSummary": disclosure_summary,
        "recommendations": recommendations(stress_run, disclosure),
    }
