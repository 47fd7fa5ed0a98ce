"""
JSON-file store for financial datasets and stress runs.

Stands in for the database collaborator: insert/get/list by user, with
every read scoped to the owning user. The whole store is one JSON document,
rewritten on each insert.
"""

import json
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path

DATASET_FIELDS = (
    "name", "revenue", "ebitda", "debt", "cash", "equity", "working_capital",
    "interest_rate", "monthly_burn",
)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class RunStore:
    """Datasets and stress runs persisted to a single JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> dict:
        if not self.path.exists():
            return {"datasets": [], "stress_runs": []}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            raise ValueError(f"Run store {self.path} is unreadable: {exc}") from exc
        data.setdefault("datasets", [])
        data.setdefault("stress_runs", [])
        return data

    def _save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w") as f:
            json.dump(data, f, indent=2)
        tmp.replace(self.path)

    # ── datasets ────────────────────────────────────────────────
    def insert_dataset(self, user_id: str | None, dataset: dict) -> dict:
        row = {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            **{k: dataset.get(k) for k in DATASET_FIELDS},
            "created_at": _now(),
        }
        with self._lock:
            data = self._load()
            data["datasets"].append(row)
            self._save(data)
        return row

    def get_dataset(self, dataset_id: str, user_id: str | None) -> dict | None:
        for row in self._load()["datasets"]:
            if row["id"] == dataset_id and row["user_id"] == user_id:
                return row
        return None

    def list_datasets(self, user_id: str | None) -> list[dict]:
        rows = [r for r in self._load()["datasets"] if r["user_id"] == user_id]
        return sorted(rows, key=lambda r: r["created_at"], reverse=True)

    # ── stress runs ─────────────────────────────────────────────
    def insert_stress_run(
        self,
        user_id: str | None,
        dataset_id: str | None,
        scenario_name: str,
        scenario_params: dict,
        results: dict,
        fragility_score: int | None,
    ) -> dict:
        row = {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "dataset_id": dataset_id,
            "scenario_name": scenario_name,
            "scenario_params": scenario_params,
            "results": results,
            "fragility_score": fragility_score,
            "created_at": _now(),
        }
        with self._lock:
            data = self._load()
            data["stress_runs"].append(row)
            self._save(data)
        return row

    def get_stress_run(self, run_id: str, user_id: str | None) -> dict | None:
        for row in self._load()["stress_runs"]:
            if row["id"] == run_id and row["user_id"] == user_id:
                return row
        return None

    def list_stress_runs(self, user_id: str | None) -> list[dict]:
        rows = [r for r in self._load()["stress_runs"] if r["user_id"] == user_id]
        return sorted(rows, key=lambda r: r["created_at"], reverse=True)
