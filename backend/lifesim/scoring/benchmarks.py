"""Peer benchmarks: age-group averages and percentile placement.

BenchmarkRegistry loads a benchmark table from DATA_DIR/benchmarks.json at
startup. Any object with a matching `get_benchmark` (e.g. the SQL repository)
can stand in as the provider.
"""
from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional, Protocol

from lifesim.config import settings
from lifesim.models.account import UserProfile
from lifesim.models.health import Benchmark, Benchmarks

logger = logging.getLogger(__name__)

DEFAULT_AGE = 30
DEFAULT_INCOME_BRACKET = "50K_75K"


class BenchmarkProvider(Protocol):
    def get_benchmark(self, age_group: str, income_bracket: str) -> Optional[Benchmark]:
        ...


class BenchmarkRegistry:
    """Singleton holding the benchmark table keyed by (age group, income bracket)."""

    _instance: "BenchmarkRegistry | None" = None

    def __init__(self) -> None:
        self.benchmarks: dict[tuple[str, str], Benchmark] = {}
        self._loaded = False
        self._data_dir: Path | None = None

    @classmethod
    def get(cls) -> "BenchmarkRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset singleton, mainly for testing."""
        cls._instance = None

    def load(self, data_dir: str | Path | None = None) -> None:
        self._data_dir = Path(data_dir or settings.DATA_DIR).resolve()
        path = self._data_dir / "benchmarks.json"
        self._loaded = True
        if not path.is_file():
            logger.warning("No benchmarks.json in %s, using default averages", self._data_dir)
            return

        data = json.loads(path.read_text())
        for row in data.get("benchmarks", []):
            benchmark = Benchmark.model_validate(row)
            self.benchmarks[(benchmark.age_group, benchmark.income_bracket)] = benchmark
        logger.info("Loaded %d benchmark rows", len(self.benchmarks))

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def get_benchmark(self, age_group: str, income_bracket: str) -> Optional[Benchmark]:
        return self.benchmarks.get((age_group, income_bracket))

    def get_status(self) -> dict[str, Any]:
        if not self._loaded:
            return {"status": "not_loaded"}
        return {"status": "loaded", "rows": len(self.benchmarks)}


def get_age_group(date_of_birth: date | None, as_of: date) -> str:
    age = as_of.year - date_of_birth.year if date_of_birth else DEFAULT_AGE
    if age < 25:
        return "18-24"
    if age < 35:
        return "25-34"
    if age < 45:
        return "35-44"
    if age < 55:
        return "45-54"
    if age < 65:
        return "55-64"
    return "65+"


def peer_percentile(score: float, group_average: float) -> float:
    """Place a score on a 0-100 scale with the group average at 50."""
    if score >= group_average:
        if group_average >= 100:
            return 100.0
        return 50 + round((score - group_average) / (100 - group_average) * 50)
    if group_average <= 0:
        return 0.0
    return round(score / group_average * 50)


def compare_to_benchmarks(
    score: int,
    profile: UserProfile | None,
    provider: BenchmarkProvider | None,
    as_of: date,
) -> Benchmarks:
    age_group = get_age_group(profile.date_of_birth if profile else None, as_of)
    income_bracket = (profile.annual_income_range if profile else None) or DEFAULT_INCOME_BRACKET

    benchmark = provider.get_benchmark(age_group, income_bracket) if provider else None
    group_average = (
        benchmark.avg_health_score if benchmark else settings.DEFAULT_AGE_GROUP_SCORE
    )
    return Benchmarks(
        national_average=settings.NATIONAL_AVERAGE_SCORE,
        age_group_average=group_average,
        peer_percentile=peer_percentile(score, group_average),
    )
