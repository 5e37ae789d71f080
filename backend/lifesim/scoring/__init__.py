"""Financial health scoring: component curves, weighting and benchmarks."""
from lifesim.scoring.benchmarks import BenchmarkRegistry, compare_to_benchmarks
from lifesim.scoring.calculator import calculate_health_score, get_grade

__all__ = ["BenchmarkRegistry", "compare_to_benchmarks", "calculate_health_score", "get_grade"]
