"""
Comparable Valuation Engine Testing Package.

Provides a benchmark framework that pins the engine's formula against
hand-computed scenarios.

Classes:
    BenchmarkCase: A scenario with expected fair AAV and years ranges
    BenchmarkResult: Result of running a single case
    BenchmarkReport: Aggregate report of all results
    BenchmarkHarness: Runner for executing cases
    ReportGenerator: Text and JSON reports from results
"""

from comp_valuation.testing.benchmark_cases import (
    BenchmarkCase,
    BenchmarkResult,
    BenchmarkReport,
    BENCHMARK_CASES,
    get_cases_by_category,
    get_all_categories,
    CATEGORY_IDENTITY,
    CATEGORY_OUTPERFORMER,
    CATEGORY_UNDERPERFORMER,
    CATEGORY_AGE_EXTREME,
    CATEGORY_INFLATION,
    CATEGORY_DEGENERATE,
)
from comp_valuation.testing.test_harness import BenchmarkHarness, run_quick_benchmark
from comp_valuation.testing.report_generator import ReportGenerator, run_benchmark_with_report


__all__ = [
    # Case definitions
    "BenchmarkCase",
    "BenchmarkResult",
    "BenchmarkReport",
    "BENCHMARK_CASES",
    "get_cases_by_category",
    "get_all_categories",
    # Category constants
    "CATEGORY_IDENTITY",
    "CATEGORY_OUTPERFORMER",
    "CATEGORY_UNDERPERFORMER",
    "CATEGORY_AGE_EXTREME",
    "CATEGORY_INFLATION",
    "CATEGORY_DEGENERATE",
    # Classes
    "BenchmarkHarness",
    "ReportGenerator",
    "run_quick_benchmark",
    "run_benchmark_with_report",
]
