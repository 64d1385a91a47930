"""
Pytest configuration for test discovery and imports.

Provides fixtures for testing including:
- Engine instance
- Baseline performance records
- Reference contract factory
"""

import sys
from pathlib import Path
from typing import Dict, Optional

import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Configure pytest - runs very early in startup.

    src must come first so the working tree wins over any installed copy.
    """
    new_path = [p for p in sys.path if p != str(tests_path) and p != str(src_path)]
    new_path.insert(0, str(src_path))
    sys.path[:] = new_path


# ============================================================================
# ENGINE FIXTURES
# ============================================================================

@pytest.fixture
def engine():
    """Default ComparableValuationEngine instance."""
    from comp_valuation.engine import ComparableValuationEngine
    return ComparableValuationEngine()


# ============================================================================
# PERFORMANCE FIXTURES
# ============================================================================

@pytest.fixture
def base_stats() -> Dict[str, float]:
    """Mid-career hitter reporting all twelve categories."""
    from comp_valuation.testing.benchmark_cases import BASE_STATS
    return dict(BASE_STATS)


@pytest.fixture
def base_record(base_stats):
    """Age-28 subject with the baseline stat line."""
    from comp_valuation.models import PerformanceRecord
    return PerformanceRecord(values=base_stats, age=28)


@pytest.fixture
def make_contract(base_stats):
    """
    Factory for reference contracts.

    Defaults to a 27M x 6 year deal signed in 2025 by a 28-year-old with
    the baseline stat line.
    """
    from comp_valuation.models import PerformanceRecord, ReferenceContract

    def _make(
        contract_id: str = "comp-1",
        annual_value: float = 27.0,
        contract_years: float = 6,
        signed_year: Optional[int] = 2025,
        age: Optional[float] = 28,
        stats: Optional[Dict[str, float]] = None,
        included: bool = True,
        name: str = "",
        position: str = "1B",
    ) -> ReferenceContract:
        return ReferenceContract(
            contract_id=contract_id,
            performance=PerformanceRecord(
                values=dict(stats if stats is not None else base_stats), age=age
            ),
            annual_value=annual_value,
            contract_years=contract_years,
            signed_year=signed_year,
            included_in_cohort=included,
            name=name,
            position=position,
        )

    return _make
