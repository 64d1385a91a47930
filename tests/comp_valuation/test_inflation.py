"""
Unit tests for the inflation normalizer.
"""

import pytest

from comp_valuation.stages import InflationNormalizer


@pytest.fixture
def normalizer():
    return InflationNormalizer()


class TestAdjustValue:
    """Tests for single-value present-valuing."""

    def test_three_years_at_four_percent(self, normalizer):
        assert normalizer.adjust_value(27.0, 2022, 0.04, 2025) == pytest.approx(30.371, abs=1e-3)

    def test_current_year_unchanged(self, normalizer):
        assert normalizer.adjust_value(27.0, 2025, 0.04, 2025) == 27.0

    def test_future_signing_not_discounted(self, normalizer):
        assert normalizer.adjust_value(27.0, 2027, 0.04, 2025) == 27.0

    def test_missing_signing_year_unchanged(self, normalizer):
        assert normalizer.adjust_value(27.0, None, 0.04, 2025) == 27.0


class TestNormalizeRate:
    """Tests for rate conversion."""

    def test_percent_to_rate(self, normalizer):
        assert normalizer.normalize_rate(4.0) == pytest.approx(0.04)

    def test_negative_rate_clamps_to_zero(self, normalizer, caplog):
        assert normalizer.normalize_rate(-2.0) == 0.0
        assert "clamped" in caplog.text


class TestBuildBaseline:
    """Tests for cohort baseline construction."""

    def test_empty_cohort(self, normalizer):
        baseline = normalizer.build_baseline([], 4.0, 2025)
        assert baseline.is_empty
        assert baseline.baseline_aav == 0.0
        assert baseline.adjusted_values == {}

    def test_averages(self, normalizer, make_contract):
        contracts = [
            make_contract("a", annual_value=20.0, contract_years=4, signed_year=2024),
            make_contract("b", annual_value=30.0, contract_years=8, signed_year=2025),
        ]
        baseline = normalizer.build_baseline(contracts, 10.0, 2025)

        assert baseline.adjusted_values == {"a": pytest.approx(22.0), "b": pytest.approx(30.0)}
        assert baseline.baseline_aav == pytest.approx(26.0)
        assert baseline.raw_baseline_aav == pytest.approx(25.0)
        assert baseline.baseline_years == pytest.approx(6.0)
        assert baseline.avg_signed_year == pytest.approx(2024.5)
        assert baseline.cohort_size == 2

    def test_zero_inflation_matches_raw(self, normalizer, make_contract):
        contracts = [make_contract("a", signed_year=2015), make_contract("b", signed_year=2019)]
        baseline = normalizer.build_baseline(contracts, 0.0, 2025)
        assert baseline.baseline_aav == baseline.raw_baseline_aav
