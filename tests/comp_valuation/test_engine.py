"""
Integration tests for ComparableValuationEngine.

Tests the complete valuation flow from subject and cohort to fair AAV
and fair contract length.
"""

import logging

import pytest

from comp_valuation.context import ValuationInputs
from comp_valuation.engine import ComparableValuationEngine
from comp_valuation.exceptions import SubjectNotFoundError, UnknownCategoryError
from comp_valuation.models import PerformanceRecord
from comp_valuation.sources import InMemoryCohortSource, SubjectProfile
from comp_valuation.testing.benchmark_cases import scaled_stats


# ===== Fixtures =====


@pytest.fixture
def inputs_for(base_stats):
    """Factory for 1B inputs with zero inflation unless overridden."""

    def _inputs(cohort, subject_stats=None, age=28, **kwargs):
        kwargs.setdefault("inflation_percent", 0.0)
        return ValuationInputs.for_position(
            subject=PerformanceRecord(
                values=dict(subject_stats if subject_stats is not None else base_stats),
                age=age,
            ),
            cohort=cohort,
            position="1B",
            **kwargs,
        )

    return _inputs


# ===== Basic Functionality Tests =====


class TestBasicFunctionality:
    """Tests for end-to-end valuations."""

    def test_single_comp_with_inflation(self, engine, inputs_for, make_contract):
        """27M x 6 signed 2022 at 4%: 30.37M x 6 years."""
        inputs = inputs_for([make_contract(signed_year=2022)], inflation_percent=4.0)

        result = engine.valuate(inputs)

        assert result.baseline_aav == pytest.approx(30.37, abs=0.01)
        assert result.raw_baseline_aav == 27.0
        assert result.aav_multiplier == pytest.approx(1.0)
        assert result.fair_aav == pytest.approx(30.37, abs=0.01)
        assert result.fair_years == 6.0
        assert result.cohort_size == 1
        assert not result.degenerate

    def test_identity_subject_gets_baseline(self, engine, inputs_for, make_contract):
        result = engine.valuate(inputs_for([make_contract("a"), make_contract("b")]))
        assert result.fair_aav == pytest.approx(result.baseline_aav)
        assert result.fair_years == 6.0

    def test_outperformer_is_capped(self, engine, inputs_for, make_contract):
        stats = scaled_stats(1.5, 0.5, def_delta=10.0, bsr_delta=5.0)
        result = engine.valuate(inputs_for([make_contract()], subject_stats=stats))

        assert result.raw_multiplier > 1.3
        assert result.aav_multiplier == 1.3
        assert result.fair_aav == pytest.approx(35.1)
        assert result.fair_years == 6.5

    def test_underperformer_is_floored(self, engine, inputs_for, make_contract):
        result = engine.valuate(
            inputs_for([make_contract()], subject_stats=scaled_stats(0.6, 1.5))
        )
        assert result.aav_multiplier == 0.8
        assert result.fair_aav == pytest.approx(21.6)

    def test_old_subject_hits_length_floor(self, engine, inputs_for, make_contract):
        """35-year-old vs 29-year-old signings floors at three years."""
        result = engine.valuate(inputs_for([make_contract(age=29)], age=35))

        assert result.years_adjustment.age_multiplier == 0.4
        assert result.years_adjustment.absolute_age_penalty == pytest.approx(2.7)
        assert result.fair_years == 3.0

    def test_comparisons_cover_all_categories(self, engine, inputs_for, make_contract):
        result = engine.valuate(inputs_for([make_contract()]))
        assert len(result.comparisons) == 12
        assert set(result.cohort_averages) == set(engine.registry.keys)


# ===== Invariant Tests =====


class TestInvariants:
    """Properties that hold for every valuation."""

    @pytest.mark.parametrize("factor", [0.1, 0.5, 0.9, 1.0, 1.1, 2.0, 10.0])
    def test_multiplier_bounds(self, engine, inputs_for, make_contract, factor):
        stats = scaled_stats(factor, 1 / factor, def_delta=(factor - 1) * 20)
        result = engine.valuate(inputs_for([make_contract()], subject_stats=stats))

        assert 0.8 <= result.aav_multiplier <= 1.3
        assert 0.8 * result.baseline_aav <= result.fair_aav <= 1.3 * result.baseline_aav

    @pytest.mark.parametrize("age", [20, 24, 27, 30, 33, 38, 45])
    def test_years_bounds(self, engine, inputs_for, make_contract, age):
        result = engine.valuate(inputs_for([make_contract(age=28)], age=age))

        assert result.fair_years >= 3.0
        assert result.fair_years <= max(3.0, result.baseline_years + 1)
        assert (result.fair_years * 2) == int(result.fair_years * 2)

    def test_inflation_never_lowers_baseline(self, engine, inputs_for, make_contract):
        cohort = [make_contract("a", signed_year=2019), make_contract("b", signed_year=2023)]
        baselines = [
            engine.valuate(inputs_for(cohort, inflation_percent=rate)).baseline_aav
            for rate in (0.0, 2.0, 4.0, 8.0)
        ]
        assert baselines == sorted(baselines)

    def test_valuation_is_deterministic(self, engine, inputs_for, make_contract):
        inputs = inputs_for(
            [make_contract("a", signed_year=2021), make_contract("b", annual_value=31.0)],
            subject_stats=scaled_stats(1.07, 0.9),
            age=31,
            inflation_percent=3.5,
        )
        assert engine.valuate(inputs).to_dict() == engine.valuate(inputs).to_dict()

    def test_inputs_not_mutated(self, engine, inputs_for, make_contract):
        inputs = inputs_for([make_contract("a"), make_contract("b", included=False)])
        before = inputs.to_dict()
        engine.valuate(inputs)
        assert inputs.to_dict() == before

    def test_impacts_sum_to_adjustment(self, engine, inputs_for, make_contract):
        result = engine.valuate(
            inputs_for([make_contract()], subject_stats=scaled_stats(1.05, 0.95))
        )
        assert 0.8 < result.raw_multiplier < 1.3
        total_impact = sum(c.aav_impact for c in result.comparisons)
        assert total_impact == pytest.approx(result.aav_adjustment)


# ===== Selection and Toggle Tests =====


class TestSelectionAndToggles:
    """Tests for cohort selection and adjustment toggles."""

    def test_deselected_comps_are_ignored(self, engine, inputs_for, make_contract):
        cohort = [
            make_contract("kept", annual_value=20.0),
            make_contract("dropped", annual_value=40.0, included=False),
        ]
        result = engine.valuate(inputs_for(cohort))
        assert result.baseline_aav == pytest.approx(20.0)
        assert "dropped" not in result.adjusted_values

    def test_empty_cohort_is_degenerate(self, engine, inputs_for, make_contract):
        result = engine.valuate(inputs_for([make_contract(included=False)]))

        assert result.degenerate
        assert result.fair_aav == 0.0
        assert result.baseline_aav == 0.0
        assert result.aav_multiplier == 1.0
        assert result.fair_years == 3.0
        assert result.comparisons == []

    def test_toggles_off_return_baseline(self, engine, inputs_for, make_contract):
        stats = scaled_stats(1.5, 0.5)
        result = engine.valuate(
            inputs_for([make_contract()], subject_stats=stats, age=34,
                       adjust_aav=False, adjust_years=False)
        )
        assert result.fair_aav == pytest.approx(result.baseline_aav)
        assert result.fair_years == 6.0
        # Breakdown is still reported
        assert result.raw_multiplier > 1.3

    def test_unknown_weight_key_raises(self, engine, base_record, make_contract):
        inputs = ValuationInputs(
            subject=base_record, cohort=[make_contract()], weights={"fg_WAR": 0.3}
        )
        with pytest.raises(UnknownCategoryError):
            engine.valuate(inputs)

    def test_unknown_weight_key_raises_for_empty_cohort(self, engine, base_record):
        inputs = ValuationInputs(subject=base_record, weights={"fg_WAR": 0.3})
        with pytest.raises(UnknownCategoryError):
            engine.valuate(inputs)

    def test_unknown_subject_stat_raises(self, engine, make_contract):
        subject = PerformanceRecord(values={"fg_xwOBA": 0.400, "fg_WAR": 6.0}, age=28)
        inputs = ValuationInputs(subject=subject, cohort=[make_contract()])
        with pytest.raises(UnknownCategoryError) as exc_info:
            engine.valuate(inputs)
        assert exc_info.value.key == "fg_WAR"

    def test_unknown_subject_stat_raises_for_empty_cohort(self, engine):
        subject = PerformanceRecord(values={"fg_WAR": 6.0}, age=28)
        with pytest.raises(UnknownCategoryError):
            engine.valuate(ValuationInputs(subject=subject))

    def test_unknown_cohort_stat_raises(self, engine, base_record, base_stats, make_contract):
        stats = dict(base_stats, fg_WAR=4.5)
        inputs = ValuationInputs(
            subject=base_record,
            cohort=[make_contract(), make_contract("comp-2", stats=stats)],
        )
        with pytest.raises(UnknownCategoryError) as exc_info:
            engine.valuate(inputs)
        assert exc_info.value.key == "fg_WAR"

    def test_deselected_member_stats_not_checked(
        self, engine, base_record, base_stats, make_contract
    ):
        stats = dict(base_stats, fg_WAR=4.5)
        inputs = ValuationInputs(
            subject=base_record,
            cohort=[make_contract(), make_contract("comp-2", stats=stats, included=False)],
        )
        assert engine.valuate(inputs).cohort_size == 1

    def test_sparse_data_scores_shared_categories(self, engine, make_contract):
        subject = PerformanceRecord(values={"fg_xwOBA": 0.385}, age=28)
        inputs = ValuationInputs(
            subject=subject,
            cohort=[make_contract(stats={"fg_xwOBA": 0.350, "fg_PA": 600.0})],
            inflation_percent=0.0,
        )
        result = engine.valuate(inputs)
        assert [c.key for c in result.comparisons] == ["fg_xwOBA"]
        assert result.aav_multiplier == pytest.approx(1.1)

    def test_valuate_batch(self, engine, inputs_for, make_contract):
        results = engine.valuate_batch([
            inputs_for([make_contract()]),
            inputs_for([make_contract(included=False)]),
        ])
        assert len(results) == 2
        assert results[1].degenerate


# ===== Source Integration Tests =====


class TestValuateFromSource:
    """Tests for valuations resolved through a cohort source."""

    @pytest.fixture
    def source(self, base_stats, make_contract):
        subject = SubjectProfile(
            subject_id="subject-1",
            name="Test Slugger",
            position="1B",
            performance=PerformanceRecord(values=dict(base_stats), age=28),
        )
        return InMemoryCohortSource(
            subjects=[subject],
            contracts=[
                make_contract("comp-a", annual_value=24.0, signed_year=2025),
                make_contract("comp-b", annual_value=30.0, signed_year=2025),
                make_contract("comp-ss", annual_value=50.0, position="SS"),
            ],
            filter_by_position=True,
        )

    def test_filters_by_position(self, engine, source):
        result = engine.valuate_from_source("subject-1", source, inflation_percent=0.0)
        assert result.cohort_size == 2
        assert result.baseline_aav == pytest.approx(27.0)

    def test_selected_ids(self, engine, source):
        result = engine.valuate_from_source(
            "Test Slugger", source, selected_ids=["comp-b"], inflation_percent=0.0
        )
        assert result.baseline_aav == pytest.approx(30.0)

    def test_unknown_subject(self, engine, source):
        with pytest.raises(SubjectNotFoundError):
            engine.valuate_from_source("nobody", source)

    def test_other_positions_fill_cohort(self, engine, base_stats, make_contract):
        subject = SubjectProfile(
            subject_id="subject-1",
            name="Test Slugger",
            position="1B",
            performance=PerformanceRecord(values=dict(base_stats), age=28),
        )
        source = InMemoryCohortSource(
            subjects=[subject],
            contracts=[
                make_contract("comp-ss", annual_value=30.0, position="SS"),
                make_contract("comp-a", annual_value=24.0),
            ],
        )
        result = engine.valuate_from_source("subject-1", source, inflation_percent=0.0)
        assert result.cohort_size == 2
        assert result.baseline_aav == pytest.approx(27.0)

    def test_unknown_subject_is_logged(self, engine, source, caplog):
        with caplog.at_level(logging.WARNING, logger="comp_valuation.engine"):
            with pytest.raises(SubjectNotFoundError):
                engine.valuate_from_source("nobody", source)
        assert "SubjectNotFoundError" in caplog.text
        assert "subject_id=nobody" in caplog.text


class TestCustomStages:
    """Tests for dependency injection of stages."""

    def test_custom_aggregator_bounds(self, inputs_for, make_contract):
        from comp_valuation.stages import MultiplierAggregator

        class WideAggregator(MultiplierAggregator):
            MULTIPLIER_MAX = 2.0

        engine = ComparableValuationEngine(aggregator=WideAggregator())
        result = engine.valuate(
            inputs_for([make_contract()], subject_stats=scaled_stats(1.5, 0.5))
        )
        assert result.aav_multiplier > 1.3
