"""
Valuation stages, applied in order by the engine.

Inflation normalizer -> performance comparator -> multiplier aggregator
-> years adjustment.
"""

from .inflation import InflationNormalizer, CohortBaseline
from .comparator import WeightedPerformanceComparator
from .aggregator import MultiplierAggregator, AggregateMultiplier
from .years import YearsAdjustmentEngine

__all__ = [
    'InflationNormalizer',
    'CohortBaseline',
    'WeightedPerformanceComparator',
    'MultiplierAggregator',
    'AggregateMultiplier',
    'YearsAdjustmentEngine',
]
