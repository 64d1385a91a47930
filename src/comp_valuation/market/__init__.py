"""
Market positioning of valuations against the comparable cohort.
"""

from .comparison import MarketComparator, MarketComparison

__all__ = [
    'MarketComparator',
    'MarketComparison',
]
