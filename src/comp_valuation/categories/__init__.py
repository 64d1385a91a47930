"""
Stat categories and position weight profiles.
"""

from .registry import (
    StatScale,
    StatCategory,
    CategoryRegistry,
    DEFAULT_CATEGORIES,
    DEFAULT_REGISTRY,
)
from .position_profiles import (
    POSITION_WEIGHTS,
    available_positions,
    get_weights_for_position,
    has_profile,
    normalize_position,
)

__all__ = [
    'StatScale',
    'StatCategory',
    'CategoryRegistry',
    'DEFAULT_CATEGORIES',
    'DEFAULT_REGISTRY',
    'POSITION_WEIGHTS',
    'available_positions',
    'get_weights_for_position',
    'has_profile',
    'normalize_position',
]
