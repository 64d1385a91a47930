"""
Position-specific category weight profiles.

Weights are configuration, keyed by position code. Positions without a
profile fall back to the registry's default weights.
"""

from typing import Dict, List, Optional

from comp_valuation.categories.registry import CategoryRegistry, DEFAULT_REGISTRY


POSITION_WEIGHTS: Dict[str, Dict[str, float]] = {
    "C": {
        "fg_xwOBA": 0.28, "fg_PA": 0.14, "sc_EV_brl_pa": 0.085, "fg_xSLG": 0.075,
        "fg_BB%": 0.09, "fg_K%": 0.07, "fg_Contact%": 0.05, "sc_EV_ev50": 0.04,
        "fg_Def": 0.10, "fg_BsR": 0.015, "fg_maxEV": 0.03, "fg_HardHit%": 0.025,
    },
    "SS": {
        "fg_xwOBA": 0.28, "fg_PA": 0.14, "sc_EV_brl_pa": 0.09, "fg_xSLG": 0.08,
        "fg_BB%": 0.09, "fg_K%": 0.065, "fg_Contact%": 0.05, "sc_EV_ev50": 0.035,
        "fg_Def": 0.08, "fg_BsR": 0.03, "fg_maxEV": 0.04, "fg_HardHit%": 0.02,
    },
    "CF": {
        "fg_xwOBA": 0.28, "fg_PA": 0.14, "sc_EV_brl_pa": 0.09, "fg_xSLG": 0.075,
        "fg_BB%": 0.09, "fg_K%": 0.07, "fg_Contact%": 0.05, "sc_EV_ev50": 0.035,
        "fg_Def": 0.08, "fg_BsR": 0.04, "fg_maxEV": 0.035, "fg_HardHit%": 0.015,
    },
    "2B": {
        "fg_xwOBA": 0.28, "fg_PA": 0.14, "sc_EV_brl_pa": 0.10, "fg_xSLG": 0.085,
        "fg_BB%": 0.09, "fg_K%": 0.07, "fg_Contact%": 0.05, "sc_EV_ev50": 0.04,
        "fg_Def": 0.05, "fg_BsR": 0.03, "fg_maxEV": 0.04, "fg_HardHit%": 0.025,
    },
    "3B": {
        "fg_xwOBA": 0.28, "fg_PA": 0.14, "sc_EV_brl_pa": 0.10, "fg_xSLG": 0.10,
        "fg_BB%": 0.09, "fg_K%": 0.07, "fg_Contact%": 0.05, "sc_EV_ev50": 0.04,
        "fg_Def": 0.04, "fg_BsR": 0.02, "fg_maxEV": 0.05, "fg_HardHit%": 0.02,
    },
    "LF": {
        "fg_xwOBA": 0.28, "fg_PA": 0.14, "sc_EV_brl_pa": 0.10, "fg_xSLG": 0.11,
        "fg_BB%": 0.09, "fg_K%": 0.07, "fg_Contact%": 0.04, "sc_EV_ev50": 0.04,
        "fg_Def": 0.03, "fg_BsR": 0.01, "fg_maxEV": 0.06, "fg_HardHit%": 0.03,
    },
    "RF": {
        "fg_xwOBA": 0.28, "fg_PA": 0.14, "sc_EV_brl_pa": 0.10, "fg_xSLG": 0.11,
        "fg_BB%": 0.09, "fg_K%": 0.07, "fg_Contact%": 0.04, "sc_EV_ev50": 0.04,
        "fg_Def": 0.03, "fg_BsR": 0.01, "fg_maxEV": 0.06, "fg_HardHit%": 0.03,
    },
    "1B": {
        "fg_xwOBA": 0.28, "fg_PA": 0.14, "sc_EV_brl_pa": 0.10, "fg_xSLG": 0.105,
        "fg_BB%": 0.09, "fg_K%": 0.07, "fg_Contact%": 0.05, "sc_EV_ev50": 0.04,
        "fg_Def": 0.02, "fg_BsR": 0.02, "fg_maxEV": 0.055, "fg_HardHit%": 0.03,
    },
    "DH": {
        "fg_xwOBA": 0.28, "fg_PA": 0.14, "sc_EV_brl_pa": 0.105, "fg_xSLG": 0.115,
        "fg_BB%": 0.09, "fg_K%": 0.07, "fg_Contact%": 0.05, "sc_EV_ev50": 0.04,
        "fg_Def": 0.00, "fg_BsR": 0.02, "fg_maxEV": 0.06, "fg_HardHit%": 0.03,
    },
}


def normalize_position(position: Optional[str]) -> str:
    """Upper-case and strip a position code; None becomes empty."""
    return (position or "").strip().upper()


def has_profile(position: Optional[str]) -> bool:
    """Whether a position has its own weight profile."""
    return normalize_position(position) in POSITION_WEIGHTS


def get_weights_for_position(
    position: Optional[str],
    registry: CategoryRegistry = DEFAULT_REGISTRY,
) -> Dict[str, float]:
    """
    Get the category weight vector for a position.

    Args:
        position: Position code (e.g., "SS", " cf ")
        registry: Registry providing fallback weights

    Returns:
        New dict of category key -> weight
    """
    profile = POSITION_WEIGHTS.get(normalize_position(position))
    if profile is not None:
        return dict(profile)
    return registry.default_weights()


def available_positions() -> List[str]:
    """Position codes that have a dedicated profile."""
    return list(POSITION_WEIGHTS)
