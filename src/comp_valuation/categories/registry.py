"""
Stat category registry for comparable valuation.

Defines the fixed set of performance categories the comparator scores,
each with a default weight, directionality, and display scale.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional

from comp_valuation.exceptions import UnknownCategoryError
from comp_valuation.settings import ValuationSettings


class StatScale(Enum):
    """Display scale for a stat category."""

    DECIMAL = "decimal"
    PERCENT = "percent"
    RATE = "rate"
    MPH = "mph"
    RUNS = "runs"
    COUNT = "count"


@dataclass(frozen=True)
class StatCategory:
    """
    A single scored performance category.

    Attributes:
        key: Category identifier used in weights and performance records
        label: Short display label
        higher_is_better: Direction of "better" for this stat
        weight: Default weight when no position profile overrides it
        scale: Display scale
        decimals: Display precision
        bipolar: Value may legitimately be negative (e.g. defensive runs)
        typical_range: Expected spread, used only for bipolar categories
        source_field: Field name in ingested player stat records
    """

    key: str
    label: str
    higher_is_better: bool
    weight: float
    scale: StatScale
    decimals: int = 1
    bipolar: bool = False
    typical_range: float = ValuationSettings.BIPOLAR_TYPICAL_RANGE
    source_field: Optional[str] = None

    def __post_init__(self):
        """Validate fields."""
        if not self.key or not isinstance(self.key, str):
            raise ValueError("key must be a non-empty string")
        if not isinstance(self.weight, (int, float)) or self.weight < 0:
            raise ValueError(f"weight must be a non-negative number, got {self.weight}")
        if self.bipolar and self.typical_range <= 0:
            raise ValueError(
                f"typical_range must be positive for bipolar category {self.key}"
            )

    def format_value(self, value: float) -> str:
        """
        Format a raw stat value for display.

        Percent values at or below 1.0 are treated as fractions.
        """
        if self.scale == StatScale.PERCENT:
            pct = value * 100 if value <= 1 else value
            return f"{pct:.{self.decimals}f}%"
        if self.scale == StatScale.MPH:
            return f"{value:.{self.decimals}f} mph"
        if self.scale == StatScale.COUNT and self.decimals == 0:
            return str(int(round(value)))
        return f"{value:.{self.decimals}f}"


# Default categories, in scoring order
DEFAULT_CATEGORIES: List[StatCategory] = [
    StatCategory("fg_xwOBA", "xwOBA", True, 0.28, StatScale.DECIMAL, 3, source_field="xwOBA"),
    StatCategory("fg_PA", "PA", True, 0.14, StatScale.COUNT, 0, source_field="PA"),
    StatCategory("sc_EV_brl_pa", "Brls/PA", True, 0.12, StatScale.PERCENT, 1, source_field="BarrelPerPA"),
    StatCategory("fg_xSLG", "xSLG", True, 0.10, StatScale.DECIMAL, 3, source_field="xSLG"),
    StatCategory("fg_BB%", "BB%", True, 0.08, StatScale.PERCENT, 1, source_field="BBpct"),
    StatCategory("fg_K%", "K%", False, 0.07, StatScale.PERCENT, 1, source_field="Kpct"),
    StatCategory("fg_Contact%", "Contact%", True, 0.04, StatScale.PERCENT, 1, source_field="ContactPct"),
    StatCategory("sc_EV_ev50", "EV50", True, 0.04, StatScale.MPH, 1, source_field="EV50"),
    StatCategory("fg_Def", "DEF", True, 0.03, StatScale.RUNS, 1, bipolar=True, source_field="fg_Def"),
    StatCategory("fg_BsR", "BsR", True, 0.02, StatScale.RUNS, 1, bipolar=True, source_field="fg_BsR"),
    StatCategory("fg_maxEV", "maxEV", True, 0.05, StatScale.MPH, 1, source_field="maxEV"),
    StatCategory("fg_HardHit%", "HardHit%", True, 0.03, StatScale.PERCENT, 1, source_field="HardHitPct"),
]


class CategoryRegistry:
    """
    Ordered lookup of stat categories.

    Usage:
        registry = CategoryRegistry()
        xwoba = registry.get("fg_xwOBA")
        weights = registry.default_weights()
    """

    def __init__(self, categories: Optional[Iterable[StatCategory]] = None):
        """
        Initialize the registry.

        Args:
            categories: Categories to register. If None, uses DEFAULT_CATEGORIES.
        """
        self._categories: Dict[str, StatCategory] = {}
        for category in (categories if categories is not None else DEFAULT_CATEGORIES):
            if category.key in self._categories:
                raise ValueError(f"Duplicate stat category: {category.key}")
            self._categories[category.key] = category

    def __iter__(self) -> Iterator[StatCategory]:
        return iter(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, key: object) -> bool:
        return key in self._categories

    @property
    def keys(self) -> List[str]:
        """Category keys in scoring order."""
        return list(self._categories)

    def get(self, key: str) -> StatCategory:
        """
        Look up a category.

        Raises:
            UnknownCategoryError: If the key is not registered
        """
        try:
            return self._categories[key]
        except KeyError:
            raise UnknownCategoryError(key) from None

    def validate_keys(self, keys: Iterable[str]) -> None:
        """Raise UnknownCategoryError for the first unregistered key."""
        for key in keys:
            if key not in self._categories:
                raise UnknownCategoryError(key)

    def default_weights(self) -> Dict[str, float]:
        """Registry weights keyed by category."""
        return {c.key: c.weight for c in self._categories.values()}

    def source_field_map(self) -> Dict[str, str]:
        """Ingested field name -> category key."""
        return {
            c.source_field: c.key
            for c in self._categories.values()
            if c.source_field
        }


DEFAULT_REGISTRY = CategoryRegistry()
