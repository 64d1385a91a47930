"""
Market comparison of a proposed AAV against the comparable cohort.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from comp_valuation.models import ReferenceContract


@dataclass
class MarketComparison:
    """
    Where a proposed AAV lands among the comparables.

    Attributes:
        aav: AAV being compared
        percentile: Share of comparables strictly below aav (0-100)
        closest_contract_id: Comparable nearest by AAV, if any
        closest_name: Display name of that comparable
        analysis: One-line summary
    """

    aav: float
    percentile: int
    closest_contract_id: Optional[str]
    closest_name: Optional[str]
    analysis: str


class MarketComparator:
    """
    Ranks a proposed AAV among comparable contracts.

    Comparables are valued at their inflation-adjusted AAV when the
    caller supplies adjusted values (e.g. ValuationResult.adjusted_values),
    otherwise at their AAV as signed.
    """

    def compare(
        self,
        aav: float,
        contracts: List[ReferenceContract],
        adjusted_values: Optional[Dict[str, float]] = None,
    ) -> MarketComparison:
        """
        Compare an AAV to the comparables.

        Args:
            aav: Proposed AAV (millions)
            contracts: Comparable contracts
            adjusted_values: Optional contract id -> adjusted AAV

        Returns:
            MarketComparison
        """
        if not contracts:
            return MarketComparison(
                aav=aav,
                percentile=0,
                closest_contract_id=None,
                closest_name=None,
                analysis="No comparable contracts selected.",
            )

        adjusted_values = adjusted_values or {}
        values = [
            (c, adjusted_values.get(c.contract_id, c.annual_value)) for c in contracts
        ]

        rank = sum(1 for _, value in values if value < aav)
        percentile = int(math.floor(rank / len(values) * 100 + 0.5))

        # First comparable wins ties
        closest, _ = min(values, key=lambda pair: abs(pair[1] - aav))
        closest_name = closest.name or closest.contract_id
        total = closest.annual_value * closest.contract_years

        analysis = (
            f"At ${aav:.1f}M AAV, this contract ranks in the {percentile}th percentile "
            f"of comparable deals. Most similar to {closest_name}'s "
            f"{closest.contract_years:g}-year, ${total:.1f}M contract."
        )

        return MarketComparison(
            aav=aav,
            percentile=percentile,
            closest_contract_id=closest.contract_id,
            closest_name=closest_name,
            analysis=analysis,
        )
