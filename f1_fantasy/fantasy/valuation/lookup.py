"""
Valuation table lookup.

Translates how far an asset finished from its baseline into a percentage
value change. The table is always read from the database at the start of a
pass; the seeding formula is never used at evaluation time.
"""

import logging
from decimal import Decimal
from fractions import Fraction
from typing import Dict, Optional

from fantasy.models import ValuationTableEntry
from fantasy.models.valuation import MIN_DIFFERENCE, MAX_DIFFERENCE
from .amounts import round_half_ceiling

logger = logging.getLogger(__name__)


def position_difference(baseline: Fraction, position: int) -> int:
    """
    Rounded baseline minus finishing position. Positive means the driver
    finished better than expected (expected 10th, finished 4th -> +6).
    """
    return round_half_ceiling(Fraction(baseline) - position)


def clamp_difference(difference: int) -> int:
    """Differences beyond the table range use the nearest boundary row"""
    return max(MIN_DIFFERENCE, min(MAX_DIFFERENCE, difference))


class ValuationTable:
    """In-memory snapshot of the valuation table for one valuation pass"""

    def __init__(self, percentages: Dict[int, Decimal]):
        self.percentages = dict(percentages)

    @classmethod
    def load(cls):
        return cls({
            entry.difference: entry.percentage_change
            for entry in ValuationTableEntry.objects.all()
        })

    def __len__(self):
        return len(self.percentages)

    def percentage_for(self, difference: Optional[int]) -> Decimal:
        """
        Percentage change for a position difference. Missing rows count as
        no change.
        """
        if difference is None:
            return Decimal(0)
        clamped = clamp_difference(difference)
        if clamped != difference:
            logger.warning(
                f"Position difference {difference} outside valuation table, using {clamped}"
            )
        percentage = self.percentages.get(clamped)
        if percentage is None:
            logger.warning(f"No valuation table row for difference {clamped}, treating as 0%")
            return Decimal(0)
        return Decimal(percentage)
