"""
Valuation engine.

Computes how much every driver, engine and chassis gains or loses after a
race and propagates the change to every user roster.

Modules:
- baseline.py: 3-race average position with ghost results
- lookup.py: position difference -> percentage via the valuation table
- entities.py: driver, engine and chassis percentages for a race
- amounts.py: rounding and value update arithmetic
- apply.py: the transactional valuation pass
- results.py: submitting, resubmitting and clearing race results
"""

from .amounts import apply_to_value, round_half_ceiling, valuation_amount
from .apply import apply_valuations
from .baseline import BaselineCalculator, average_position
from .entities import RaceValuator, chassis_valuation, driver_valuation, engine_valuation
from .exceptions import InvalidResultsError, NoResultsError, RaceNotFoundError, ValuationError
from .lookup import ValuationTable, clamp_difference, position_difference
from .records import AssetValuationResult, RosterCreditResult, ValuationReport
from .results import (
    ResultEntry,
    clear_results,
    resubmit_stored_results,
    reverse_valuations,
    submit_results,
    validate_results,
)
