"""
Average-position baseline for a driver at a race.

The baseline is the mean finishing position over the three races that
precede the target race by date. Missing results are filled with a ghost
result of 10th place, and the first round of a season is always judged
against three ghost results.
"""

import logging
from fractions import Fraction
from typing import Dict, List, Optional

from config.rules import FANTASY_RULES
from fantasy.models import Race, RaceResult

logger = logging.getLogger(__name__)

BASELINE_WINDOW = FANTASY_RULES['valuation']['baseline_window']
GHOST_POSITION = FANTASY_RULES['valuation']['ghost_position']


class BaselineCalculator:
    """
    Computes baselines against one chronological snapshot of the calendar.
    Finishing positions of window races are read once per race and reused.
    """

    def __init__(self, races: Optional[List[Race]] = None):
        if races is None:
            races = list(Race.objects.chronological())
        self.races = races
        self._index = {race.id: i for i, race in enumerate(races)}
        self._positions: Dict[int, Dict[int, int]] = {}

    def preceding_races(self, race) -> Optional[List[Race]]:
        """
        Up to three races immediately before the target race by date.
        None when the target race is not part of the calendar.
        """
        index = self._index.get(race.id)
        if index is None:
            return None
        return self.races[max(0, index - BASELINE_WINDOW):index]

    def positions_for(self, race) -> Dict[int, int]:
        if race.id not in self._positions:
            self._positions[race.id] = dict(
                RaceResult.objects.filter(race=race).values_list('driver_id', 'position')
            )
        return self._positions[race.id]

    def window_positions(self, driver, race) -> Optional[List[int]]:
        """
        Exactly BASELINE_WINDOW positions with ghost results filling the gaps,
        or None when the race cannot be located.
        """
        if race.is_first_round:
            return [GHOST_POSITION] * BASELINE_WINDOW

        previous = self.preceding_races(race)
        if previous is None:
            logger.warning(f"Race {race.id} not found in calendar, no baseline for driver {driver.id}")
            return None

        positions = [
            self.positions_for(prior).get(driver.id, GHOST_POSITION)
            for prior in previous
        ]
        # Too few earlier races: the missing slots are ghosts too
        positions = [GHOST_POSITION] * (BASELINE_WINDOW - len(positions)) + positions
        return positions

    def average_position(self, driver, race) -> Optional[Fraction]:
        positions = self.window_positions(driver, race)
        if positions is None:
            return None
        return Fraction(sum(positions), len(positions))


def average_position(driver, race) -> Optional[Fraction]:
    """Baseline for a single driver; use BaselineCalculator inside a pass"""
    return BaselineCalculator().average_position(driver, race)
