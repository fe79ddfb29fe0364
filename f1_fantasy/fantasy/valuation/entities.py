"""
Per-asset valuation percentages for a race.

Drivers are valued from their own baseline. Engines and chassis have no
position history of their own: their percentage is the rounded mean of the
percentages of the drivers currently assigned to them, read from the live
catalog at the moment of computation.
"""

from decimal import Decimal
from typing import Dict, Optional

from fantasy.models import Driver
from .amounts import round_half_ceiling
from .baseline import BaselineCalculator
from .lookup import ValuationTable, position_difference


class RaceValuator:
    """
    Valuation percentages for every asset kind at one race.

    Driver percentages depend only on finishing positions and the table, so
    they are memoised for the lifetime of the valuator.
    """

    def __init__(
        self,
        race,
        table: Optional[ValuationTable] = None,
        baselines: Optional[BaselineCalculator] = None,
    ):
        self.race = race
        self.table = table if table is not None else ValuationTable.load()
        self.baselines = baselines if baselines is not None else BaselineCalculator()
        self.positions: Dict[int, int] = dict(
            race.results.values_list('driver_id', 'position')
        )
        self._driver_percent: Dict[int, Decimal] = {}

    def driver_difference(self, driver) -> Optional[int]:
        """Position difference, or None when the driver has no result or baseline"""
        position = self.positions.get(driver.id)
        if position is None:
            return None
        baseline = self.baselines.average_position(driver, self.race)
        if baseline is None:
            return None
        return position_difference(baseline, position)

    def driver_percent(self, driver) -> Decimal:
        if driver.id not in self._driver_percent:
            difference = self.driver_difference(driver)
            self._driver_percent[driver.id] = self.table.percentage_for(difference)
        return self._driver_percent[driver.id]

    def _mean_percent(self, drivers) -> int:
        percents = [self.driver_percent(driver) for driver in drivers]
        if not percents:
            return 0
        return round_half_ceiling(sum(percents, Decimal(0)) / len(percents))

    def engine_percent(self, engine) -> int:
        return self._mean_percent(Driver.objects.using_engine(engine).order_by('id'))

    def chassis_percent(self, chassis) -> int:
        return self._mean_percent(Driver.objects.filter(chassis=chassis).order_by('id'))


def driver_valuation(driver, race) -> Decimal:
    return RaceValuator(race).driver_percent(driver)


def engine_valuation(engine, race) -> int:
    return RaceValuator(race).engine_percent(engine)


def chassis_valuation(chassis, race) -> int:
    return RaceValuator(race).chassis_percent(chassis)
