"""
Valuation pass for a race.

Given a race whose RaceResult rows are already stored, the pass:
    1. Values every driver, updates its value and stamps its race result
    2. Values every engine from its drivers
    3. Values every chassis from its drivers
    4. Credits every roster with the change in its selected assets
    5. Marks the race as submitted

Every step runs inside one transaction. If anything raises, all value and
credit changes for the race are rolled back and results_submitted stays False.
"""

import logging
from typing import Dict

from django.db import transaction

from fantasy.models import (
    Race, Driver, Engine, Chassis, UserTeam,
    PerformanceHistory, AssetValueHistory, RosterCreditHistory,
)
from .amounts import valuation_amount
from .entities import RaceValuator
from .exceptions import NoResultsError, RaceNotFoundError
from .records import AssetValuationResult, RosterCreditResult, ValuationReport

logger = logging.getLogger(__name__)


def _revalue(asset, percent, race, position=None):
    """Apply a percentage to an asset and append its history rows"""
    old_value = asset.value
    amount = valuation_amount(old_value, percent)
    asset.value = old_value + amount
    asset.save(update_fields=['value'])

    PerformanceHistory.record(asset, race, position=position or 0)
    AssetValueHistory.record(asset, race, previous_value=old_value, value=asset.value)

    logger.debug(f"{asset.kind.label} {asset.id}: {percent}% -> {old_value} to {asset.value}")

    return AssetValuationResult(
        kind=asset.kind,
        asset_id=asset.id,
        percent=percent,
        amount=amount,
        old_value=old_value,
        new_value=asset.value,
    )


def _credit_roster(user_team, race, valuator, results, drivers, engines, chassis):
    """
    Credits gained by one roster. Drivers use their stamped race valuation
    and updated value; engine and chassis percentages are recomputed and
    applied to their updated values.
    """
    gained = 0

    for driver_id in (user_team.driver1_id, user_team.driver2_id):
        driver = drivers.get(driver_id)
        if driver is None:
            continue
        result = results.get(driver_id)
        if result is not None:
            gained += valuation_amount(driver.value, result.valuation)

    engine = engines.get(user_team.engine_id)
    if engine is not None:
        gained += valuation_amount(engine.value, valuator.engine_percent(engine))

    team_chassis = chassis.get(user_team.chassis_id)
    if team_chassis is not None:
        gained += valuation_amount(team_chassis.value, valuator.chassis_percent(team_chassis))

    old_credits = user_team.current_credits
    user_team.current_credits = old_credits + gained
    user_team.save(update_fields=['current_credits', 'updated_at'])

    RosterCreditHistory.objects.create(
        user_team=user_team,
        race=race,
        credits_gained=gained,
        credits_after=user_team.current_credits,
    )

    return RosterCreditResult(
        user_team_id=user_team.id,
        credits_gained=gained,
        old_credits=old_credits,
        new_credits=user_team.current_credits,
    )


@transaction.atomic
def apply_valuations(race_id) -> ValuationReport:
    """
    Run the valuation pass for a race with stored results.

    Raises:
        RaceNotFoundError: race does not exist
        NoResultsError: race has no RaceResult rows
    """
    try:
        # Row lock serialises concurrent passes for the same race
        race = Race.objects.select_for_update().get(pk=race_id)
    except Race.DoesNotExist:
        raise RaceNotFoundError(race_id)

    results = {r.driver_id: r for r in race.results.select_for_update()}
    if not results:
        raise NoResultsError(race.id)

    logger.info(f"Valuing {race} ({len(results)} results)")

    valuator = RaceValuator(race)
    report = ValuationReport(race_id=race.id)

    # Drivers first: roster credits read the stamped result valuations
    drivers: Dict[int, Driver] = {}
    for driver in Driver.objects.select_for_update().order_by('id'):
        percent = valuator.driver_percent(driver)
        result = results.get(driver.id)
        report.drivers.append(
            _revalue(driver, percent, race, position=result.position if result else 0)
        )
        if result is not None:
            result.valuation = percent
            result.save(update_fields=['valuation'])
        drivers[driver.id] = driver

    engines: Dict[int, Engine] = {}
    for engine in Engine.objects.select_for_update().order_by('id'):
        report.engines.append(_revalue(engine, valuator.engine_percent(engine), race))
        engines[engine.id] = engine

    chassis: Dict[int, Chassis] = {}
    for team_chassis in Chassis.objects.select_for_update().order_by('id'):
        report.chassis.append(_revalue(team_chassis, valuator.chassis_percent(team_chassis), race))
        chassis[team_chassis.id] = team_chassis

    for user_team in UserTeam.objects.select_for_update().order_by('id'):
        report.rosters.append(
            _credit_roster(user_team, race, valuator, results, drivers, engines, chassis)
        )

    race.results_submitted = True
    race.save(update_fields=['results_submitted'])

    logger.info(f"Valuation pass complete for {race}: {report.summary()}")
    return report
