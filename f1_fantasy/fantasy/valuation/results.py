"""
Race result submission.

Submitting results always overwrites: if the race was valued before, that
pass is reversed (asset values and roster credits are restored from the
recorded history) and its per-race rows are deleted before the new finishing
order is stored and valued. Submitting the same results twice therefore
leaves the same values and credits as submitting them once.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List

from django.db import transaction
from django.db.models import F

from config.notifications import send_valuation_notification
from fantasy.models import (
    Race, RaceResult, Driver, Engine, Chassis, UserTeam, AssetKind,
    PerformanceHistory, AssetValueHistory, RosterCreditHistory,
)
from .apply import apply_valuations
from .exceptions import InvalidResultsError, RaceNotFoundError
from .records import ValuationReport

logger = logging.getLogger(__name__)

ASSET_MODELS = {
    AssetKind.DRIVER: Driver,
    AssetKind.ENGINE: Engine,
    AssetKind.CHASSIS: Chassis,
}


@dataclass(frozen=True)
class ResultEntry:
    driver_id: int
    position: int


def validate_results(entries: Iterable[ResultEntry]) -> List[ResultEntry]:
    """
    Check a finishing order: non-empty, one row per driver, positions
    forming a contiguous ranking from 1, every driver known.

    Returns the entries sorted by position.
    """
    entries = sorted(entries, key=lambda e: e.position)
    if not entries:
        raise InvalidResultsError("Results must be a non-empty list")

    driver_ids = [e.driver_id for e in entries]
    if len(set(driver_ids)) != len(driver_ids):
        raise InvalidResultsError("A driver appears more than once in the results")

    positions = [e.position for e in entries]
    if positions != list(range(1, len(entries) + 1)):
        raise InvalidResultsError(
            f"Positions must run from 1 to {len(entries)} without gaps or ties"
        )

    known = set(Driver.objects.filter(id__in=driver_ids).values_list('id', flat=True))
    missing = [driver_id for driver_id in driver_ids if driver_id not in known]
    if missing:
        raise InvalidResultsError(f"Driver with ID {missing[0]} not found")

    return entries


def reverse_valuations(race) -> int:
    """
    Undo a previous valuation pass for a race using its recorded history.
    Returns the number of asset value rows reversed.
    """
    value_rows = list(AssetValueHistory.objects.for_race(race))
    for row in value_rows:
        model = ASSET_MODELS[AssetKind(row.kind)]
        model.objects.filter(pk=getattr(row, f'{row.kind}_id')).update(
            value=F('value') - row.delta
        )

    for credit in RosterCreditHistory.objects.filter(race=race):
        UserTeam.objects.filter(pk=credit.user_team_id).update(
            current_credits=F('current_credits') - credit.credits_gained
        )

    if value_rows:
        logger.info(f"Reversed previous valuation pass for {race} ({len(value_rows)} assets)")
    return len(value_rows)


def _delete_race_rows(race):
    PerformanceHistory.objects.for_race(race).delete()
    AssetValueHistory.objects.for_race(race).delete()
    RosterCreditHistory.objects.filter(race=race).delete()
    RaceResult.objects.filter(race=race).delete()


def _get_race_for_update(race_id):
    try:
        return Race.objects.select_for_update().get(pk=race_id)
    except Race.DoesNotExist:
        raise RaceNotFoundError(race_id)


@transaction.atomic
def clear_results(race_id):
    """Reverse and delete a race's results, returning it to scheduled"""
    race = _get_race_for_update(race_id)
    reverse_valuations(race)
    _delete_race_rows(race)
    race.results_submitted = False
    race.save(update_fields=['results_submitted'])
    return race


def submit_results(race_id, entries: Iterable[ResultEntry], notify: bool = True) -> ValuationReport:
    """
    Store a race's finishing order and run the valuation pass.

    Either every change for the race is committed, or none is.

    Raises:
        RaceNotFoundError: race does not exist
        InvalidResultsError: finishing order is malformed
    """
    entries = list(entries)

    with transaction.atomic():
        race = _get_race_for_update(race_id)
        entries = validate_results(entries)

        reverse_valuations(race)
        _delete_race_rows(race)

        RaceResult.objects.bulk_create([
            RaceResult(race=race, driver_id=entry.driver_id, position=entry.position)
            for entry in entries
        ])
        logger.info(f"Stored {len(entries)} results for {race}")

        report = apply_valuations(race.id)

        if notify:
            transaction.on_commit(lambda: send_valuation_notification(report, race))

    return report


def resubmit_stored_results(race_id, notify: bool = True) -> ValuationReport:
    """Re-run submission with the race's currently stored finishing order"""
    entries = [
        ResultEntry(driver_id=driver_id, position=position)
        for driver_id, position in RaceResult.objects.filter(race_id=race_id)
        .values_list('driver_id', 'position')
    ]
    return submit_results(race_id, entries, notify=notify)
