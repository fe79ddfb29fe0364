"""
Import a race's finishing order from FastF1 and value it.

Architecture:
    1. Load the FastF1 race session (retried on transient failures)
    2. Extract the classified finishing order from session.results
    3. Match car numbers to catalog drivers and re-rank contiguously
    4. Submit the order to the valuation engine

Drivers FastF1 reports that are not in the catalog are skipped, so the
submitted ranking covers only catalog drivers and still runs from 1.
"""

import os
from typing import Dict, List

import fastf1
import pandas as pd
from django.conf import settings
from prefect import flow, task, get_run_logger

from fantasy.models import Driver, Race
from fantasy.valuation import ResultEntry, submit_results


class NonRetryableError(Exception):
    """Exception for errors that should not be retried (data not available, etc.)"""
    pass


def enable_fastf1_cache():
    """Point FastF1 at the configured on-disk HTTP cache, if any"""
    if settings.FASTF1_CACHE_DIR:
        os.makedirs(settings.FASTF1_CACHE_DIR, exist_ok=True)
        fastf1.Cache.enable_cache(settings.FASTF1_CACHE_DIR)


@task(
    name="Load FastF1 Race Session",
    retries=settings.FASTF1_TASK_RETRIES,
    retry_delay_seconds=settings.FASTF1_TASK_RETRY_DELAY
)
def load_race_session(year: int, round_num: int):
    """
    Load the race ('R') session of an event. Only results are needed, so
    laps, telemetry, weather and messages are not downloaded.

    Raises:
        NonRetryableError: the event or its data does not exist
    """
    logger = get_run_logger()
    logger.info(f"Loading FastF1 race session: {year} round {round_num}")

    try:
        f1_session = fastf1.get_session(year, round_num, 'R')
        f1_session.load(laps=False, telemetry=False, weather=False, messages=False)
    except ValueError as e:
        logger.warning(f"Race session not available (will not retry): {e}")
        raise NonRetryableError(f"Data not available for {year} round {round_num}: {e}") from e

    logger.info(f"✅ Loaded {year} round {round_num} race session")
    return f1_session


@task(name="Extract Finishing Order")
def extract_finishing_order(f1_session) -> List[Dict]:
    """
    Finishing order from FastF1 session results.

    Returns:
        list of {'driver_number': int, 'position': int, 'full_name': str}
        sorted by position. Rows without a finite position are dropped.
    """
    logger = get_run_logger()

    results_df = getattr(f1_session, 'results', None)
    if results_df is None or results_df.empty:
        logger.warning("No session results available")
        return []

    order = []
    for _, row in results_df.iterrows():
        position = pd.to_numeric(row.get('Position'), errors='coerce')
        number = pd.to_numeric(row.get('DriverNumber'), errors='coerce')
        if pd.isna(position) or pd.isna(number):
            logger.warning(f"Skipping unclassified result: {row.get('FullName', '')}")
            continue
        order.append({
            'driver_number': int(number),
            'position': int(position),
            'full_name': str(row.get('FullName', '')),
        })

    order.sort(key=lambda r: r['position'])
    logger.info(f"Extracted finishing order for {len(order)} drivers")
    return order


@task(name="Match Drivers")
def match_drivers(order: List[Dict]) -> List[ResultEntry]:
    """
    Map car numbers to catalog drivers. Positions are renumbered 1..N in
    finishing order after unknown drivers are removed.
    """
    logger = get_run_logger()

    drivers_by_number = dict(Driver.objects.values_list('number', 'id'))

    entries = []
    for row in order:
        driver_id = drivers_by_number.get(row['driver_number'])
        if driver_id is None:
            logger.warning(f"No catalog driver with number {row['driver_number']} ({row['full_name']})")
            continue
        entries.append(ResultEntry(driver_id=driver_id, position=len(entries) + 1))

    logger.info(f"Matched {len(entries)} of {len(order)} drivers")
    return entries


@flow(name="Import Race Results", log_prints=True)
def import_race_results_flow(year: int, round_number: int, notify: bool = True) -> Dict:
    """
    Fetch a race's finishing order from FastF1 and run the valuation pass.

    Returns:
        The valuation report summary
    """
    logger = get_run_logger()

    race = Race.objects.filter(season__year=year, round_number=round_number).first()
    if race is None:
        raise NonRetryableError(f"No race for {year} round {round_number}; import the schedule first")

    enable_fastf1_cache()

    f1_session = load_race_session(year, round_number)
    order = extract_finishing_order(f1_session)
    entries = match_drivers(order)

    report = submit_results(race.id, entries, notify=notify)
    summary = report.summary()
    logger.info(f"Valued {race}: {summary}")
    return summary
