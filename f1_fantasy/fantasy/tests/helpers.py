"""
Shared builders for fantasy tests.

build_catalog() creates a small market:

    Engine E1 (100) -> Chassis C1 (200): D1 (200), D2 (100)
                    -> Chassis C2 (100): D3 (100)
    Engine E2 (100) -> Chassis C3 (100): D4 (50)
"""

from datetime import date, timedelta

from fantasy.models import Season, Engine, Chassis, Driver, Race, RaceResult


def build_catalog():
    e1 = Engine.objects.create(name='E1', value=100)
    e2 = Engine.objects.create(name='E2', value=100)
    c1 = Chassis.objects.create(name='C1', value=200, engine=e1)
    c2 = Chassis.objects.create(name='C2', value=100, engine=e1)
    c3 = Chassis.objects.create(name='C3', value=100, engine=e2)
    d1 = Driver.objects.create(name='Driver One', number=1, chassis=c1, value=200)
    d2 = Driver.objects.create(name='Driver Two', number=2, chassis=c1, value=100)
    d3 = Driver.objects.create(name='Driver Three', number=3, chassis=c2, value=100)
    d4 = Driver.objects.create(name='Driver Four', number=4, chassis=c3, value=50)
    return {
        'e1': e1, 'e2': e2,
        'c1': c1, 'c2': c2, 'c3': c3,
        'd1': d1, 'd2': d2, 'd3': d3, 'd4': d4,
    }


def build_season(rounds, year=2025, start=date(2025, 3, 16)):
    """Season with one race per week, rounds numbered from 1"""
    season = Season.objects.create(year=year, name=f'{year} Formula 1 Season')
    races = [
        Race.objects.create(
            season=season,
            name=f'Race {n}',
            round_number=n,
            race_date=start + timedelta(weeks=n - 1),
        )
        for n in range(1, rounds + 1)
    ]
    return season, races


def store_results(race, order):
    """Store finishing positions without valuing the race. order: [driver, ...]"""
    for position, driver in enumerate(order, start=1):
        RaceResult.objects.create(race=race, driver=driver, position=position)
