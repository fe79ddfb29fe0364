"""
Read-side rankings built from the stores the valuation engine writes.

Nothing here mutates data; views and the JSON endpoints call these helpers.
"""

from django.db.models import Sum

from .models import User, Driver, Engine, Chassis, UserTeam, AssetValueHistory


def _ranked(assets):
    rows = []
    for position, asset in enumerate(assets, start=1):
        rows.append({
            'position': position,
            'id': asset.id,
            'name': asset.name,
            'value': asset.value,
        })
    return rows


def driver_standings():
    """Drivers by current value, most valuable first"""
    drivers = Driver.objects.select_related('chassis').order_by('-value', 'number')
    rows = _ranked(drivers)
    for row, driver in zip(rows, drivers):
        row['number'] = driver.number
        row['chassis'] = driver.chassis.name
        row['retired'] = driver.retired
    return rows


def chassis_standings():
    return _ranked(Chassis.objects.order_by('-value', 'name'))


def engine_standings():
    return _ranked(Engine.objects.order_by('-value', 'name'))


def leaderboard():
    """
    Users ranked by the combined current credits of their rosters. Users
    with equal totals share the ordering by username.
    """
    users = (
        User.objects
        .filter(fantasy_teams__isnull=False)
        .annotate(total_credits=Sum('fantasy_teams__current_credits'))
        .order_by('-total_credits', 'username')
    )
    return [
        {
            'position': position,
            'user_id': user.id,
            'username': user.username,
            'total_credits': user.total_credits,
        }
        for position, user in enumerate(users, start=1)
    ]


def race_roster_performance(race):
    """
    How every roster's held assets moved at a race, according to the
    recorded value history. Rosters are sorted by total change, best first.
    """
    deltas = {
        (row.kind, getattr(row, f'{row.kind}_id')): row.delta
        for row in AssetValueHistory.objects.for_race(race)
    }

    performance = []
    teams = UserTeam.objects.select_related('user', 'driver1', 'driver2', 'engine', 'chassis')
    for team in teams:
        assets = []
        for asset in team.assets():
            assets.append({
                'kind': asset.kind.value,
                'id': asset.id,
                'name': asset.name,
                'change': deltas.get((asset.kind.value, asset.id), 0),
            })
        performance.append({
            'user_team_id': team.id,
            'username': team.user.username,
            'team_name': team.name,
            'assets': assets,
            'total_change': sum(a['change'] for a in assets),
        })

    performance.sort(key=lambda p: (-p['total_change'], p['user_team_id']))
    return performance
