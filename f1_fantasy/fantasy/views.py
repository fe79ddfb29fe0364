from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import Http404, JsonResponse
from django.shortcuts import render, redirect, get_object_or_404
from fantasy.models import (
    Race, RaceResult, Driver, Engine, Chassis, UserTeam,
    ValuationTableEntry, BettingStatus, AssetValueHistory,
)
from fantasy.forms import UserTeamForm
from fantasy import standings


def _value_changes(race, kind):
    """Asset value change at a race keyed by asset id"""
    if race is None:
        return {}
    return {
        getattr(row, f'{kind}_id'): row.delta
        for row in AssetValueHistory.objects.for_race(race).filter(kind=kind)
    }


@login_required
def dashboard(request):
    """
    Main dashboard view showing:
    - The user's Premium and Challenger rosters with current asset values
    - The next race and whether betting is open
    """
    teams = UserTeam.objects.filter(user=request.user).select_related(
        'driver1', 'driver2', 'engine', 'chassis'
    )

    roster_data = []
    for team in teams:
        roster_data.append({
            'team': team,
            'assets': team.assets(),
            'total_value': team.total_value,
            'credits_change': team.current_credits - team.initial_credits,
        })

    context = {
        'roster_data': roster_data,
        'next_race': Race.objects.next_race(),
        'betting_open': BettingStatus.load().is_open,
    }

    return render(request, 'fantasy/dashboard.html', context)


@login_required
def edit_roster(request, team_id):
    """
    Edit one of the logged in user's rosters
    """
    team = get_object_or_404(UserTeam, pk=team_id, user=request.user)

    if request.method == 'POST':
        form = UserTeamForm(request.POST, instance=team)
        if form.is_valid():
            form.save()
            messages.success(request, f'{team.name} team updated successfully!')
            return redirect('dashboard')
    else:
        form = UserTeamForm(instance=team)

    context = {
        'form': form,
        'team': team,
        'betting_open': BettingStatus.load().is_open,
    }

    return render(request, 'fantasy/edit_roster.html', context)


def market(request):
    """
    Catalog of every asset sorted by value, with the change at the last
    valued race
    """
    last_race = Race.objects.filter(results_submitted=True).order_by('-race_date', '-round_number').first()

    driver_changes = _value_changes(last_race, 'driver')
    engine_changes = _value_changes(last_race, 'engine')
    chassis_changes = _value_changes(last_race, 'chassis')

    context = {
        'last_race': last_race,
        'drivers': [
            {'asset': d, 'change': driver_changes.get(d.id)}
            for d in Driver.objects.select_related('chassis').order_by('-value')
        ],
        'engines': [
            {'asset': e, 'change': engine_changes.get(e.id)}
            for e in Engine.objects.order_by('-value')
        ],
        'chassis': [
            {'asset': c, 'change': chassis_changes.get(c.id)}
            for c in Chassis.objects.select_related('engine').order_by('-value')
        ],
    }

    return render(request, 'fantasy/market.html', context)


def race_results(request, race_id):
    """
    Finishing order and valuations of a race. Not available until the race
    has been valued.
    """
    race = get_object_or_404(Race.objects.select_related('season'), pk=race_id)
    if not race.results_submitted:
        raise Http404("Results for this race have not been submitted")

    results = RaceResult.objects.filter(race=race).select_related('driver', 'driver__chassis')

    context = {
        'race': race,
        'results': results,
        'roster_performance': standings.race_roster_performance(race),
    }

    return render(request, 'fantasy/race_results.html', context)


def valuation_table(request):
    rows = [
        {
            'difference': entry.difference,
            'description': entry.description,
            'percentage_change': float(entry.percentage_change),
        }
        for entry in ValuationTableEntry.objects.order_by('difference')
    ]
    return JsonResponse({'entries': rows})


def standings_json(request):
    return JsonResponse({
        'drivers': standings.driver_standings(),
        'chassis': standings.chassis_standings(),
        'engines': standings.engine_standings(),
        'leaderboard': standings.leaderboard(),
    })
