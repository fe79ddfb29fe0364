"""
Management command to import the F1 race calendar from FastF1.

This command fetches the F1 event schedule and imports:
- Season
- Races (name, location, country, round number and race date)

Races that already have valued results keep their date and round; only
descriptive fields are refreshed for them.

Usage:
    python manage.py import_schedule --year 2025
    python manage.py import_schedule --year 2025 --event 3
"""

import fastf1
import pandas as pd
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone
from django.db import transaction
from fantasy.flows.import_results import enable_fastf1_cache
from fantasy.models import Season, Race


class Command(BaseCommand):
    help = 'Import the F1 race calendar from FastF1 into the database'

    def add_arguments(self, parser):
        parser.add_argument(
            '--year',
            type=int,
            default=timezone.now().year,
            help='Season year (default: current year)'
        )
        parser.add_argument(
            '--event',
            type=int,
            help='Import only a specific event/round number (useful for testing)'
        )

    def handle(self, *args, **options):
        year = options['year']
        specific_event = options.get('event')

        self.stdout.write(self.style.SUCCESS(f'\n{"="*80}'))
        self.stdout.write(self.style.SUCCESS(f'F1 Schedule Import - {year} Season'))
        self.stdout.write(self.style.SUCCESS(f'{"="*80}\n'))

        enable_fastf1_cache()

        self.stdout.write('Fetching event schedule from FastF1...\n')
        try:
            schedule = fastf1.get_event_schedule(year, include_testing=False)
        except Exception as e:
            raise CommandError(f'Could not fetch {year} schedule from FastF1: {e}')

        self.stdout.write(self.style.SUCCESS(f'✓ Found {len(schedule)} events\n'))

        # Pre-season testing is round 0
        schedule = schedule[schedule['RoundNumber'] >= 1]

        if specific_event:
            schedule = schedule[schedule['RoundNumber'] == specific_event]
            if len(schedule) == 0:
                raise CommandError(f'Event {specific_event} not found')
            self.stdout.write(self.style.NOTICE(f'Importing only Round {specific_event}\n'))

        stats = {
            'races_created': 0,
            'races_updated': 0,
            'races_skipped': 0,
        }

        with transaction.atomic():
            season = self.import_season(year)

            for _, event_row in schedule.iterrows():
                self.stdout.write(f'\nProcessing Round {event_row["RoundNumber"]}: {event_row["EventName"]}...')
                stats[self.import_race(season, event_row)] += 1

        self.stdout.write(self.style.SUCCESS(f'\n{"="*80}'))
        self.stdout.write(self.style.SUCCESS('Import Complete!'))
        self.stdout.write(self.style.SUCCESS(f'{"="*80}'))
        self.stdout.write('\nSummary:')
        self.stdout.write(f'  Races created:    {stats["races_created"]}')
        self.stdout.write(f'  Races updated:    {stats["races_updated"]}')
        self.stdout.write(f'  Races skipped:    {stats["races_skipped"]}')
        self.stdout.write('')

    def import_season(self, year):
        """Get or create Season for the given year."""
        season, created = Season.objects.get_or_create(
            year=year,
            defaults={
                'name': f'{year} Formula 1 Season',
                'is_active': (year == timezone.now().year)
            }
        )

        if created:
            self.stdout.write(self.style.SUCCESS(f'✓ Created season: {season}'))
        else:
            self.stdout.write(f'  Using existing season: {season}')

        return season

    def import_race(self, season, event_row):
        """
        Create or update a single race. Returns the stats key to increment.
        """
        event_date = event_row.get('EventDate')
        if event_date is None or pd.isna(event_date):
            self.stdout.write(self.style.WARNING(f'  ⚠ No race date for {event_row["EventName"]}, skipping'))
            return 'races_skipped'

        round_number = int(event_row['RoundNumber'])
        fields = {
            'name': event_row['EventName'],
            'country': event_row.get('Country', '') or '',
            'location': event_row.get('Location', '') or '',
        }

        race = Race.objects.filter(season=season, round_number=round_number).first()
        if race is None:
            race = Race.objects.create(
                season=season,
                round_number=round_number,
                race_date=pd.Timestamp(event_date).date(),
                **fields
            )
            self.stdout.write(f'  ✓ Created race: {race.name}')
            return 'races_created'

        for field, value in fields.items():
            setattr(race, field, value)

        # Valued races keep their date and position in the baseline order
        if not race.results_submitted:
            race.race_date = pd.Timestamp(event_date).date()

        race.save()
        self.stdout.write(f'  ✓ Updated race: {race.name}')
        return 'races_updated'
