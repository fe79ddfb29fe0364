"""
Management command to import a race's finishing order from FastF1 and
value it, via the Prefect flow in fantasy.flows.import_results.

Usage:
    python manage.py import_race_results --year 2025 --round 3
"""

from django.core.management.base import BaseCommand, CommandError
from fantasy.flows.import_results import NonRetryableError, import_race_results_flow
from fantasy.valuation import ValuationError


class Command(BaseCommand):
    help = 'Import race results from FastF1 and apply valuations'

    def add_arguments(self, parser):
        parser.add_argument('--year', type=int, required=True, help='Season year')
        parser.add_argument('--round', type=int, required=True, help='Round number')
        parser.add_argument(
            '--no-notify',
            action='store_true',
            help='Do not send the Slack notification'
        )

    def handle(self, *args, **options):
        year = options['year']
        round_number = options['round']

        self.stdout.write(f'Importing results for {year} round {round_number}...')
        try:
            summary = import_race_results_flow(year, round_number, notify=not options['no_notify'])
        except (NonRetryableError, ValuationError) as e:
            raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS(
            f"✓ Valued {summary['drivers_valued']} drivers, "
            f"updated {summary['rosters_updated']} rosters"
        ))
