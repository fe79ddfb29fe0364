"""
Management command to submit a race's finishing order and run the
valuation pass.

The CSV file needs a header row with driver_number and position columns.
Submitting results for a race that has already been valued replaces the
earlier pass, so --resubmit is required to make that explicit.

Usage:
    python manage.py submit_results --race 5 --file results.csv
    python manage.py submit_results --race 5 --file results.csv --resubmit
"""

import csv
from django.core.management.base import BaseCommand, CommandError
from fantasy.models import Race, Driver
from fantasy.valuation import ResultEntry, ValuationError, submit_results

REQUIRED_COLUMNS = {'driver_number', 'position'}


class Command(BaseCommand):
    help = 'Submit race results from a CSV file and apply valuations'

    def add_arguments(self, parser):
        parser.add_argument('--race', type=int, required=True, help='Race ID')
        parser.add_argument('--file', type=str, required=True, help='CSV with driver_number,position')
        parser.add_argument(
            '--resubmit',
            action='store_true',
            help='Replace results for a race that has already been valued'
        )
        parser.add_argument(
            '--no-notify',
            action='store_true',
            help='Do not send the Slack notification'
        )

    def handle(self, *args, **options):
        try:
            race = Race.objects.get(pk=options['race'])
        except Race.DoesNotExist:
            raise CommandError(f"Race with id {options['race']} not found")

        if race.results_submitted and not options['resubmit']:
            raise CommandError(f'{race} already has results. Use --resubmit to replace them.')

        entries = self.read_entries(options['file'])

        self.stdout.write(f'Submitting {len(entries)} results for {race}...')
        try:
            report = submit_results(race.id, entries, notify=not options['no_notify'])
        except ValuationError as e:
            raise CommandError(str(e))

        summary = report.summary()
        self.stdout.write(self.style.SUCCESS(f'✓ Valuations applied for {race}'))
        self.stdout.write(f"  Drivers valued:      {summary['drivers_valued']}")
        self.stdout.write(f"  Engines valued:      {summary['engines_valued']}")
        self.stdout.write(f"  Chassis valued:      {summary['chassis_valued']}")
        self.stdout.write(f"  Rosters updated:     {summary['rosters_updated']}")
        self.stdout.write(f"  Credits distributed: {summary['credits_distributed']:+d}")

    def read_entries(self, path):
        """Read the CSV and translate car numbers to driver ids"""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                reader = csv.DictReader(f)
                missing = REQUIRED_COLUMNS - set(reader.fieldnames or [])
                if missing:
                    raise CommandError(f"Missing columns: {', '.join(sorted(missing))}")
                rows = list(reader)
        except OSError as e:
            raise CommandError(f'Could not read {path}: {e}')

        drivers_by_number = dict(Driver.objects.values_list('number', 'id'))

        entries = []
        for line, row in enumerate(rows, start=2):
            try:
                number = int(row['driver_number'])
                position = int(row['position'])
            except (TypeError, ValueError):
                raise CommandError(f'Line {line}: driver_number and position must be integers')
            if number not in drivers_by_number:
                raise CommandError(f'No driver with number {number}')
            entries.append(ResultEntry(driver_id=drivers_by_number[number], position=position))
        return entries
