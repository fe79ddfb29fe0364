"""
Management command to seed the market catalog.

Creates the default engines, chassis and drivers with their starting
values. Existing rows (matched by engine/chassis name and driver number)
are left untouched unless --reset-values is given.

Usage:
    python manage.py seed_catalog
    python manage.py seed_catalog --reset-values
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from fantasy.models import Engine, Chassis, Driver

ENGINES = [
    ('Honda', 185),
    ('Mercedes', 170),
    ('Ferrari', 160),
    ('Renault', 145),
]

# (chassis name, value, engine name)
CHASSIS = [
    ('Red Bull Racing', 210, 'Honda'),
    ('Mercedes', 180, 'Mercedes'),
    ('Ferrari', 175, 'Ferrari'),
    ('McLaren', 150, 'Mercedes'),
    ('Aston Martin', 145, 'Mercedes'),
    ('Alpine', 140, 'Renault'),
    ('Williams', 135, 'Mercedes'),
    ('AlphaTauri', 130, 'Honda'),
    ('Alfa Romeo', 125, 'Ferrari'),
    ('Haas', 120, 'Ferrari'),
]

# (name, number, chassis name, value)
DRIVERS = [
    ('Max Verstappen', 1, 'Red Bull Racing', 230),
    ('Sergio Perez', 11, 'Red Bull Racing', 192),
    ('Lewis Hamilton', 44, 'Mercedes', 175),
    ('George Russell', 63, 'Mercedes', 170),
    ('Charles Leclerc', 16, 'Ferrari', 168),
    ('Carlos Sainz', 55, 'Ferrari', 165),
    ('Lando Norris', 4, 'McLaren', 160),
    ('Oscar Piastri', 81, 'McLaren', 150),
    ('Fernando Alonso', 14, 'Aston Martin', 160),
    ('Lance Stroll', 18, 'Aston Martin', 130),
    ('Esteban Ocon', 31, 'Alpine', 140),
    ('Pierre Gasly', 10, 'Alpine', 135),
    ('Alexander Albon', 23, 'Williams', 130),
    ('Logan Sargeant', 2, 'Williams', 100),
    ('Yuki Tsunoda', 22, 'AlphaTauri', 120),
    ('Daniel Ricciardo', 3, 'AlphaTauri', 125),
    ('Valtteri Bottas', 77, 'Alfa Romeo', 115),
    ('Zhou Guanyu', 24, 'Alfa Romeo', 110),
    ('Kevin Magnussen', 20, 'Haas', 105),
    ('Nico Hulkenberg', 27, 'Haas', 110),
]


class Command(BaseCommand):
    help = 'Seed the default engines, chassis and drivers'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset-values',
            action='store_true',
            help='Reset existing assets to their starting values'
        )

    @transaction.atomic
    def handle(self, *args, **options):
        reset = options.get('reset_values', False)
        stats = {'created': 0, 'reset': 0, 'skipped': 0}

        engines = {}
        for name, value in ENGINES:
            engines[name] = self._seed(Engine, {'name': name}, {'value': value}, reset, stats)

        chassis = {}
        for name, value, engine_name in CHASSIS:
            chassis[name] = self._seed(
                Chassis, {'name': name},
                {'value': value, 'engine': engines[engine_name]},
                reset, stats
            )

        for name, number, chassis_name, value in DRIVERS:
            self._seed(
                Driver, {'number': number},
                {'name': name, 'chassis': chassis[chassis_name], 'value': value},
                reset, stats
            )

        self.stdout.write(self.style.SUCCESS(
            f"✓ Catalog seeded: {stats['created']} created, "
            f"{stats['reset']} reset, {stats['skipped']} unchanged"
        ))

    def _seed(self, model, lookup, defaults, reset, stats):
        obj, created = model.objects.get_or_create(**lookup, defaults=defaults)
        if created:
            stats['created'] += 1
        elif reset:
            obj.value = defaults['value']
            obj.save(update_fields=['value'])
            stats['reset'] += 1
        else:
            stats['skipped'] += 1
        return obj
