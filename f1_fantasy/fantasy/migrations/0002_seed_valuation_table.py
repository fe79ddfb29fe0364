"""
Seed the valuation table with the default curve: 2.5% per place of
difference, rounded to a whole percentage (exact halves round up).
"""

import math
from decimal import Decimal

from django.db import migrations


def describe(difference):
    if difference == 0:
        return "Current position same as 3-race average"
    if difference > 0:
        return f"Current position {difference} places better than 3-race average"
    return f"Current position {abs(difference)} places worse than 3-race average"


def seed_valuation_table(apps, schema_editor):
    ValuationTableEntry = apps.get_model('fantasy', 'ValuationTableEntry')
    for difference in range(-20, 21):
        percentage = math.floor(Decimal(difference) * Decimal('2.5') + Decimal('0.5'))
        ValuationTableEntry.objects.update_or_create(
            difference=difference,
            defaults={
                'description': describe(difference),
                'percentage_change': Decimal(percentage),
            },
        )


def remove_valuation_table(apps, schema_editor):
    ValuationTableEntry = apps.get_model('fantasy', 'ValuationTableEntry')
    ValuationTableEntry.objects.filter(difference__gte=-20, difference__lte=20).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('fantasy', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_valuation_table, remove_valuation_table),
    ]
