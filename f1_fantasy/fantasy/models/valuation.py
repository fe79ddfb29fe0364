"""
Valuation lookup table.

Maps the rounded difference between an asset's baseline position and its
actual finishing position to a percentage value change. Reference data,
editable by admins; the valuation engine only reads it.
"""

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from config.rules import FANTASY_RULES

MIN_DIFFERENCE, MAX_DIFFERENCE = FANTASY_RULES['valuation']['table_range']


class ValuationTableEntry(models.Model):
    difference = models.IntegerField(
        primary_key=True,
        validators=[MinValueValidator(MIN_DIFFERENCE), MaxValueValidator(MAX_DIFFERENCE)],
        help_text="Baseline position minus finishing position (positive = better than expected)"
    )
    description = models.CharField(max_length=255)
    percentage_change = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        default=0,
        help_text="Signed percentage applied to the asset value"
    )

    class Meta:
        ordering = ['difference']
        verbose_name = 'Valuation Table Entry'
        verbose_name_plural = 'Valuation Table'

    def __str__(self):
        return f"{self.difference:+d} -> {self.percentage_change}%"
