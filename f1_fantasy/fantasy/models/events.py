"""
Race calendar and race result models.

Structure:
- Race: Grand Prix events, ordered by date for baseline windows
- RaceResult: Finishing position of each driver in a race, stamped with the
  valuation percentage once the race has been valued
"""

from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from .base import Season, Driver


class RaceQuerySet(models.QuerySet):
    def chronological(self):
        """Races ordered by date, ties broken by round then id"""
        return self.order_by('race_date', 'round_number', 'id')

    def upcoming(self):
        return self.filter(race_date__gte=timezone.localdate()).order_by('race_date', 'round_number')

    def next_race(self):
        """Earliest race dated today or later, None when the season is over"""
        return self.upcoming().first()


class Race(models.Model):
    """
    Represents an individual Grand Prix event.

    Round 1 is the bootstrap race of a season and is valued against ghost
    results. Lifecycle: scheduled -> results submitted. Resubmitting results
    overwrites the previous pass for this race.
    """
    season = models.ForeignKey(Season, on_delete=models.CASCADE, related_name='races')
    name = models.CharField(max_length=255, help_text="e.g., 'Monaco Grand Prix'")
    location = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True)
    round_number = models.IntegerField(
        validators=[MinValueValidator(1)],
        help_text="Race number in season (1 for first race, 2 for second, etc.)"
    )
    race_date = models.DateField(help_text="Main race date, defines chronological order")
    results_submitted = models.BooleanField(
        default=False,
        help_text="Set once the valuation pass for this race has completed"
    )

    objects = RaceQuerySet.as_manager()

    class Meta:
        ordering = ['race_date', 'round_number']
        unique_together = [['season', 'round_number']]
        indexes = [
            models.Index(fields=['race_date'], name='fantasy_race_date_idx'),
        ]

    def __str__(self):
        return f"Round {self.round_number}: {self.name}"

    @property
    def is_first_round(self):
        return self.round_number == 1


class RaceResult(models.Model):
    """
    One finishing position per driver per race. Positions are unique within a
    race and contiguous from 1.
    """
    race = models.ForeignKey(Race, on_delete=models.CASCADE, related_name='results')
    driver = models.ForeignKey(Driver, on_delete=models.CASCADE, related_name='race_results')
    position = models.IntegerField(validators=[MinValueValidator(1)])
    valuation = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Percentage value change applied for this race"
    )

    class Meta:
        ordering = ['race', 'position']
        constraints = [
            models.UniqueConstraint(fields=['race', 'driver'], name='unique_driver_per_race'),
            models.UniqueConstraint(fields=['race', 'position'], name='unique_position_per_race'),
        ]

    def __str__(self):
        return f"{self.race.name} - P{self.position} {self.driver.name}"
