"""
Append-only history written by the valuation engine.

- PerformanceHistory: finishing position per asset per race (engine and
  chassis rows carry a placeholder position of 0)
- AssetValueHistory: asset value before and after each race's valuation
- RosterCreditHistory: credits each roster gained from a race

Rows for a race are only removed when that race's results are resubmitted.
"""

from django.db import models
from django.db.models import Q
from .base import AssetKind, Driver, Engine, Chassis
from .events import Race


def asset_lookup(asset):
    """Filter kwargs selecting history rows that belong to the given asset"""
    return {'kind': asset.kind.value, asset.kind.value: asset}


class AssetHistoryQuerySet(models.QuerySet):
    def for_asset(self, asset):
        return self.filter(**asset_lookup(asset))

    def for_race(self, race):
        return self.filter(race=race)

    def chronological(self):
        return self.order_by('race__race_date', 'race__round_number', 'race_id')


class AssetHistory(models.Model):
    """
    Shared shape of per-asset history rows: a kind tag plus one populated
    foreign key matching that kind.
    """
    kind = models.CharField(max_length=10, choices=AssetKind.choices, db_index=True)
    driver = models.ForeignKey(Driver, on_delete=models.CASCADE, null=True, blank=True, related_name='+')
    engine = models.ForeignKey(Engine, on_delete=models.CASCADE, null=True, blank=True, related_name='+')
    chassis = models.ForeignKey(Chassis, on_delete=models.CASCADE, null=True, blank=True, related_name='+')
    race = models.ForeignKey(Race, on_delete=models.CASCADE, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)

    objects = AssetHistoryQuerySet.as_manager()

    class Meta:
        abstract = True

    @property
    def asset(self):
        return getattr(self, self.kind)

    @classmethod
    def record(cls, asset, race, **fields):
        return cls.objects.create(race=race, **asset_lookup(asset), **fields)


class PerformanceHistory(AssetHistory):
    position = models.IntegerField(help_text="Finishing position, 0 when not applicable")

    class Meta:
        ordering = ['race__race_date', 'kind']
        indexes = [
            models.Index(fields=['kind', 'race'], name='fantasy_perf_kind_race_idx'),
        ]
        verbose_name = 'Performance History'
        verbose_name_plural = 'Performance History'

    def __str__(self):
        return f"{self.asset} @ {self.race.name}: P{self.position}"


class AssetValueHistory(AssetHistory):
    previous_value = models.IntegerField(help_text="Value before this race was valued")
    value = models.IntegerField(help_text="Value after this race was valued")

    class Meta:
        ordering = ['race__race_date', 'kind']
        indexes = [
            models.Index(fields=['kind', 'race'], name='fantasy_value_kind_race_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['driver', 'race'], condition=Q(kind='driver'), name='unique_driver_value_per_race'
            ),
            models.UniqueConstraint(
                fields=['engine', 'race'], condition=Q(kind='engine'), name='unique_engine_value_per_race'
            ),
            models.UniqueConstraint(
                fields=['chassis', 'race'], condition=Q(kind='chassis'), name='unique_chassis_value_per_race'
            ),
        ]
        verbose_name = 'Asset Value History'
        verbose_name_plural = 'Asset Value History'

    def __str__(self):
        return f"{self.asset} @ {self.race.name}: {self.previous_value} -> {self.value}"

    @property
    def delta(self):
        return self.value - self.previous_value


class RosterCreditHistory(models.Model):
    user_team = models.ForeignKey('fantasy.UserTeam', on_delete=models.CASCADE, related_name='credit_history')
    race = models.ForeignKey(Race, on_delete=models.CASCADE, related_name='+')
    credits_gained = models.IntegerField()
    credits_after = models.IntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['race__race_date', 'user_team']
        unique_together = [['user_team', 'race']]
        verbose_name = 'Roster Credit History'
        verbose_name_plural = 'Roster Credit History'

    def __str__(self):
        return f"{self.user_team} @ {self.race.name}: {self.credits_gained:+d}"
