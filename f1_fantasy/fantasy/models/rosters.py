"""
User-owned fantasy data.

- UserTeam: a user's roster (2 drivers, 1 engine, 1 chassis) and credits
- BettingStatus: global switch controlling whether rosters can be edited
"""

from django.db import models
from config.rules import FANTASY_RULES
from .base import AssetKind, User, Driver, Engine, Chassis


class UserTeam(models.Model):
    """
    A fantasy roster. Every user owns a "Premium" and a "Challenger" roster,
    created automatically on registration.

    current_credits changes when the valuation engine processes a race; asset
    selections change when the user edits the roster.
    """
    PREMIUM = 'Premium'
    CHALLENGER = 'Challenger'

    NAME_CHOICES = [
        (PREMIUM, 'Premium'),
        (CHALLENGER, 'Challenger'),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='fantasy_teams')
    name = models.CharField(max_length=20, choices=NAME_CHOICES)
    initial_credits = models.IntegerField()
    current_credits = models.IntegerField()
    driver1 = models.ForeignKey(
        Driver, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    driver2 = models.ForeignKey(
        Driver, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    engine = models.ForeignKey(
        Engine, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    chassis = models.ForeignKey(
        Chassis, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['user', '-initial_credits']
        unique_together = [['user', 'name']]
        verbose_name = 'User Team'
        verbose_name_plural = 'User Teams'

    def __str__(self):
        return f"{self.user.username}'s {self.name} team"

    @classmethod
    def create_defaults_for(cls, user):
        """Create the two standard rosters for a new user"""
        teams = []
        for name, credits in FANTASY_RULES['roster']['initial_credits'].items():
            team, _ = cls.objects.get_or_create(
                user=user,
                name=name,
                defaults={'initial_credits': credits, 'current_credits': credits},
            )
            teams.append(team)
        return teams

    @property
    def drivers(self):
        return [d for d in (self.driver1, self.driver2) if d is not None]

    def assets(self):
        """Selected assets in slot order, skipping empty slots"""
        return [a for a in (self.driver1, self.driver2, self.engine, self.chassis) if a is not None]

    def asset_ids(self):
        """(kind, id) pairs of the selected assets, without loading them"""
        slots = [
            (AssetKind.DRIVER, self.driver1_id),
            (AssetKind.DRIVER, self.driver2_id),
            (AssetKind.ENGINE, self.engine_id),
            (AssetKind.CHASSIS, self.chassis_id),
        ]
        return [(kind.value, asset_id) for kind, asset_id in slots if asset_id is not None]

    @property
    def total_value(self):
        """Sum of the current market value of every selected asset"""
        return sum(asset.value for asset in self.assets())


class BettingStatus(models.Model):
    """
    Singleton switch. While betting is closed users cannot change rosters.
    """
    is_open = models.BooleanField(default=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Betting Status'
        verbose_name_plural = 'Betting Status'

    def __str__(self):
        return 'Betting open' if self.is_open else 'Betting closed'

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        status, _ = cls.objects.get_or_create(pk=1)
        return status
