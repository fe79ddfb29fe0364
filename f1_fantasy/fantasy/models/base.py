"""
Core catalog entities for the fantasy market.

These models represent the assets users can buy (drivers, engines and
chassis) plus the custom User model. Asset values are integer credits and
are only changed by the valuation engine or by an administrator.
"""

from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """
    Custom User model - extends Django's AbstractUser.
    Two fantasy rosters are created for every new user (see signals.py).
    """
    class Meta:
        db_table = 'auth_user'
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return self.username


class AssetKind(models.TextChoices):
    """Closed set of tradeable asset kinds"""
    DRIVER = 'driver', 'Driver'
    ENGINE = 'engine', 'Engine'
    CHASSIS = 'chassis', 'Chassis'


class Season(models.Model):
    """
    Represents an F1 season
    """
    year = models.IntegerField(unique=True)
    name = models.CharField(max_length=100, help_text="e.g., '2025 Formula 1 Season'")
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ['-year']

    def __str__(self):
        return f"{self.year} Season"


class Engine(models.Model):
    """
    Power unit supplier. Its valuation is derived from every driver whose
    chassis currently runs this engine.
    """
    kind = AssetKind.ENGINE

    name = models.CharField(max_length=100, unique=True)
    value = models.IntegerField(help_text="Current market value in credits")

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class Chassis(models.Model):
    """
    Constructor/Team in racing terms. Called chassis here so it is never
    confused with a user's fantasy roster.
    """
    kind = AssetKind.CHASSIS

    name = models.CharField(max_length=100, unique=True)
    value = models.IntegerField(help_text="Current market value in credits")
    engine = models.ForeignKey(
        Engine,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='chassis',
        help_text="Engine currently fitted to this chassis"
    )

    class Meta:
        ordering = ['name']
        verbose_name_plural = 'Chassis'

    def __str__(self):
        return self.name


class DriverQuerySet(models.QuerySet):
    def active(self):
        """Drivers that can still be picked for a roster"""
        return self.filter(retired=False)

    def using_engine(self, engine):
        """Drivers whose chassis currently runs the given engine"""
        return self.filter(chassis__engine=engine)


class Driver(models.Model):
    """
    Driver - always belongs to exactly one chassis
    """
    kind = AssetKind.DRIVER

    name = models.CharField(max_length=200)
    number = models.IntegerField(unique=True, help_text="Car number")
    chassis = models.ForeignKey(Chassis, on_delete=models.PROTECT, related_name='drivers')
    value = models.IntegerField(help_text="Current market value in credits")
    retired = models.BooleanField(
        default=False,
        help_text="Retired drivers keep their history but cannot be newly selected"
    )

    objects = DriverQuerySet.as_manager()

    class Meta:
        ordering = ['number']

    def __str__(self):
        return f"{self.name} #{self.number} ({self.chassis.name})"
