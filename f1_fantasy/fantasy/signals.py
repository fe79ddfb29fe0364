"""
Model signal handlers.
"""

from django.db.models.signals import post_save
from django.dispatch import receiver
from fantasy.models import User, UserTeam


@receiver(post_save, sender=User)
def create_default_rosters(sender, instance, created, **kwargs):
    """Every new user starts with a Premium and a Challenger roster"""
    if created:
        UserTeam.create_defaults_for(instance)
