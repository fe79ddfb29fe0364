"""
Tests for model helpers and constraints.
"""

from django.db import IntegrityError, transaction
from django.test import TestCase
from fantasy.models import User, UserTeam, AssetValueHistory
from fantasy.tests.helpers import build_catalog, build_season


class UserTeamAssetIdsTests(TestCase):

    def setUp(self):
        self.catalog = build_catalog()
        self.user = User.objects.create_user(username='alice', password='test-pass')
        self.team = UserTeam.objects.get(user=self.user, name=UserTeam.PREMIUM)

    def test_empty_roster(self):
        self.assertEqual(self.team.asset_ids(), [])

    def test_selected_assets_in_slot_order(self):
        self.team.driver2 = self.catalog['d3']
        self.team.engine = self.catalog['e2']
        self.team.chassis = self.catalog['c1']
        self.team.save()

        self.assertEqual(self.team.asset_ids(), [
            ('driver', self.catalog['d3'].id),
            ('engine', self.catalog['e2'].id),
            ('chassis', self.catalog['c1'].id),
        ])


class AssetValueHistoryConstraintTests(TestCase):

    def setUp(self):
        self.catalog = build_catalog()
        _, (self.race, self.next_race) = build_season(2)

    def test_one_row_per_asset_and_race(self):
        AssetValueHistory.record(self.catalog['d1'], self.race, previous_value=200, value=246)

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                AssetValueHistory.record(self.catalog['d1'], self.race, previous_value=246, value=250)

    def test_same_asset_other_race_allowed(self):
        AssetValueHistory.record(self.catalog['e1'], self.race, previous_value=100, value=120)
        AssetValueHistory.record(self.catalog['e1'], self.next_race, previous_value=120, value=130)
        AssetValueHistory.record(self.catalog['c1'], self.race, previous_value=200, value=244)

        self.assertEqual(AssetValueHistory.objects.for_race(self.race).count(), 2)
