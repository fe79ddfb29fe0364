"""
Unit tests for roster editing rules.
"""

from django.test import TestCase
from fantasy.forms import UserTeamForm
from fantasy.models import User, Driver, UserTeam, BettingStatus
from fantasy.tests.helpers import build_catalog


class UserTeamFormTests(TestCase):

    def setUp(self):
        self.catalog = build_catalog()
        self.user = User.objects.create_user(username='alice', password='test-pass')
        self.premium = UserTeam.objects.get(user=self.user, name=UserTeam.PREMIUM)
        self.challenger = UserTeam.objects.get(user=self.user, name=UserTeam.CHALLENGER)

    def form_data(self, driver1=None, driver2=None, engine=None, chassis=None):
        return {
            'driver1': driver1.id if driver1 else '',
            'driver2': driver2.id if driver2 else '',
            'engine': engine.id if engine else '',
            'chassis': chassis.id if chassis else '',
        }

    def test_valid_roster_saved(self):
        data = self.form_data(self.catalog['d1'], self.catalog['d2'], self.catalog['e1'], self.catalog['c1'])
        form = UserTeamForm(data, instance=self.premium)
        self.assertTrue(form.is_valid(), form.errors)
        form.save()

        self.premium.refresh_from_db()
        self.assertEqual(self.premium.driver1, self.catalog['d1'])
        self.assertEqual(self.premium.chassis, self.catalog['c1'])
        # Editing a roster never spends credits
        self.assertEqual(self.premium.current_credits, 1000)

    def test_empty_roster_is_valid(self):
        form = UserTeamForm(self.form_data(), instance=self.challenger)
        self.assertTrue(form.is_valid(), form.errors)

    def test_insufficient_credits(self):
        # 200 + 100 + 100 + 200 = 600 fits 1000 but not 500
        self.challenger.current_credits = 500
        self.challenger.save()
        data = self.form_data(self.catalog['d1'], self.catalog['d2'], self.catalog['e1'], self.catalog['c1'])
        form = UserTeamForm(data, instance=self.challenger)
        self.assertFalse(form.is_valid())
        self.assertIn('Insufficient credits', form.non_field_errors()[0])

    def test_same_driver_twice(self):
        data = self.form_data(self.catalog['d1'], self.catalog['d1'])
        form = UserTeamForm(data, instance=self.premium)
        self.assertFalse(form.is_valid())
        self.assertIn('same driver twice', form.non_field_errors()[0])

    def test_driver_already_in_other_roster(self):
        self.challenger.driver1 = self.catalog['d3']
        self.challenger.save()

        form = UserTeamForm(self.form_data(self.catalog['d3']), instance=self.premium)
        self.assertFalse(form.is_valid())
        self.assertIn('Challenger', form.non_field_errors()[0])

    def test_other_users_rosters_do_not_conflict(self):
        bob = User.objects.create_user(username='bob', password='test-pass')
        bob_premium = UserTeam.objects.get(user=bob, name=UserTeam.PREMIUM)
        bob_premium.driver1 = self.catalog['d3']
        bob_premium.save()

        form = UserTeamForm(self.form_data(self.catalog['d3']), instance=self.premium)
        self.assertTrue(form.is_valid(), form.errors)

    def test_retired_driver_cannot_be_selected(self):
        retired = Driver.objects.create(
            name='Retired Driver', number=50, chassis=self.catalog['c2'], value=40, retired=True
        )
        form = UserTeamForm(self.form_data(retired), instance=self.premium)
        self.assertFalse(form.is_valid())
        self.assertIn('driver1', form.errors)

    def test_retired_driver_already_held_can_stay(self):
        held = self.catalog['d4']
        self.premium.driver1 = held
        self.premium.save()
        held.retired = True
        held.save()

        form = UserTeamForm(self.form_data(held, engine=self.catalog['e2']), instance=self.premium)
        self.assertTrue(form.is_valid(), form.errors)

    def test_betting_closed(self):
        status = BettingStatus.load()
        status.is_open = False
        status.save()

        form = UserTeamForm(self.form_data(self.catalog['d1']), instance=self.premium)
        self.assertFalse(form.is_valid())
        self.assertIn('Betting is closed', form.non_field_errors()[0])
