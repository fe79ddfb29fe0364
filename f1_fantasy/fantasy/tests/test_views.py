"""
Tests for the web views and JSON endpoints.
"""

from django.test import TestCase
from django.urls import reverse
from fantasy.models import User, UserTeam, BettingStatus
from fantasy.valuation import ResultEntry, submit_results
from fantasy.tests.helpers import build_catalog, build_season


class DashboardViewTests(TestCase):

    def setUp(self):
        self.catalog = build_catalog()
        self.user = User.objects.create_user(username='alice', password='test-pass')

    def test_requires_login(self):
        response = self.client.get(reverse('dashboard'))
        self.assertEqual(response.status_code, 302)

    def test_shows_both_rosters(self):
        self.client.login(username='alice', password='test-pass')
        response = self.client.get(reverse('dashboard'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Premium')
        self.assertContains(response, 'Challenger')


class EditRosterViewTests(TestCase):

    def setUp(self):
        self.catalog = build_catalog()
        self.user = User.objects.create_user(username='alice', password='test-pass')
        self.premium = UserTeam.objects.get(user=self.user, name=UserTeam.PREMIUM)
        self.client.login(username='alice', password='test-pass')

    def test_saves_roster_and_redirects(self):
        response = self.client.post(
            reverse('edit_roster', args=[self.premium.id]),
            {'driver1': self.catalog['d1'].id, 'driver2': '', 'engine': '', 'chassis': ''},
        )
        self.assertRedirects(response, reverse('dashboard'))
        self.premium.refresh_from_db()
        self.assertEqual(self.premium.driver1, self.catalog['d1'])

    def test_cannot_edit_another_users_roster(self):
        bob = User.objects.create_user(username='bob', password='test-pass')
        bob_team = UserTeam.objects.get(user=bob, name=UserTeam.PREMIUM)
        response = self.client.get(reverse('edit_roster', args=[bob_team.id]))
        self.assertEqual(response.status_code, 404)

    def test_closed_betting_shows_form_error(self):
        status = BettingStatus.load()
        status.is_open = False
        status.save()
        response = self.client.post(
            reverse('edit_roster', args=[self.premium.id]),
            {'driver1': self.catalog['d1'].id, 'driver2': '', 'engine': '', 'chassis': ''},
        )
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Betting is closed')


class RaceResultsViewTests(TestCase):

    def setUp(self):
        self.catalog = build_catalog()
        _, (self.race,) = build_season(1)

    def test_not_found_until_submitted(self):
        response = self.client.get(reverse('race_results', args=[self.race.id]))
        self.assertEqual(response.status_code, 404)

    def test_shows_results_once_submitted(self):
        order = [self.catalog[k] for k in ('d1', 'd2', 'd3', 'd4')]
        submit_results(
            self.race.id,
            [ResultEntry(driver_id=d.id, position=n) for n, d in enumerate(order, start=1)],
            notify=False,
        )
        response = self.client.get(reverse('race_results', args=[self.race.id]))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Driver One')

    def test_unknown_race(self):
        response = self.client.get(reverse('race_results', args=[999999]))
        self.assertEqual(response.status_code, 404)


class MarketViewTests(TestCase):

    def test_lists_catalog(self):
        build_catalog()
        response = self.client.get(reverse('market'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Driver Four')
        self.assertContains(response, 'E2')


class JsonEndpointTests(TestCase):

    def test_valuation_table(self):
        response = self.client.get(reverse('valuation_table'))
        self.assertEqual(response.status_code, 200)
        entries = response.json()['entries']
        self.assertEqual(len(entries), 41)
        self.assertEqual(entries[0]['difference'], -20)
        self.assertEqual(entries[20]['percentage_change'], 0.0)

    def test_standings(self):
        build_catalog()
        User.objects.create_user(username='alice', password='test-pass')
        response = self.client.get(reverse('standings'))
        data = response.json()
        self.assertEqual(len(data['drivers']), 4)
        self.assertEqual(len(data['chassis']), 3)
        self.assertEqual(len(data['engines']), 2)
        self.assertEqual(data['leaderboard'][0]['total_credits'], 1700)
