"""
Tests for the valuation pass.

Tests cover:
- Value update formula for drivers, engines and chassis
- Result stamping and history bookkeeping
- Roster credit fan-out to every roster
- First-round scenario end to end
- Transactional rollback and error reporting
"""

from decimal import Decimal
from unittest import mock
from django.test import TestCase
from fantasy.models import (
    User, Engine, Chassis, Driver, RaceResult, UserTeam, AssetKind,
    PerformanceHistory, AssetValueHistory, RosterCreditHistory,
)
from fantasy.valuation import (
    apply_valuations, valuation_amount, NoResultsError, RaceNotFoundError,
)
from fantasy.tests.helpers import build_catalog, build_season, store_results


def refresh(*objs):
    for obj in objs:
        obj.refresh_from_db()


class ApplyValuationsTests(TestCase):
    """Round 1: D1 P1, D2 P2, D3 P3, D4 P4 -> 23%, 20%, 18%, 15%"""

    def setUp(self):
        self.catalog = build_catalog()
        _, self.races = build_season(2)
        self.race = self.races[0]
        store_results(self.race, [self.catalog[k] for k in ('d1', 'd2', 'd3', 'd4')])

        self.user = User.objects.create_user(username='alice', password='test-pass')
        self.premium = UserTeam.objects.get(user=self.user, name=UserTeam.PREMIUM)
        self.challenger = UserTeam.objects.get(user=self.user, name=UserTeam.CHALLENGER)
        self.premium.driver1 = self.catalog['d1']
        self.premium.driver2 = self.catalog['d2']
        self.premium.engine = self.catalog['e1']
        self.premium.chassis = self.catalog['c1']
        self.premium.save()

    def test_driver_values_updated(self):
        apply_valuations(self.race.id)
        d1, d2, d3, d4 = (self.catalog[k] for k in ('d1', 'd2', 'd3', 'd4'))
        refresh(d1, d2, d3, d4)
        self.assertEqual(d1.value, 246)
        self.assertEqual(d2.value, 120)
        self.assertEqual(d3.value, 118)
        # 50 * 15% = 7.5 rounds up
        self.assertEqual(d4.value, 58)

    def test_engine_and_chassis_values_updated(self):
        apply_valuations(self.race.id)
        e1, e2, c1, c2, c3 = (self.catalog[k] for k in ('e1', 'e2', 'c1', 'c2', 'c3'))
        refresh(e1, e2, c1, c2, c3)
        self.assertEqual(e1.value, 120)
        self.assertEqual(e2.value, 115)
        self.assertEqual(c1.value, 244)
        self.assertEqual(c2.value, 118)
        self.assertEqual(c3.value, 115)

    def test_results_stamped_with_percentage(self):
        apply_valuations(self.race.id)
        stamped = dict(
            RaceResult.objects.filter(race=self.race).values_list('driver__number', 'valuation')
        )
        self.assertEqual(stamped, {
            1: Decimal('23'), 2: Decimal('20'), 3: Decimal('18'), 4: Decimal('15'),
        })

    def test_race_marked_submitted(self):
        report = apply_valuations(self.race.id)
        self.race.refresh_from_db()
        self.assertTrue(self.race.results_submitted)
        self.assertEqual(report.race_id, self.race.id)

    def test_history_rows_for_every_asset(self):
        apply_valuations(self.race.id)

        self.assertEqual(PerformanceHistory.objects.for_race(self.race).count(), 9)
        self.assertEqual(AssetValueHistory.objects.for_race(self.race).count(), 9)

        d2_perf = PerformanceHistory.objects.for_asset(self.catalog['d2']).get(race=self.race)
        self.assertEqual(d2_perf.position, 2)
        e1_perf = PerformanceHistory.objects.for_asset(self.catalog['e1']).get(race=self.race)
        self.assertEqual(e1_perf.position, 0)
        self.assertEqual(e1_perf.kind, AssetKind.ENGINE)

        c1_value = AssetValueHistory.objects.for_asset(self.catalog['c1']).get(race=self.race)
        self.assertEqual(c1_value.previous_value, 200)
        self.assertEqual(c1_value.value, 244)
        self.assertEqual(c1_value.delta, 44)

    def test_driver_without_result_keeps_value(self):
        reserve = Driver.objects.create(name='Reserve', number=99, chassis=self.catalog['c3'], value=80)
        report = apply_valuations(self.race.id)

        reserve.refresh_from_db()
        self.assertEqual(reserve.value, 80)
        self.assertEqual(report.find(AssetKind.DRIVER, reserve.id).amount, 0)
        perf = PerformanceHistory.objects.for_asset(reserve).get(race=self.race)
        self.assertEqual(perf.position, 0)
        self.assertFalse(RaceResult.objects.filter(race=self.race, driver=reserve).exists())

    def test_reserve_driver_lowers_chassis_mean(self):
        """A chassis averages every assigned driver, including those without a result"""
        Driver.objects.create(name='Reserve', number=99, chassis=self.catalog['c3'], value=80)
        report = apply_valuations(self.race.id)
        # (15 + 0) / 2 = 7.5 rounds up
        self.assertEqual(report.find(AssetKind.CHASSIS, self.catalog['c3'].id).percent, 8)

    def test_roster_credits_use_updated_values(self):
        apply_valuations(self.race.id)
        self.premium.refresh_from_db()
        # D1 246 * 23% = 56.58 -> 57, D2 120 * 20% = 24,
        # E1 120 * 20% = 24, C1 244 * 22% = 53.68 -> 54
        self.assertEqual(self.premium.current_credits, 1000 + 57 + 24 + 24 + 54)

        history = RosterCreditHistory.objects.get(user_team=self.premium, race=self.race)
        self.assertEqual(history.credits_gained, 159)
        self.assertEqual(history.credits_after, 1159)

    def test_every_roster_is_credited(self):
        """Empty rosters and rosters holding drivers without results gain 0"""
        reserve = Driver.objects.create(name='Reserve', number=99, chassis=self.catalog['c3'], value=80)
        bob = User.objects.create_user(username='bob', password='test-pass')
        bob_premium = UserTeam.objects.get(user=bob, name=UserTeam.PREMIUM)
        bob_premium.driver1 = reserve
        bob_premium.save()

        report = apply_valuations(self.race.id)

        self.assertEqual(len(report.rosters), UserTeam.objects.count())
        self.assertEqual(RosterCreditHistory.objects.filter(race=self.race).count(), 4)

        refresh(self.challenger, bob_premium)
        self.assertEqual(self.challenger.current_credits, 700)
        self.assertEqual(bob_premium.current_credits, 1000)
        self.assertEqual(
            RosterCreditHistory.objects.get(user_team=self.challenger, race=self.race).credits_gained, 0
        )

    def test_report_summary(self):
        report = apply_valuations(self.race.id)
        summary = report.summary()
        self.assertEqual(summary['drivers_valued'], 4)
        self.assertEqual(summary['engines_valued'], 2)
        self.assertEqual(summary['chassis_valued'], 3)
        self.assertEqual(summary['rosters_updated'], 2)
        self.assertEqual(summary['credits_distributed'], 159)

    def test_second_round_uses_previous_results(self):
        apply_valuations(self.race.id)
        round_two = self.races[1]
        store_results(round_two, [self.catalog[k] for k in ('d4', 'd3', 'd2', 'd1')])

        apply_valuations(round_two.id)

        stamped = dict(
            RaceResult.objects.filter(race=round_two).values_list('driver__number', 'valuation')
        )
        # Baselines (10 + 10 + round 1 position) / 3
        # D1: 7 vs 4th -> +3 -> 8%; D2: 7.33 vs 3rd -> +4 -> 10%
        # D3: 7.67 vs 2nd -> +6 -> 15%; D4: 8 vs 1st -> +7 -> 18%
        self.assertEqual(stamped, {
            1: Decimal('8'), 2: Decimal('10'), 3: Decimal('15'), 4: Decimal('18'),
        })


class ApplyValuationsErrorTests(TestCase):

    def setUp(self):
        self.catalog = build_catalog()
        _, (self.race,) = build_season(1)

    def test_unknown_race(self):
        with self.assertRaises(RaceNotFoundError) as ctx:
            apply_valuations(999999)
        self.assertIn('999999', str(ctx.exception))

    def test_race_without_results(self):
        with self.assertRaises(NoResultsError):
            apply_valuations(self.race.id)
        self.race.refresh_from_db()
        self.assertFalse(self.race.results_submitted)

    def test_failure_rolls_back_every_change(self):
        store_results(self.race, [self.catalog[k] for k in ('d1', 'd2', 'd3', 'd4')])
        User.objects.create_user(username='alice', password='test-pass')

        with mock.patch('fantasy.valuation.apply._credit_roster', side_effect=RuntimeError('boom')):
            with self.assertRaises(RuntimeError):
                apply_valuations(self.race.id)

        self.race.refresh_from_db()
        self.assertFalse(self.race.results_submitted)
        self.assertEqual(Driver.objects.get(number=1).value, 200)
        self.assertEqual(Engine.objects.get(name='E1').value, 100)
        self.assertEqual(Chassis.objects.get(name='C1').value, 200)
        self.assertFalse(PerformanceHistory.objects.for_race(self.race).exists())
        self.assertFalse(AssetValueHistory.objects.for_race(self.race).exists())
        self.assertEqual(RaceResult.objects.filter(race=self.race, valuation__isnull=True).count(), 4)


class FirstRoundScenarioTests(TestCase):
    """
    Driver A wins from the ghost baseline (+9), driver B finishes 20th (-10).
    A chassis holding only A and B is valued at their rounded mean, and a
    roster holding A and that chassis gains both amounts on the new values.
    """

    def test_first_round_scenario(self):
        engine = Engine.objects.create(name='Y', value=100)
        chassis = Chassis.objects.create(name='X', value=100, engine=engine)
        driver_a = Driver.objects.create(name='Driver A', number=10, chassis=chassis, value=100)
        driver_b = Driver.objects.create(name='Driver B', number=20, chassis=chassis, value=100)
        _, (race,) = build_season(1)
        RaceResult.objects.create(race=race, driver=driver_a, position=1)
        RaceResult.objects.create(race=race, driver=driver_b, position=20)

        user = User.objects.create_user(username='carol', password='test-pass')
        roster = UserTeam.objects.get(user=user, name=UserTeam.PREMIUM)
        roster.driver1 = driver_a
        roster.chassis = chassis
        roster.save()

        report = apply_valuations(race.id)

        table_plus_9, table_minus_10 = Decimal('23'), Decimal('-25')
        chassis_pct = report.find(AssetKind.CHASSIS, chassis.id).percent
        # (23 - 25) / 2 = -1
        self.assertEqual(chassis_pct, -1)

        refresh(driver_a, driver_b, chassis, roster)
        self.assertEqual(driver_a.value, 100 + valuation_amount(100, table_plus_9))
        self.assertEqual(driver_b.value, 100 + valuation_amount(100, table_minus_10))
        self.assertEqual(chassis.value, 99)

        expected_gain = (
            valuation_amount(driver_a.value, table_plus_9)
            + valuation_amount(chassis.value, chassis_pct)
        )
        # 123 * 23% = 28.29 -> 28, 99 * -1% = -0.99 -> -1
        self.assertEqual(expected_gain, 27)
        self.assertEqual(roster.current_credits, 1000 + expected_gain)
