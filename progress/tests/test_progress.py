"""
Test suite for weekly fundraising progress
"""

from datetime import date, datetime, timedelta

from django.test import TestCase, Client, SimpleTestCase, override_settings
from django.urls import reverse
from django.utils import timezone

from donations.models import Donation
from progress.models import WeeklyTarget
from progress.services import (
    current_week_progress,
    progress_percentage,
    recent_weeks,
    week_window,
    weekly_totals,
)


def at(day, hour=10):
    return timezone.make_aware(datetime(day.year, day.month, day.day, hour, 0))


class WeekWindowTestCase(SimpleTestCase):

    def test_friday_is_zero_to_six_days_ahead(self):
        start_day = date(2024, 1, 1)
        for offset in range(14):
            day = start_day + timedelta(days=offset)
            start, end = week_window(day)
            self.assertEqual(end.weekday(), 4)
            self.assertTrue(0 <= (end - day).days <= 6)
            self.assertEqual(end - start, timedelta(days=6))

    def test_friday_ends_its_own_week(self):
        self.assertEqual(week_window(date(2024, 1, 5)), (date(2023, 12, 30), date(2024, 1, 5)))

    def test_saturday_starts_a_new_week(self):
        self.assertEqual(week_window(date(2024, 1, 6)), (date(2024, 1, 6), date(2024, 1, 12)))


class ProgressPercentageTestCase(SimpleTestCase):

    def test_zero_current(self):
        self.assertEqual(progress_percentage(0, 1000000), 0)

    def test_partial(self):
        self.assertEqual(progress_percentage(250000, 1000000), 25)

    def test_reaching_target_is_exactly_100(self):
        self.assertEqual(progress_percentage(1000000, 1000000), 100)
        self.assertEqual(progress_percentage(3000000, 1000000), 100)

    def test_non_positive_target(self):
        self.assertEqual(progress_percentage(5000, 0), 0)


class WeeklyTotalsTestCase(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.start, cls.end = date(2023, 12, 30), date(2024, 1, 5)
        Donation.objects.create(donor_name='Budi', phone_number='0811', amount=100000,
                                status=Donation.STATUS_SUCCESS, created_at=at(cls.start, hour=0))
        Donation.objects.create(donor_name='Budi', phone_number='0822', amount=50000,
                                status=Donation.STATUS_SUCCESS, created_at=at(cls.end, hour=23))
        Donation.objects.create(donor_name='Siti', phone_number='0833', amount=25000,
                                status=Donation.STATUS_SUCCESS, created_at=at(date(2024, 1, 2)))
        # Outside the window
        Donation.objects.create(donor_name='Ani', phone_number='0844', amount=70000,
                                status=Donation.STATUS_SUCCESS, created_at=at(date(2024, 1, 6)))
        # Not verified
        Donation.objects.create(donor_name='Dodi', phone_number='0855', amount=90000,
                                created_at=at(date(2024, 1, 3)))

    def test_sums_successful_donations_in_window(self):
        totals = weekly_totals(self.start, self.end)
        self.assertEqual(totals.amount, 175000)

    def test_donors_counted_by_name(self):
        self.assertEqual(weekly_totals(self.start, self.end).donor_count, 2)

    def test_empty_window(self):
        totals = weekly_totals(date(2020, 1, 1), date(2020, 1, 7))
        self.assertEqual((totals.amount, totals.donor_count), (0, 0))

    def test_current_week_falls_back_to_default_target(self):
        progress = current_week_progress(today=date(2024, 1, 3))
        self.assertEqual(progress.week_start, self.start)
        self.assertEqual(progress.target_amount, 1000000)
        self.assertEqual(progress.current_amount, 175000)
        self.assertEqual(progress.remaining, 825000)
        self.assertEqual(progress.average_donation, 87500)
        self.assertAlmostEqual(progress.percentage, 17.5)

    @override_settings(DEFAULT_WEEKLY_TARGET=2000000)
    def test_default_target_is_configurable(self):
        self.assertEqual(current_week_progress(today=date(2020, 1, 1)).target_amount, 2000000)

    def test_configured_target_is_used(self):
        WeeklyTarget.objects.create(week_start=self.start, target_amount=150000)
        progress = current_week_progress(today=date(2024, 1, 5))
        self.assertEqual(progress.target_amount, 150000)
        self.assertEqual(progress.percentage, 100)
        self.assertTrue(progress.reached)
        self.assertEqual(progress.remaining, 0)


class RecentWeeksTestCase(TestCase):

    @classmethod
    def setUpTestData(cls):
        for weeks_back in range(6):
            start = date(2024, 1, 6) - timedelta(weeks=weeks_back)
            WeeklyTarget.objects.create(week_start=start, target_amount=500000)
        Donation.objects.create(donor_name='Budi', phone_number='0811', amount=125000,
                                status=Donation.STATUS_SUCCESS, created_at=at(date(2024, 1, 8)))

    def test_newest_first_and_limited(self):
        weeks = recent_weeks()
        self.assertEqual(len(weeks), 4)
        self.assertEqual(weeks[0].week_start, date(2024, 1, 6))
        self.assertEqual([w.week_start for w in weeks], sorted((w.week_start for w in weeks), reverse=True))

    def test_each_week_has_its_totals(self):
        latest = recent_weeks(limit=1)[0]
        self.assertEqual(latest.week_end, date(2024, 1, 12))
        self.assertEqual(latest.current_amount, 125000)
        self.assertEqual(latest.percentage, 25)


class WeeklyTargetModelTestCase(TestCase):

    def test_week_end_defaults_to_six_days_later(self):
        target = WeeklyTarget.objects.create(week_start=date(2024, 1, 6), target_amount=1000)
        self.assertEqual(target.week_end, date(2024, 1, 12))


class ProgressViewTestCase(TestCase):

    def test_page_renders(self):
        response = Client().get(reverse('progress:weekly'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['current'].target_amount, 1000000)

    def test_json_endpoint(self):
        response = Client().get(reverse('progress:weekly_json'))
        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['current_week']['target_amount'], 1000000)
        self.assertIn('remaining', data['current_week'])
        self.assertEqual(data['recent_weeks'], [])
