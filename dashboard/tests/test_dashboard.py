"""
Dashboard counts and birthday list.

Run with:
    python manage.py test dashboard -v 2
"""
from django.test import TestCase
from django.urls import reverse
from dashboard.views import upcoming_birthdays
from ministry.models import CivilStatus
from ministry.tests.helpers import make_church, make_minister, make_rank, make_user
import datetime


class DashboardHomeTest(TestCase):

    def setUp(self):
        self.client.force_login(make_user())

    def test_counts(self):
        make_minister()
        make_minister(civil_status=CivilStatus.MARRIED, spouse_name="Ana")
        make_church()
        make_rank()

        response = self.client.get(reverse("dashboard:home"))
        stats = response.context["stats"]
        self.assertEqual(stats["total_ministers"], 2)
        self.assertEqual(stats["ministers_this_month"], 2)
        self.assertEqual(stats["total_churches"], 1)
        self.assertEqual(stats["total_ranks"], 1)

        breakdown = {row["value"]: row["count"] for row in response.context["civil_status_breakdown"]}
        self.assertEqual(breakdown[CivilStatus.SINGLE], 1)
        self.assertEqual(breakdown[CivilStatus.MARRIED], 1)
        self.assertEqual(breakdown[CivilStatus.WIDOWED], 0)

    def test_recent_ministers_limited_to_five(self):
        for index in range(7):
            make_minister(first_name=f"Minister{index}")
        response = self.client.get(reverse("dashboard:home"))
        self.assertEqual(len(response.context["recent_ministers"]), 5)

    def test_requires_login(self):
        self.client.logout()
        self.assertEqual(self.client.get(reverse("dashboard:home")).status_code, 302)


class UpcomingBirthdayTest(TestCase):

    def test_within_a_week(self):
        today = datetime.date.today()
        soon = today + datetime.timedelta(days=3)
        later = today + datetime.timedelta(days=20)
        make_minister(first_name="Soon", date_of_birth=soon.replace(year=1980))
        make_minister(first_name="Later", date_of_birth=later.replace(year=1980))

        result = upcoming_birthdays()
        self.assertEqual([m.first_name for m in result], ["Soon"])
        self.assertEqual(result[0].days_until, 3)

    def test_leap_day_birthday_in_march_window(self):
        make_minister(first_name="Leap", date_of_birth=datetime.date(1992, 2, 29))
        make_minister(first_name="April", date_of_birth=datetime.date(1990, 4, 20))

        result = upcoming_birthdays(today=datetime.date(2023, 2, 27))
        self.assertEqual([m.first_name for m in result], ["Leap"])
        self.assertEqual(result[0].days_until, 2)

    def test_leap_day_birthday_when_window_starts_in_march(self):
        make_minister(first_name="Leap", date_of_birth=datetime.date(1992, 2, 29))

        result = upcoming_birthdays(today=datetime.date(2023, 3, 1))
        self.assertEqual([m.days_until for m in result], [0])
