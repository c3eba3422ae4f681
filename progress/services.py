"""
Weekly fundraising progress.

A week runs for seven calendar days and ends on a Friday. Every aggregation
goes through ``weekly_totals`` so each window costs exactly one query.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta, FR
from django.conf import settings
from django.db.models import Count, Sum
from django.utils import timezone

from donations.models import Donation
from .models import WeeklyTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeeklyTotals:
    amount: int
    donor_count: int


@dataclass(frozen=True)
class WeeklyProgress:
    week_start: date
    week_end: date
    target_amount: int
    current_amount: int
    donor_count: int
    percentage: float

    @property
    def remaining(self) -> int:
        return max(self.target_amount - self.current_amount, 0)

    @property
    def average_donation(self) -> int:
        if not self.donor_count:
            return 0
        return round(self.current_amount / self.donor_count)

    @property
    def reached(self) -> bool:
        return self.percentage >= 100

    def as_dict(self) -> dict:
        data = asdict(self)
        data['week_start'] = self.week_start.isoformat()
        data['week_end'] = self.week_end.isoformat()
        data['remaining'] = self.remaining
        data['average_donation'] = self.average_donation
        return data


def week_window(day: date):
    """Return (start, end): end is the same or next Friday, start six days before it."""
    friday = day + relativedelta(weekday=FR)
    return friday - timedelta(days=6), friday


def progress_percentage(current, target) -> float:
    if not target or target <= 0:
        return 0.0
    return min(current / target * 100, 100.0)


def weekly_totals(start: date, end: date) -> WeeklyTotals:
    """Sum successful donations created on dates start..end inclusive; donors counted by name."""
    totals = Donation.objects.filter(
        status=Donation.STATUS_SUCCESS,
        created_at__date__gte=start,
        created_at__date__lte=end,
    ).aggregate(amount=Sum('amount'), donor_count=Count('donor_name', distinct=True))
    return WeeklyTotals(amount=int(totals['amount'] or 0), donor_count=totals['donor_count'] or 0)


def target_for_week(week_start: date) -> int:
    target = WeeklyTarget.objects.filter(week_start=week_start).values_list('target_amount', flat=True).first()
    return int(target) if target else settings.DEFAULT_WEEKLY_TARGET


def build_progress(start: date, end: date, target_amount: int) -> WeeklyProgress:
    totals = weekly_totals(start, end)
    return WeeklyProgress(
        week_start=start,
        week_end=end,
        target_amount=target_amount,
        current_amount=totals.amount,
        donor_count=totals.donor_count,
        percentage=progress_percentage(totals.amount, target_amount),
    )


def current_week_progress(today: date = None) -> WeeklyProgress:
    today = today or timezone.localdate()
    start, end = week_window(today)
    return build_progress(start, end, target_for_week(start))


def recent_weeks(limit: int = None):
    """Progress for the most recently configured weeks, newest first."""
    limit = limit or settings.PROGRESS_HISTORY_WEEKS
    weeks = []
    for target in WeeklyTarget.objects.order_by('-week_start')[:limit]:
        weeks.append(build_progress(target.week_start, target.week_end, int(target.target_amount)))
    return weeks
