"""Helpers shared by the public listings: phone masking and recency buckets."""

from datetime import date, datetime, time, timedelta

from django.utils import timezone

PERIOD_DAYS = {
    'week': 7,
    'recent': 7,
    'month': 30,
}
PERIOD_CHOICES = ('all', 'today', 'week', 'month')


def mask_phone_number(phone):
    """Keep the first 2 and last 3 characters, replace the middle with 'x'."""
    if phone is None:
        return ''
    phone = str(phone)
    # Four characters leave nothing to hide once 2 + 3 are kept
    if len(phone) < 5:
        return phone
    return f"{phone[:2]}{'x' * (len(phone) - 5)}{phone[-3:]}"


def _as_datetime(value):
    if isinstance(value, datetime):
        if timezone.is_naive(value):
            return timezone.make_aware(value)
        return value
    if isinstance(value, date):
        return timezone.make_aware(datetime.combine(value, time.min))
    raise TypeError(f"Unsupported moment: {value!r}")


def is_within_period(moment, period, now=None, inclusive=False):
    """
    Check whether ``moment`` falls in a recency bucket relative to ``now``.

    ``today`` matches the same local calendar date; ``week``/``recent`` and
    ``month`` match moments after ``now`` minus 7 or 30 days (at or after when
    ``inclusive``). ``all`` and unknown buckets match everything.
    """
    if not period or period == 'all':
        return True
    now = now or timezone.now()
    moment = _as_datetime(moment)
    if period == 'today':
        return timezone.localtime(moment).date() == timezone.localtime(now).date()
    days = PERIOD_DAYS.get(period)
    if days is None:
        return True
    cutoff = now - timedelta(days=days)
    return moment >= cutoff if inclusive else moment > cutoff
