"""Totals and in-process filtering for the public transparency ledger."""

from dataclasses import dataclass

from services.filters import is_within_period


@dataclass(frozen=True)
class LedgerSummary:
    total_income: int
    total_expense: int
    balance: int
    total_donors: int


def compute_summary(donations, expenses):
    """
    Summarise verified income against expenses.

    Only donations with status ``success`` count as income, whatever the
    caller passes in. Donors are counted by distinct phone number.
    """
    verified = [d for d in donations if d.status == 'success']
    total_income = sum(int(d.amount) for d in verified)
    total_expense = sum(int(e.amount) for e in expenses)
    return LedgerSummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        total_donors=len({d.phone_number for d in verified}),
    )


def filter_donations(donations, search='', status='all', period='all', now=None):
    term = (search or '').strip().lower()
    result = []
    for donation in donations:
        if term and term not in donation.donor_name.lower() and term not in donation.phone_number:
            continue
        if status and status != 'all' and donation.status != status:
            continue
        if not is_within_period(donation.created_at, period, now=now):
            continue
        result.append(donation)
    return result


def filter_expenses(expenses, search='', period='all', now=None):
    term = (search or '').strip().lower()
    result = []
    for expense in expenses:
        if term and term not in expense.description.lower() and term not in (expense.location or '').lower():
            continue
        if not is_within_period(expense.created_at, period, now=now):
            continue
        result.append(expense)
    return result
