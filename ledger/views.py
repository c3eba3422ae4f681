import logging

from django.contrib import messages
from django.db import DatabaseError
from django.http import HttpResponse
from django.shortcuts import redirect, render
from django.utils import timezone

from accounts.session import admin_required
from audit.models import AuditLog
from donations.models import Donation
from services.filters import PERIOD_CHOICES
from .exports import tab_table, to_csv, to_xlsx
from .forms import ExpenseForm
from .models import Expense
from .summary import compute_summary, filter_donations, filter_expenses

logger = logging.getLogger(__name__)

TABS = ('donations', 'expenses')


def _ledger_filters(request):
    tab = request.GET.get('tab', 'donations')
    period = request.GET.get('period', 'all')
    return {
        'tab': tab if tab in TABS else 'donations',
        'q': (request.GET.get('q') or '').strip(),
        'status': request.GET.get('status', 'all') or 'all',
        'period': period if period in PERIOD_CHOICES else 'all',
    }


def load_ledger():
    """Fetch verified donations and all expenses, newest first."""
    donations = list(Donation.objects.filter(status=Donation.STATUS_SUCCESS).order_by('-created_at'))
    expenses = list(Expense.objects.order_by('-created_at'))
    return donations, expenses


def _filtered(filters, donations, expenses):
    now = timezone.now()
    return (
        filter_donations(donations, filters['q'], filters['status'], filters['period'], now=now),
        filter_expenses(expenses, filters['q'], filters['period'], now=now),
    )


def transparency(request):
    filters = _ledger_filters(request)
    try:
        donations, expenses = load_ledger()
    except DatabaseError:
        logger.exception("Error fetching ledger data")
        messages.error(request, 'Gagal memuat data transparansi. Silakan coba lagi.')
        donations, expenses = [], []

    filtered_donations, filtered_expenses = _filtered(filters, donations, expenses)

    context = {
        'summary': compute_summary(donations, expenses),
        'donations': filtered_donations,
        'expenses': filtered_expenses,
        'donation_count': len(donations),
        'expense_count': len(expenses),
        'filters': filters,
        'status_choices': Donation.STATUS_CHOICES,
        'period_choices': PERIOD_CHOICES,
    }
    return render(request, 'ledger/transparency.html', context)


def export_ledger(request):
    """Download the currently filtered tab as CSV (default) or XLSX."""
    filters = _ledger_filters(request)
    fmt = request.GET.get('format', 'csv')
    try:
        donations, expenses = load_ledger()
    except DatabaseError:
        logger.exception("Error fetching ledger data for export")
        messages.error(request, 'Gagal mengekspor data. Silakan coba lagi.')
        return redirect('ledger:transparency')

    filtered_donations, filtered_expenses = _filtered(filters, donations, expenses)
    headers, rows = tab_table(filters['tab'], filtered_donations, filtered_expenses)
    stamp = timezone.localdate().isoformat()

    if fmt == 'xlsx':
        response = HttpResponse(
            to_xlsx(headers, rows, title=filters['tab']),
            content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        )
        response['Content-Disposition'] = f'attachment; filename={filters["tab"]}_{stamp}.xlsx'
        return response

    response = HttpResponse(to_csv(headers, rows), content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename={filters["tab"]}_{stamp}.csv'
    return response


@admin_required
def expense_create(request):
    """Record a new expense (admins only)"""
    if request.method == 'POST':
        form = ExpenseForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                expense = form.save(commit=False)
                expense.recorded_by = request.user
                expense.save()
            except (DatabaseError, OSError):
                logger.exception("Error saving expense")
                messages.error(request, 'Gagal menyimpan pengeluaran. Silakan coba lagi.')
            else:
                AuditLog.objects.create(
                    user=request.user,
                    action='Expense recorded',
                    object_repr=str(expense),
                    change_description=f'Expense of {expense.amount} at {expense.location or "-"}',
                )
                messages.success(request, 'Pengeluaran berhasil dicatat.')
                return redirect('ledger:transparency')
    else:
        form = ExpenseForm()

    return render(request, 'ledger/expense_form.html', {'form': form, 'title': 'Catat Pengeluaran'})
