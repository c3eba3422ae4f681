import logging

from django.db import DatabaseError
from django.shortcuts import render

from activities.models import Activity
from ledger.summary import compute_summary
from ledger.views import load_ledger
from progress.services import current_week_progress

logger = logging.getLogger(__name__)


def home(request):
    """Landing page: this week's progress, the ledger summary and the latest activities."""
    context = {'progress': None, 'summary': None, 'latest_activities': []}
    try:
        context['progress'] = current_week_progress()
        context['summary'] = compute_summary(*load_ledger())
        context['latest_activities'] = list(Activity.objects.prefetch_related('images')[:3])
    except DatabaseError:
        logger.exception("Error loading home page data")
    return render(request, 'ui/home.html', context)
