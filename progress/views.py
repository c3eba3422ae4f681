import logging

from django.contrib import messages
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import render

from .services import current_week_progress, recent_weeks

logger = logging.getLogger(__name__)


def weekly_progress(request):
    current, history = None, []
    try:
        current = current_week_progress()
        history = recent_weeks()
    except DatabaseError:
        logger.exception("Error fetching weekly progress")
        messages.error(request, 'Gagal memuat progres mingguan. Silakan coba lagi.')

    return render(request, 'progress/weekly.html', {'current': current, 'history': history})


def weekly_progress_json(request):
    try:
        current = current_week_progress()
        history = recent_weeks()
    except DatabaseError as e:
        logger.exception("Error fetching weekly progress")
        return JsonResponse({'success': False, 'error': str(e)}, status=500)

    return JsonResponse({
        'success': True,
        'current_week': current.as_dict(),
        'recent_weeks': [week.as_dict() for week in history],
    })
