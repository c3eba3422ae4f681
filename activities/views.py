import logging

from django.conf import settings
from django.contrib import messages
from django.db import DatabaseError, transaction
from django.shortcuts import redirect, render
from django.utils import timezone

from accounts.session import admin_required
from audit.models import AuditLog
from services.filters import is_within_period
from .forms import ActivityForm, TIMELINE_FILTERS
from .models import Activity, ActivityImage

logger = logging.getLogger(__name__)


def load_activities():
    """All activities newest first, with their images in one extra query."""
    return list(Activity.objects.prefetch_related('images').order_by('-activity_date', '-created_at'))


def filter_activities(activities, period, now=None):
    now = now or timezone.now()
    return [a for a in activities if is_within_period(a.activity_date, period, now=now, inclusive=True)]


def timeline(request):
    period = request.GET.get('filter', 'all')
    if period not in dict(TIMELINE_FILTERS):
        period = 'all'

    try:
        activities = load_activities()
    except DatabaseError:
        logger.exception("Error fetching activities")
        messages.error(request, 'Gagal memuat timeline kegiatan.')
        activities = []

    limit = settings.TIMELINE_PREVIEW_LIMIT
    cards = []
    for activity in filter_activities(activities, period):
        preview, overflow = activity.preview_images(limit)
        cards.append({'activity': activity, 'images': preview, 'overflow': overflow})

    context = {
        'cards': cards,
        'total_count': len(activities),
        'filter': period,
        'filter_choices': TIMELINE_FILTERS,
    }
    return render(request, 'activities/timeline.html', context)


@admin_required
def activity_create(request):
    """Document a new activity with photos (admins only)"""
    if request.method == 'POST':
        form = ActivityForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                with transaction.atomic():
                    activity = form.save(commit=False)
                    activity.created_by = request.user
                    activity.save()
                    images = ActivityImage.attach(activity, form.cleaned_data['images'])
            except (DatabaseError, OSError):
                logger.exception("Error saving activity")
                messages.error(request, 'Gagal menyimpan kegiatan. Silakan coba lagi.')
            else:
                AuditLog.objects.create(
                    user=request.user,
                    action='Activity created',
                    object_repr=str(activity),
                    change_description=f'{len(images)} image(s) uploaded',
                )
                messages.success(request, f'Kegiatan "{activity.title}" berhasil ditambahkan.')
                return redirect('activities:timeline')
    else:
        form = ActivityForm(initial={'activity_date': timezone.localdate()})

    return render(request, 'activities/activity_form.html', {'form': form, 'title': 'Tambah Kegiatan'})
