import logging
from dataclasses import dataclass
from io import BytesIO

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_POST
from reportlab.graphics.charts.piecharts import Pie
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from accounts.session import admin_required
from donations.models import Donation
from services.filters import mask_phone_number

logger = logging.getLogger(__name__)

REVIEW_TABS = ('pending', 'all')


@dataclass(frozen=True)
class ReviewStats:
    total_donations: int
    pending_count: int
    total_amount: int
    total_donors: int


def review_stats(donations):
    """Headline numbers for the review page, computed over the loaded list."""
    successful = [d for d in donations if d.status == Donation.STATUS_SUCCESS]
    return ReviewStats(
        total_donations=len(donations),
        pending_count=sum(1 for d in donations if d.status == Donation.STATUS_PENDING),
        total_amount=sum(d.amount for d in successful),
        total_donors=len({d.phone_number for d in successful}),
    )


def load_donations():
    return list(Donation.objects.select_related('verified_by').order_by('-created_at'))


def _wants_json(request):
    return 'application/json' in request.headers.get('Accept', '')


@admin_required
def review(request):
    tab = request.GET.get('tab', 'pending')
    if tab not in REVIEW_TABS:
        tab = 'pending'

    try:
        donations = load_donations()
    except DatabaseError:
        logger.exception("Error fetching donations")
        messages.error(request, 'Gagal memuat data donasi.')
        donations = []

    pending = [d for d in donations if d.is_pending]
    context = {
        'tab': tab,
        'stats': review_stats(donations),
        'pending_donations': pending,
        'donations': pending if tab == 'pending' else donations,
        'all_count': len(donations),
        'admin': request.admin_context,
    }
    return render(request, 'dashboards/review.html', context)


@admin_required
@require_POST
def verify_donation(request, pk):
    """Approve or reject one pending donation, then go back to the list."""
    donation = get_object_or_404(Donation, pk=pk)
    status = request.POST.get('status', '')
    try:
        donation.verify(status, verified_by=request.user)
    except ValidationError as e:
        message = '; '.join(e.messages)
        if _wants_json(request):
            return JsonResponse({'success': False, 'error': message}, status=400)
        messages.error(request, message)
        return redirect('dashboards:review')
    except DatabaseError:
        logger.exception("Error updating donation %s", pk)
        if _wants_json(request):
            return JsonResponse({'success': False, 'error': 'Gagal mengupdate status'}, status=500)
        messages.error(request, 'Gagal mengupdate status')
        return redirect('dashboards:review')

    logger.info("Donation %s marked %s by %s", donation.pk, donation.status, request.admin_context.username)
    if _wants_json(request):
        return JsonResponse({
            'success': True,
            'id': donation.pk,
            'status': donation.status,
            'verified_at': donation.verified_at.isoformat(),
        })
    if donation.status == Donation.STATUS_SUCCESS:
        messages.success(request, 'Donasi berhasil diverifikasi')
    else:
        messages.success(request, 'Donasi ditolak')
    return redirect('dashboards:review')


def _rupiah(value):
    return f"Rp {value:,.0f}".replace(',', '.')


def build_review_pdf(donations, generated_at=None):
    """Render the review stats and the donation list as a PDF document."""
    generated_at = generated_at or timezone.localtime()
    stats = review_stats(donations)

    buf = BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4)
    styles = getSampleStyleSheet()
    story = []

    story.append(Paragraph("Laporan Verifikasi Donasi", styles['Title']))
    story.append(Spacer(1, 12))
    story.append(Paragraph(f"Generated on: {generated_at:%Y-%m-%d %H:%M:%S}", styles['Normal']))
    story.append(Spacer(1, 12))

    summary_text = f"""
    <b>Summary:</b><br/>
    Total Donations: {stats.total_donations}<br/>
    Pending: {stats.pending_count}<br/>
    Total Verified: {_rupiah(stats.total_amount)}<br/>
    Donors: {stats.total_donors}
    """
    story.append(Paragraph(summary_text, styles['Normal']))
    story.append(Spacer(1, 12))

    by_status = [
        (label, sum(1 for d in donations if d.status == value))
        for value, label in Donation.STATUS_CHOICES
    ]
    shown = [(label, count) for label, count in by_status if count]
    if shown:
        drawing = Drawing(400, 200)
        pc = Pie()
        pc.x = 150
        pc.y = 50
        pc.width = 100
        pc.height = 100
        pc.data = [count for _, count in shown]
        pc.labels = [label for label, _ in shown]
        pc.slices.strokeWidth = 0.5
        pc.slices.strokeColor = colors.black
        drawing.add(pc)
        story.append(Paragraph("Donations by Status", styles['Heading2']))
        story.append(drawing)
        story.append(Spacer(1, 12))

    table_data = [['Tanggal', 'Nama Donatur', 'Nomor HP', 'Jumlah', 'Status']]
    for d in donations:
        table_data.append([
            timezone.localtime(d.created_at).strftime('%d/%m/%Y'),
            d.donor_name,
            mask_phone_number(d.phone_number),
            _rupiah(d.amount),
            d.get_status_display(),
        ])
    table = Table(table_data, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
        ('BACKGROUND', (0, 1), (-1, -1), colors.beige),
        ('GRID', (0, 0), (-1, -1), 1, colors.black),
    ]))
    story.append(Paragraph("Donations", styles['Heading2']))
    story.append(table)

    doc.build(story)
    return buf.getvalue()


@admin_required
def review_pdf(request):
    try:
        donations = load_donations()
    except DatabaseError:
        logger.exception("Error fetching donations for report")
        messages.error(request, 'Gagal membuat laporan.')
        return redirect('dashboards:review')

    resp = HttpResponse(build_review_pdf(donations), content_type='application/pdf')
    resp['Content-Disposition'] = f'attachment; filename=donation_review_{timezone.localdate().isoformat()}.pdf'
    return resp
