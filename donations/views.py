import logging

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect, render

from services.qris import QRISError, generate_qris, render_qr_png
from .forms import DonorDetailsForm, PaymentProofForm
from .services import DonationSubmissionError, submit_donation

logger = logging.getLogger(__name__)

SESSION_KEY = 'donation_flow'

STEP_DETAILS = 1
STEP_PAYMENT = 2
STEP_PROOF = 3
STEP_DONE = 4


def _flow(request):
    return request.session.get(SESSION_KEY) or {'step': STEP_DETAILS}


def _save_flow(request, flow):
    request.session[SESSION_KEY] = flow
    request.session.modified = True


def donate(request):
    """Four-step donation flow: details, payment code, proof upload, done."""
    flow = _flow(request)
    details_form = DonorDetailsForm(initial=flow.get('details'))
    proof_form = PaymentProofForm()

    if request.method == 'POST':
        action = request.POST.get('action', 'details')

        if action == 'reset':
            request.session.pop(SESSION_KEY, None)
            return redirect('donations:donate')

        if action == 'details':
            details_form = DonorDetailsForm(request.POST)
            if details_form.is_valid():
                details = details_form.cleaned_data
                try:
                    qris_data = generate_qris(details['amount'])
                except QRISError:
                    logger.exception("Error generating QR code")
                    messages.error(request, 'Gagal membuat QR code. Silakan coba lagi.')
                else:
                    _save_flow(request, {'step': STEP_PAYMENT, 'details': details, 'qris_data': qris_data})
                    return redirect('donations:donate')

        elif action == 'paid' and flow.get('step') == STEP_PAYMENT:
            flow['step'] = STEP_PROOF
            _save_flow(request, flow)
            return redirect('donations:donate')

        elif action == 'back' and flow.get('step') in (STEP_PAYMENT, STEP_PROOF):
            flow['step'] -= 1
            _save_flow(request, flow)
            return redirect('donations:donate')

        elif action == 'submit' and flow.get('step') == STEP_PROOF:
            proof_form = PaymentProofForm(request.POST, request.FILES)
            if proof_form.is_valid():
                try:
                    donation = submit_donation(
                        flow['details'],
                        proof_form.cleaned_data['payment_proof'],
                        qris_data=flow.get('qris_data', ''),
                    )
                except DonationSubmissionError as e:
                    messages.error(request, str(e))
                else:
                    _save_flow(request, {'step': STEP_DONE, 'donation_id': donation.id, 'details': flow['details']})
                    messages.success(request, 'Donasi berhasil dikirim! Menunggu verifikasi admin.')
                    return redirect('donations:donate')
        else:
            messages.error(request, 'Langkah donasi tidak valid. Silakan mulai kembali.')
            return redirect('donations:donate')

    qr_code_url = ''
    if flow.get('step') == STEP_PAYMENT and flow.get('qris_data'):
        try:
            qr_code_url = render_qr_png(flow['qris_data'])
        except Exception:
            logger.exception("Error rendering QR code")
            messages.error(request, 'Gagal membuat QR code. Silakan coba lagi.')

    context = {
        'step': flow.get('step', STEP_DETAILS),
        'steps': [STEP_DETAILS, STEP_PAYMENT, STEP_PROOF, STEP_DONE],
        'details': flow.get('details'),
        'details_form': details_form,
        'proof_form': proof_form,
        'qris_data': flow.get('qris_data', ''),
        'qr_code_url': qr_code_url,
        'preset_amounts': settings.DONATION_PRESET_AMOUNTS,
        'max_proof_mb': settings.PAYMENT_PROOF_MAX_BYTES // (1024 * 1024),
    }
    return render(request, 'donations/donate.html', context)
