"""
Donation intake: store the payment proof, then record the pending donation.

The two writes are independent. If the insert fails after the upload, the
stored file is left behind and only logged.
"""

import logging
import os
import time

from django.core.files.storage import default_storage
from django.db import DatabaseError, transaction
from django.utils.crypto import get_random_string

from .models import Donation, PAYMENT_PROOF_BUCKET

logger = logging.getLogger(__name__)


class DonationSubmissionError(Exception):
    """Raised when the proof upload or the record insert fails."""


def random_proof_name(original_name, bucket=PAYMENT_PROOF_BUCKET):
    ext = os.path.splitext(original_name or '')[1].lower()
    stamp = int(time.time() * 1000)
    token = get_random_string(11, allowed_chars='abcdefghijklmnopqrstuvwxyz0123456789')
    return f"{bucket}/{stamp}-{token}{ext}"


def store_payment_proof(uploaded_file):
    """Upload the proof image under a randomised name and return the stored name."""
    name = random_proof_name(uploaded_file.name)
    try:
        return default_storage.save(name, uploaded_file)
    except OSError as e:
        logger.exception("Failed to store payment proof %s", name)
        raise DonationSubmissionError("Gagal mengunggah bukti transfer.") from e


def submit_donation(details, payment_proof, qris_data=''):
    """
    Persist a pending donation.

    Args:
        details: cleaned data of DonorDetailsForm (donor_name, phone_number, amount)
        payment_proof: validated uploaded image
        qris_data: payment code that was shown to the donor

    Returns:
        The created Donation.
    """
    stored_name = store_payment_proof(payment_proof)

    try:
        # The submission audit row is written by post_save; keep it in the same transaction
        with transaction.atomic():
            donation = Donation.objects.create(
                donor_name=details['donor_name'],
                phone_number=details['phone_number'],
                amount=details['amount'],
                payment_proof=stored_name,
                status=Donation.STATUS_PENDING,
                qris_data=qris_data,
            )
    except DatabaseError as e:
        logger.exception("Donation insert failed; payment proof %s left orphaned", stored_name)
        raise DonationSubmissionError("Gagal mengirim donasi. Silakan coba lagi.") from e

    logger.info("Pending donation %s recorded for %s", donation.id, donation.donor_name)
    return donation
