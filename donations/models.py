from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from services.filters import mask_phone_number

PAYMENT_PROOF_BUCKET = 'payment-proofs'


class Donation(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_SUCCESS = 'success'
    STATUS_REJECTED = 'rejected'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_SUCCESS, 'Berhasil'),
        (STATUS_REJECTED, 'Ditolak'),
    ]
    # Admin decisions allowed from each status
    TRANSITIONS = {
        STATUS_PENDING: (STATUS_SUCCESS, STATUS_REJECTED),
        STATUS_SUCCESS: (),
        STATUS_REJECTED: (),
    }

    donor_name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=32)
    amount = models.PositiveBigIntegerField(help_text="Amount in rupiah")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    payment_proof = models.FileField(upload_to=f'{PAYMENT_PROOF_BUCKET}/', max_length=255, blank=True)
    qris_data = models.TextField(blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    verified_at = models.DateTimeField(null=True, blank=True)
    verified_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='verified_donations',
    )

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='donation_status_created_idx'),
            models.Index(fields=['phone_number'], name='donation_phone_idx'),
        ]

    def __str__(self):
        return f"{self.donor_name} - {self.amount} ({self.status})"

    @property
    def is_pending(self):
        return self.status == self.STATUS_PENDING

    @property
    def masked_phone(self):
        return mask_phone_number(self.phone_number)

    def payment_proof_url(self):
        return self.payment_proof.url if self.payment_proof else ''

    def can_transition_to(self, status):
        return status in self.TRANSITIONS.get(self.status, ())

    def verify(self, status, verified_by=None):
        """Approve or reject a pending donation and stamp the verification time."""
        if status not in (self.STATUS_SUCCESS, self.STATUS_REJECTED):
            raise ValidationError({'status': f"'{status}' is not a verification decision."})
        if not self.can_transition_to(status):
            raise ValidationError(
                {'status': f"Donation is already {self.get_status_display().lower()} and cannot change."}
            )
        self.status = status
        self.verified_at = timezone.now()
        self.verified_by = verified_by
        self.save(update_fields=['status', 'verified_at', 'verified_by'])
        return self
