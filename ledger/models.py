from django.conf import settings
from django.db import models
from django.utils import timezone

RECEIPT_BUCKET = 'receipts'


class Expense(models.Model):
    """Money spent from the fund. Recorded once, never edited from the site."""

    amount = models.PositiveBigIntegerField(help_text="Amount in rupiah")
    description = models.TextField()
    location = models.CharField(max_length=255, blank=True)
    receipt = models.FileField(upload_to=f'{RECEIPT_BUCKET}/', max_length=255, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recorded_expenses',
    )

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['created_at'], name='expense_created_idx'),
        ]

    def __str__(self):
        return f"{self.description[:50]} - {self.amount}"

    def receipt_url(self):
        return self.receipt.url if self.receipt else ''
