from datetime import timedelta

from django.core.exceptions import ValidationError
from django.db import models


class WeeklyTarget(models.Model):
    """Fundraising goal for one week ending on a Friday."""

    week_start = models.DateField(unique=True)
    week_end = models.DateField()
    target_amount = models.PositiveBigIntegerField(help_text="Target in rupiah")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-week_start']

    def __str__(self):
        return f"{self.week_start} - {self.week_end}: {self.target_amount}"

    def clean(self):
        if self.week_start and self.week_end and self.week_end < self.week_start:
            raise ValidationError({'week_end': 'Week end cannot be before week start.'})
        if self.target_amount is not None and self.target_amount <= 0:
            raise ValidationError({'target_amount': 'Target must be greater than zero.'})

    def save(self, *args, **kwargs):
        # Default the end to six days after the start
        if self.week_start and not self.week_end:
            self.week_end = self.week_start + timedelta(days=6)
        super().save(*args, **kwargs)
