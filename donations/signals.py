from django.db.models.signals import pre_save, post_save
from django.dispatch import receiver
from .models import Donation
from audit.models import AuditLog
import logging

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Donation)
def donation_pre_save(sender, instance, **kwargs):
    # Attach a snapshot of the stored status (if any) to instance
    instance._pre_save_status = None
    if instance.pk:
        instance._pre_save_status = (
            Donation.objects.filter(pk=instance.pk).values_list('status', flat=True).first()
        )


@receiver(post_save, sender=Donation)
def donation_post_save(sender, instance, created, **kwargs):
    if created:
        AuditLog.objects.create(
            user=None,
            action='Donation submitted',
            object_repr=str(instance),
            donation_id=instance.id,
            change_description=f'Payment proof stored as {instance.payment_proof.name or "-"}',
        )
        return

    previous = getattr(instance, '_pre_save_status', None)
    if previous and previous != instance.status:
        logger.info("Donation %s status %s -> %s", instance.id, previous, instance.status)
        AuditLog.objects.create(
            user=instance.verified_by,
            action=f'Donation {instance.get_status_display().lower()}',
            object_repr=str(instance),
            donation_id=instance.id,
            change_description=f'status: {previous} → {instance.status}',
        )
