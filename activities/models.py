from django.db import models
from django.conf import settings
from django.utils import timezone

TIMELINE_IMAGE_BUCKET = 'timeline-images'


class Activity(models.Model):
    """A documented charity activity shown on the public timeline."""

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=255, blank=True)
    activity_date = models.DateField()
    participant_count = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='created_activities',
    )

    class Meta:
        ordering = ['-activity_date', '-created_at']
        verbose_name_plural = 'activities'
        indexes = [
            models.Index(fields=['activity_date'], name='activity_date_idx'),
        ]

    def __str__(self):
        return f"{self.activity_date:%Y-%m-%d} {self.title}"

    def image_urls(self):
        return [img.image.url for img in self.images.all() if img.image]

    def preview_images(self, limit=None):
        """Return (images to show inline, number hidden behind the overflow badge)."""
        limit = limit or settings.TIMELINE_PREVIEW_LIMIT
        images = list(self.images.all())
        return images[:limit], max(len(images) - limit, 0)


class ActivityImage(models.Model):
    """Photo attached to an activity, kept in upload order."""

    activity = models.ForeignKey(Activity, on_delete=models.CASCADE, related_name='images')
    image = models.FileField(upload_to=f'{TIMELINE_IMAGE_BUCKET}/%Y/%m/', max_length=255)
    position = models.PositiveIntegerField(default=0)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['position', 'id']
        indexes = [
            models.Index(fields=['activity', 'position'], name='activity_image_position_idx'),
        ]

    def __str__(self):
        return f"{self.activity.title} - image {self.position + 1}"

    @classmethod
    def attach(cls, activity, files):
        """Append uploaded files to an activity after any existing images."""
        last = cls.objects.filter(activity=activity).aggregate(models.Max('position'))['position__max']
        start = 0 if last is None else last + 1
        return [
            cls.objects.create(activity=activity, image=f, position=start + offset)
            for offset, f in enumerate(files)
        ]
