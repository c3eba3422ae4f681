from django import forms
from django.conf import settings
from .models import Activity

TIMELINE_FILTERS = (
    ('all', 'Semua'),
    ('recent', '7 Hari Terakhir'),
    ('month', '30 Hari Terakhir'),
)


class MultipleImageInput(forms.ClearableFileInput):
    allow_multiple_selected = True


class MultipleImageField(forms.FileField):
    """File field accepting several images in one upload."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('widget', MultipleImageInput(attrs={'class': 'form-control', 'accept': 'image/*'}))
        super().__init__(*args, **kwargs)

    def clean(self, data, initial=None):
        single_file_clean = super().clean
        if isinstance(data, (list, tuple)):
            return [single_file_clean(d, initial) for d in data]
        if not data:
            return []
        return [single_file_clean(data, initial)]


class ActivityForm(forms.ModelForm):
    """Form for documenting an activity together with its photos"""

    images = MultipleImageField(required=False, label='Foto Kegiatan')

    class Meta:
        model = Activity
        fields = ['title', 'description', 'location', 'activity_date', 'participant_count']
        widgets = {
            'title': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Nama kegiatan'}),
            'description': forms.Textarea(attrs={'rows': 4, 'class': 'form-control'}),
            'location': forms.TextInput(attrs={'class': 'form-control'}),
            'activity_date': forms.DateInput(attrs={'type': 'date', 'class': 'form-control'}),
            'participant_count': forms.NumberInput(attrs={'class': 'form-control', 'min': 0}),
        }
        labels = {
            'title': 'Judul',
            'description': 'Deskripsi',
            'location': 'Lokasi',
            'activity_date': 'Tanggal Kegiatan',
            'participant_count': 'Jumlah Penerima Manfaat',
        }

    def clean_images(self):
        """Validate file type and size of every uploaded photo"""
        images = self.cleaned_data.get('images') or []
        max_size = settings.PAYMENT_PROOF_MAX_BYTES
        for image in images:
            content_type = getattr(image, 'content_type', '') or ''
            if not content_type.startswith('image/'):
                raise forms.ValidationError(f"{image.name}: file harus berupa gambar")
            if image.size > max_size:
                raise forms.ValidationError(
                    f"{image.name}: ukuran file maksimal {max_size / 1024 / 1024:.0f}MB"
                )
        return images
