from django import forms
from django.conf import settings

# Tag 54 of a QRIS payload holds at most 13 characters
MAX_DONATION_AMOUNT = 9999999999999


class DonorDetailsForm(forms.Form):
    """Step 1 of the donation flow: who is donating and how much."""

    donor_name = forms.CharField(
        max_length=255,
        label='Nama Lengkap',
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Masukkan nama lengkap Anda'}),
    )
    phone_number = forms.CharField(
        max_length=32,
        label='Nomor WhatsApp',
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '08xxxxxxxxxx', 'type': 'tel'}),
    )
    amount = forms.IntegerField(
        label='Jumlah Donasi',
        max_value=MAX_DONATION_AMOUNT,
        error_messages={'max_value': 'Jumlah donasi terlalu besar'},
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '1000', 'placeholder': 'Atau masukkan jumlah custom'}),
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['amount'].widget.attrs['min'] = settings.DONATION_MIN_AMOUNT

    def clean_donor_name(self):
        name = ' '.join((self.cleaned_data.get('donor_name') or '').split())
        if not name:
            raise forms.ValidationError("Mohon lengkapi semua data terlebih dahulu")
        return name

    def clean_phone_number(self):
        phone = (self.cleaned_data.get('phone_number') or '').strip()
        if not phone:
            raise forms.ValidationError("Mohon lengkapi semua data terlebih dahulu")
        return phone

    def clean_amount(self):
        amount = self.cleaned_data.get('amount')
        minimum = settings.DONATION_MIN_AMOUNT
        if amount is None or amount < minimum:
            raise forms.ValidationError(
                f"Minimal donasi adalah Rp {minimum:,}".replace(',', '.')
            )
        return amount


class PaymentProofForm(forms.Form):
    """Step 3 of the donation flow: the transfer screenshot."""

    payment_proof = forms.FileField(
        label='Bukti Transfer',
        widget=forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': 'image/*'}),
        error_messages={'required': 'Mohon upload bukti transfer terlebih dahulu'},
    )

    def clean_payment_proof(self):
        """Validate file type and size"""
        file = self.cleaned_data.get('payment_proof')

        if file:
            content_type = getattr(file, 'content_type', '') or ''
            if not content_type.startswith('image/'):
                raise forms.ValidationError("File harus berupa gambar (JPG, PNG, dll)")

            max_size = settings.PAYMENT_PROOF_MAX_BYTES
            if file.size > max_size:
                raise forms.ValidationError(
                    f"Ukuran file maksimal {max_size / 1024 / 1024:.0f}MB"
                )

        return file
