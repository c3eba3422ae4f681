from django import forms
from django.conf import settings
from .models import Expense


class ExpenseForm(forms.ModelForm):
    """Form for recording an expense with an optional receipt image"""

    class Meta:
        model = Expense
        fields = ['amount', 'description', 'location', 'receipt']
        widgets = {
            'amount': forms.NumberInput(attrs={'class': 'form-control', 'min': 1, 'placeholder': '0'}),
            'description': forms.Textarea(attrs={'rows': 3, 'class': 'form-control', 'placeholder': 'Untuk apa dana digunakan'}),
            'location': forms.TextInput(attrs={'class': 'form-control'}),
            'receipt': forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': 'image/*'}),
        }
        labels = {
            'amount': 'Jumlah',
            'description': 'Deskripsi',
            'location': 'Lokasi',
            'receipt': 'Bukti Pengeluaran',
        }

    def clean_amount(self):
        amount = self.cleaned_data.get('amount')
        if amount is None or amount <= 0:
            raise forms.ValidationError("Jumlah harus lebih dari 0.")
        return amount

    def clean_receipt(self):
        receipt = self.cleaned_data.get('receipt')
        content_type = getattr(receipt, 'content_type', None)
        if content_type is not None and not content_type.startswith('image/'):
            raise forms.ValidationError("File harus berupa gambar (JPG, PNG, dll)")

        max_size = settings.PAYMENT_PROOF_MAX_BYTES
        if receipt and receipt.size > max_size:
            raise forms.ValidationError(
                f"Ukuran file maksimal {max_size / 1024 / 1024:.0f}MB"
            )
        return receipt
