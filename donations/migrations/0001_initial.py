import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Donation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('donor_name', models.CharField(max_length=255)),
                ('phone_number', models.CharField(max_length=32)),
                ('amount', models.PositiveBigIntegerField(help_text='Amount in rupiah')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('success', 'Berhasil'), ('rejected', 'Ditolak')], default='pending', max_length=20)),
                ('payment_proof', models.FileField(blank=True, max_length=255, upload_to='payment-proofs/')),
                ('qris_data', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('verified_at', models.DateTimeField(blank=True, null=True)),
                ('verified_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='verified_donations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'created_at'], name='donation_status_created_idx'),
                    models.Index(fields=['phone_number'], name='donation_phone_idx'),
                ],
            },
        ),
    ]
