"""
Test suite for the donation intake flow
"""

from unittest import mock

from django.contrib import admin as django_admin
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError
from django.test import TestCase, Client, override_settings
from django.urls import reverse

import tablib
from import_export.admin import ImportMixin

from audit.models import AuditLog
from donations.forms import DonorDetailsForm, MAX_DONATION_AMOUNT, PaymentProofForm
from donations.models import Donation
from donations.resources import DonationResource
from donations.services import DonationSubmissionError, random_proof_name, submit_donation
from donations.views import SESSION_KEY, STEP_DONE, STEP_PAYMENT, STEP_PROOF
from services.qris import parse_qris, verify_crc

User = get_user_model()


def proof_image(name='bukti.png', content=b'\x89PNG\r\n\x1a\nfake', content_type='image/png'):
    return SimpleUploadedFile(name, content, content_type=content_type)


class DonorDetailsFormTestCase(TestCase):
    """Validation of step 1"""

    def test_amount_below_minimum_is_rejected(self):
        form = DonorDetailsForm(data={'donor_name': 'Budi', 'phone_number': '081234567', 'amount': 999})
        self.assertFalse(form.is_valid())
        self.assertIn('Minimal donasi adalah Rp 1.000', form.errors['amount'][0])

    def test_minimum_amount_is_accepted(self):
        form = DonorDetailsForm(data={'donor_name': 'Budi', 'phone_number': '081234567', 'amount': 1000})
        self.assertTrue(form.is_valid())

    def test_name_whitespace_is_collapsed(self):
        form = DonorDetailsForm(data={'donor_name': '  Siti   Aminah ', 'phone_number': '0812', 'amount': 5000})
        self.assertTrue(form.is_valid())
        self.assertEqual(form.cleaned_data['donor_name'], 'Siti Aminah')

    def test_amount_above_qris_limit_is_rejected(self):
        form = DonorDetailsForm(data={'donor_name': 'Budi', 'phone_number': '0812', 'amount': MAX_DONATION_AMOUNT + 1})
        self.assertFalse(form.is_valid())
        self.assertIn('terlalu besar', form.errors['amount'][0])

    def test_largest_amount_is_accepted(self):
        form = DonorDetailsForm(data={'donor_name': 'Budi', 'phone_number': '0812', 'amount': MAX_DONATION_AMOUNT})
        self.assertTrue(form.is_valid())

    def test_all_fields_required(self):
        form = DonorDetailsForm(data={'donor_name': '', 'phone_number': '', 'amount': ''})
        self.assertFalse(form.is_valid())
        self.assertEqual(set(form.errors), {'donor_name', 'phone_number', 'amount'})


class PaymentProofFormTestCase(TestCase):
    """Validation of step 3"""

    def test_image_is_accepted(self):
        form = PaymentProofForm(data={}, files={'payment_proof': proof_image()})
        self.assertTrue(form.is_valid())

    def test_non_image_is_rejected(self):
        form = PaymentProofForm(data={}, files={'payment_proof': proof_image('bukti.pdf', b'%PDF', 'application/pdf')})
        self.assertFalse(form.is_valid())
        self.assertIn('gambar', form.errors['payment_proof'][0])

    @override_settings(PAYMENT_PROOF_MAX_BYTES=8)
    def test_oversized_image_is_rejected(self):
        form = PaymentProofForm(data={}, files={'payment_proof': proof_image(content=b'x' * 9)})
        self.assertFalse(form.is_valid())

    def test_missing_file_is_rejected(self):
        form = PaymentProofForm(data={}, files={})
        self.assertFalse(form.is_valid())


class SubmitDonationTestCase(TestCase):
    """Proof upload followed by the pending insert"""

    details = {'donor_name': 'Budi', 'phone_number': '081234567', 'amount': 50000}

    def test_random_proof_name_layout(self):
        name = random_proof_name('Screenshot 1.PNG')
        self.assertTrue(name.startswith('payment-proofs/'))
        self.assertTrue(name.endswith('.png'))
        stamp, token = name[len('payment-proofs/'):-len('.png')].split('-')
        self.assertTrue(stamp.isdigit())
        self.assertEqual(len(token), 11)

    def test_creates_pending_donation(self):
        donation = submit_donation(self.details, proof_image(), qris_data='000201')
        self.assertEqual(donation.status, Donation.STATUS_PENDING)
        self.assertEqual(donation.amount, 50000)
        self.assertEqual(donation.qris_data, '000201')
        self.assertTrue(donation.payment_proof.name.startswith('payment-proofs/'))
        self.assertTrue(donation.payment_proof.storage.exists(donation.payment_proof.name))

    def test_submission_is_audited(self):
        donation = submit_donation(self.details, proof_image())
        log = AuditLog.objects.get(donation_id=donation.id)
        self.assertEqual(log.action, 'Donation submitted')
        self.assertIsNone(log.user)

    def test_storage_failure_creates_nothing(self):
        with mock.patch('donations.services.default_storage.save', side_effect=OSError('disk full')):
            with self.assertRaises(DonationSubmissionError):
                submit_donation(self.details, proof_image())
        self.assertFalse(Donation.objects.exists())

    def test_audit_failure_rolls_back_donation(self):
        with mock.patch.object(AuditLog.objects, 'create', side_effect=DatabaseError('audit down')):
            with self.assertRaises(DonationSubmissionError):
                submit_donation(self.details, proof_image())
        self.assertFalse(Donation.objects.exists())

    def test_insert_failure_leaves_orphan_logged(self):
        with mock.patch.object(Donation.objects, 'create', side_effect=DatabaseError('down')):
            with self.assertLogs('donations.services', level='ERROR') as logs:
                with self.assertRaises(DonationSubmissionError):
                    submit_donation(self.details, proof_image())
        self.assertIn('left orphaned', logs.output[0])


class DonateViewTestCase(TestCase):
    """Walk through the four steps with the test client"""

    def setUp(self):
        self.client = Client()
        self.url = reverse('donations:donate')

    def _post_details(self, amount=25000):
        return self.client.post(self.url, {
            'action': 'details',
            'donor_name': 'Budi Santoso',
            'phone_number': '081234567890',
            'amount': amount,
        })

    def test_first_visit_shows_details_step(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['step'], 1)
        self.assertEqual(response.context['preset_amounts'], [10000, 25000, 50000, 100000, 250000, 500000])

    def test_below_minimum_never_touches_storage_or_database(self):
        with mock.patch('donations.services.default_storage.save') as save, \
                mock.patch('donations.views.submit_donation') as submit:
            response = self._post_details(amount=500)
        self.assertEqual(response.status_code, 200)
        self.assertFalse(save.called)
        self.assertFalse(submit.called)
        self.assertFalse(Donation.objects.exists())
        self.assertNotIn(SESSION_KEY, self.client.session)

    def test_details_step_stores_payment_code_with_amount(self):
        response = self._post_details()
        self.assertRedirects(response, self.url)
        flow = self.client.session[SESSION_KEY]
        self.assertEqual(flow['step'], STEP_PAYMENT)
        self.assertEqual(flow['details']['amount'], 25000)
        self.assertTrue(verify_crc(flow['qris_data']))
        self.assertEqual(parse_qris(flow['qris_data'])['54'], '25000')

        response = self.client.get(self.url)
        self.assertTrue(response.context['qr_code_url'].startswith('data:image/png;base64,'))

    def test_back_returns_to_previous_step(self):
        self._post_details()
        self.client.post(self.url, {'action': 'paid'})
        self.client.post(self.url, {'action': 'back'})
        self.assertEqual(self.client.session[SESSION_KEY]['step'], STEP_PAYMENT)

    def test_full_flow_creates_pending_donation(self):
        self._post_details()
        self.client.post(self.url, {'action': 'paid'})
        self.assertEqual(self.client.session[SESSION_KEY]['step'], STEP_PROOF)

        response = self.client.post(self.url, {'action': 'submit', 'payment_proof': proof_image()}, follow=True)
        self.assertEqual(response.context['step'], STEP_DONE)
        self.assertContains(response, 'Menunggu verifikasi admin')

        donation = Donation.objects.get()
        self.assertEqual(donation.donor_name, 'Budi Santoso')
        self.assertEqual(donation.status, Donation.STATUS_PENDING)
        self.assertTrue(verify_crc(donation.qris_data))

    def test_submit_rejects_non_image(self):
        self._post_details()
        self.client.post(self.url, {'action': 'paid'})
        response = self.client.post(self.url, {
            'action': 'submit',
            'payment_proof': proof_image('notes.txt', b'hello', 'text/plain'),
        })
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.context['proof_form'].errors)
        self.assertFalse(Donation.objects.exists())

    def test_submit_out_of_order_is_refused(self):
        response = self.client.post(self.url, {'action': 'submit', 'payment_proof': proof_image()}, follow=True)
        self.assertContains(response, 'Langkah donasi tidak valid')
        self.assertFalse(Donation.objects.exists())

    def test_reset_clears_flow(self):
        self._post_details()
        self.client.post(self.url, {'action': 'reset'})
        self.assertNotIn(SESSION_KEY, self.client.session)


class DonationVerifyTestCase(TestCase):
    """Status transitions on the model"""

    @classmethod
    def setUpTestData(cls):
        cls.admin = User.objects.create_superuser(username='admin', email='admin@example.com', password='admin123')

    def setUp(self):
        self.donation = Donation.objects.create(donor_name='Budi', phone_number='081234567', amount=10000)

    def test_pending_to_success(self):
        self.donation.verify(Donation.STATUS_SUCCESS, verified_by=self.admin)
        self.donation.refresh_from_db()
        self.assertEqual(self.donation.status, Donation.STATUS_SUCCESS)
        self.assertIsNotNone(self.donation.verified_at)
        self.assertEqual(self.donation.verified_by, self.admin)

    def test_pending_to_rejected_is_audited(self):
        self.donation.verify(Donation.STATUS_REJECTED, verified_by=self.admin)
        log = AuditLog.objects.filter(donation_id=self.donation.id).exclude(action='Donation submitted').get()
        self.assertEqual(log.user, self.admin)
        self.assertIn('pending', log.change_description)

    def test_decided_donation_cannot_change(self):
        self.donation.verify(Donation.STATUS_SUCCESS, verified_by=self.admin)
        with self.assertRaises(ValidationError):
            self.donation.verify(Donation.STATUS_REJECTED, verified_by=self.admin)

    def test_unknown_status_is_rejected(self):
        with self.assertRaises(ValidationError):
            self.donation.verify('approved')
        self.donation.refresh_from_db()
        self.assertTrue(self.donation.is_pending)

    def test_masked_phone(self):
        self.assertEqual(self.donation.masked_phone, '08xxxx567')


class DonationResourceTestCase(TestCase):
    """Spreadsheet round trips must not touch verification"""

    @classmethod
    def setUpTestData(cls):
        cls.admin = User.objects.create_superuser(username='admin', email='admin@example.com', password='admin123')

    def test_admin_is_export_only(self):
        self.assertNotIsInstance(django_admin.site._registry[Donation], ImportMixin)

    def test_import_cannot_revert_verified_status(self):
        donation = Donation.objects.create(donor_name='Budi', phone_number='081234567', amount=10000)
        donation.verify(Donation.STATUS_SUCCESS, verified_by=self.admin)

        exported = DonationResource().export(Donation.objects.filter(pk=donation.pk))
        row = list(exported[0])
        row[exported.headers.index('status')] = Donation.STATUS_PENDING
        row[exported.headers.index('verified_at')] = ''
        row[exported.headers.index('donor_name')] = 'Budi Santoso'
        dataset = tablib.Dataset(row, headers=exported.headers)

        result = DonationResource().import_data(dataset, raise_errors=True)

        self.assertFalse(result.has_errors())
        donation.refresh_from_db()
        self.assertEqual(donation.donor_name, 'Budi Santoso')
        self.assertEqual(donation.status, Donation.STATUS_SUCCESS)
        self.assertEqual(donation.verified_by, self.admin)
        self.assertIsNotNone(donation.verified_at)
