"""
Test suite for QRIS payload generation
"""

from django.test import SimpleTestCase, override_settings

from services.qris import QRISError, crc16_ccitt, generate_qris, parse_qris, render_qr_png, tlv, verify_crc


class QRISTestCase(SimpleTestCase):

    def test_crc_check_value(self):
        # Standard CRC-16/CCITT-FALSE check value
        self.assertEqual(crc16_ccitt('123456789'), '29B1')

    def test_tlv_prefixes_length(self):
        self.assertEqual(tlv('58', 'ID'), '5802ID')
        self.assertEqual(tlv('54', 50000), '540550000')

    def test_tlv_rejects_long_values(self):
        with self.assertRaises(QRISError):
            tlv('59', 'x' * 100)

    def test_dynamic_payload_embeds_amount(self):
        payload = generate_qris(50000)
        fields = parse_qris(payload)
        self.assertEqual(fields['00'], '01')
        self.assertEqual(fields['01'], '12')
        self.assertEqual(fields['53'], '360')
        self.assertEqual(fields['54'], '50000')
        self.assertEqual(fields['58'], 'ID')
        self.assertTrue(payload.endswith(fields['63']))
        self.assertTrue(verify_crc(payload))

    def test_static_payload_has_no_amount(self):
        fields = parse_qris(generate_qris())
        self.assertEqual(fields['01'], '11')
        self.assertNotIn('54', fields)

    @override_settings(QRIS_MERCHANT_NAME='YAYASAN BERBAGI KEBAIKAN JUMAT BERKAH', QRIS_MERCHANT_CITY='KOTA TANGERANG SELATAN')
    def test_merchant_fields_are_truncated(self):
        fields = parse_qris(generate_qris(1000))
        self.assertEqual(len(fields['59']), 25)
        self.assertEqual(len(fields['60']), 15)

    def test_reference_goes_into_additional_data(self):
        fields = parse_qris(generate_qris(1000, reference='DON-42'))
        sub = parse_qris(fields['62'])
        self.assertEqual(sub['05'], 'DON-42')

    def test_tampered_payload_fails_crc(self):
        payload = generate_qris(10000)
        tampered = payload.replace('540510000', '540519000')
        self.assertFalse(verify_crc(tampered))
        self.assertFalse(verify_crc('short'))

    def test_non_positive_amount_is_rejected(self):
        with self.assertRaises(QRISError):
            generate_qris(0)

    def test_amount_longer_than_thirteen_digits_is_rejected(self):
        with self.assertRaises(QRISError):
            generate_qris(10 ** 13)

    def test_largest_amount_fits_tag_54(self):
        fields = parse_qris(generate_qris(10 ** 13 - 1))
        self.assertEqual(len(fields['54']), 13)

    def test_parse_rejects_truncated_payload(self):
        with self.assertRaises(QRISError):
            parse_qris('000201010')

    def test_render_returns_png_data_uri(self):
        self.assertTrue(render_qr_png(generate_qris(1000)).startswith('data:image/png;base64,'))
