"""
QRIS payment code generation.

Builds an EMVCo merchant-presented payload (the format QRIS is based on):
a sequence of ``ID LL VALUE`` fields closed by tag 63, whose value is the
CRC-16/CCITT-FALSE of everything before it including ``6304``.
"""

import base64
import logging
from io import BytesIO

import qrcode
from qrcode.constants import ERROR_CORRECT_M
from django.conf import settings

logger = logging.getLogger(__name__)

PAYLOAD_FORMAT = '01'
STATIC_INITIATION = '11'
DYNAMIC_INITIATION = '12'
CURRENCY_IDR = '360'
COUNTRY_ID = 'ID'
CRC_TAG = '6304'
MAX_AMOUNT_LENGTH = 13


class QRISError(ValueError):
    pass


def tlv(tag: str, value) -> str:
    value = str(value)
    if len(value) > 99:
        raise QRISError(f"Field {tag} is too long ({len(value)} chars)")
    return f"{tag}{len(value):02d}{value}"


def crc16_ccitt(data: str) -> str:
    crc = 0xFFFF
    for byte in data.encode('utf-8'):
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ 0x1021) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return f"{crc:04X}"


def generate_qris(amount=None, reference: str = '') -> str:
    """
    Build the QRIS payload for a donation.

    Args:
        amount: rupiah amount to embed; ``None`` produces a static code
        reference: optional bill/reference label (tag 62, sub-tag 05)

    Returns:
        The payload string, checksum included.
    """
    if amount is not None and int(amount) <= 0:
        raise QRISError("Amount must be positive")
    if amount is not None and len(str(int(amount))) > MAX_AMOUNT_LENGTH:
        raise QRISError(f"Amount has more than {MAX_AMOUNT_LENGTH} digits")

    merchant_account = ''.join([
        tlv('00', settings.QRIS_ACQUIRER_GUID),
        tlv('01', settings.QRIS_MERCHANT_ID),
        tlv('02', settings.QRIS_TERMINAL_ID),
        tlv('03', 'UMI'),
    ])
    additional = tlv('07', settings.QRIS_TERMINAL_ID)
    if reference:
        additional = tlv('05', reference[:25]) + additional

    fields = [
        tlv('00', PAYLOAD_FORMAT),
        tlv('01', STATIC_INITIATION if amount is None else DYNAMIC_INITIATION),
        tlv('26', merchant_account),
        tlv('52', settings.QRIS_MCC),
        tlv('53', CURRENCY_IDR),
    ]
    if amount is not None:
        fields.append(tlv('54', int(amount)))
    fields.extend([
        tlv('58', COUNTRY_ID),
        tlv('59', settings.QRIS_MERCHANT_NAME[:25]),
        tlv('60', settings.QRIS_MERCHANT_CITY[:15]),
        tlv('61', settings.QRIS_POSTAL_CODE),
        tlv('62', additional),
    ])
    body = ''.join(fields) + CRC_TAG
    return body + crc16_ccitt(body)


def parse_qris(payload: str) -> dict:
    """Split a payload into its top-level fields: {tag: value}."""
    fields = {}
    pos = 0
    while pos < len(payload):
        if pos + 4 > len(payload):
            raise QRISError(f"Truncated field at offset {pos}")
        tag = payload[pos:pos + 2]
        try:
            length = int(payload[pos + 2:pos + 4])
        except ValueError:
            raise QRISError(f"Invalid length for tag {tag}")
        value = payload[pos + 4:pos + 4 + length]
        if len(value) != length:
            raise QRISError(f"Truncated value for tag {tag}")
        fields[tag] = value
        pos += 4 + length
    return fields


def verify_crc(payload: str) -> bool:
    if len(payload) < 8 or payload[-8:-4] != CRC_TAG:
        return False
    return crc16_ccitt(payload[:-4]) == payload[-4:].upper()


def render_qr_png(payload: str, box_size: int = 10, border: int = 2) -> str:
    """Render the payload as a PNG and return it as a data URI for <img src>."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color='#1E293B', back_color='#FFFFFF')

    buf = BytesIO()
    img.save(buf, format='PNG')
    encoded = base64.b64encode(buf.getvalue()).decode('ascii')
    return f"data:image/png;base64,{encoded}"
