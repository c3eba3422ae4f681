"""Serialise the currently filtered ledger tab as CSV or Excel."""

import csv
import io

from django.utils import timezone
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from services.filters import mask_phone_number

DONATION_HEADERS = ['Tanggal', 'Nama Donatur', 'Nomor HP', 'Jumlah', 'Status']
EXPENSE_HEADERS = ['Tanggal', 'Deskripsi', 'Lokasi', 'Jumlah']

# Leading characters a spreadsheet reads as the start of a formula
FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


def _text(value):
    """Prefix user-entered text with an apostrophe when a spreadsheet would evaluate it."""
    value = value or ''
    if value.startswith(FORMULA_PREFIXES):
        return "'" + value
    return value


def _date(value):
    return timezone.localtime(value).strftime('%d/%m/%Y')


def donation_rows(donations):
    for d in donations:
        yield [_date(d.created_at), _text(d.donor_name), _text(mask_phone_number(d.phone_number)), int(d.amount), d.status]


def expense_rows(expenses):
    for e in expenses:
        yield [_date(e.created_at), _text(e.description), _text(e.location), int(e.amount)]


def tab_table(tab, donations, expenses):
    """Return (headers, rows) for the requested tab."""
    if tab == 'expenses':
        return EXPENSE_HEADERS, list(expense_rows(expenses))
    return DONATION_HEADERS, list(donation_rows(donations))


def to_csv(headers, rows):
    """Quote fields so embedded commas, quotes and newlines survive a round trip."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator='\n')
    writer.writerow(headers)
    writer.writerows(rows)
    return buf.getvalue()


def to_xlsx(headers, rows, title):
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]

    header_fill = PatternFill(start_color="0066CC", end_color="0066CC", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF", size=11)
    header_alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

    for col_num, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col_num)
        cell.value = header
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = header_alignment

    for row in rows:
        ws.append(row)

    amount_col = headers.index('Jumlah') + 1
    for row in range(2, len(rows) + 2):
        ws.cell(row=row, column=amount_col).number_format = '#,##0'

    for i, header in enumerate(headers, 1):
        width = max([len(str(header))] + [len(str(r[i - 1])) for r in rows]) + 2
        ws.column_dimensions[get_column_letter(i)].width = min(width, 60)

    ws.freeze_panes = 'A2'

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
